from __future__ import annotations

import logging

from ..models.field_mapping import FieldMapping, MappingRequired
from ..models.processing_result import PipelineResult, TimelineResult
from ..tabular.parser import parse_table, resolve_mapping
from .consolidator import consolidate

"""Single-batch pipeline: raw text -> table -> indices -> timeline.

Returns MappingRequired when the default columns are absent and no mapping was
given. Validation failures propagate as TimelineValidationError subclasses;
nothing is returned for a failed batch.
"""

__all__ = [
    "process_text",
]

logger = logging.getLogger(__name__)


def process_text(
    text: str,
    mapping: FieldMapping | None = None,
    *,
    source: str = "<text>",
) -> PipelineResult:
    table = parse_table(text)
    headers = table[0] if table else []
    resolved = resolve_mapping(headers, mapping)
    if isinstance(resolved, MappingRequired):
        logger.info(f"{source}: mapping required, headers={list(resolved.headers)}")
        return resolved

    records = consolidate(table, resolved)
    logger.info(f"{source}: {len(table) - 1} rows -> {len(records)} phases")
    return TimelineResult(source=source, records=tuple(records))
