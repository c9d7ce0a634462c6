"""Phase timeline builder.

Normalizes CSV text (or hand-entered month ranges) into one consolidated date
interval per phase.
"""

from .models import (
    FieldMapping,
    MappingRequired,
    TimelineRecord,
    TimelineResult,
    TimelineValidationError,
)
from .services import consolidate, normalize_manual_entries, process_text
from .tabular import parse_table, resolve_mapping

__version__ = "0.1.0"

__all__ = [
    "FieldMapping",
    "MappingRequired",
    "TimelineRecord",
    "TimelineResult",
    "TimelineValidationError",
    "consolidate",
    "normalize_manual_entries",
    "parse_table",
    "process_text",
    "resolve_mapping",
]
