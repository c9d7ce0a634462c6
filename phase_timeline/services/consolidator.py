from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from ..models.errors import EmptyDataset, InvalidDateFormat, InvalidDateRange
from ..models.field_mapping import ResolvedIndices
from ..models.timeline import ParsedEntry, TimelineRecord
from .dates import is_adjacent_or_overlapping, parse_calendar_date

"""Timeline consolidation.

Turns parsed table rows into one TimelineRecord per phase:

1. validate every data row (whole batch fails on the first bad date / range)
2. group by exact phase name, keeping first-appearance order
3. stable-sort each group by start date
4. merge overlapping or one-day-adjacent intervals
5. emit the FIRST merged range of each phase

Step 5 drops later disjoint ranges of a phase. That is the established output
contract; every range is still available through merge_entries(), and the drop
is logged as a warning.
"""

__all__ = [
    "MergedRange",
    "consolidate",
    "merge_entries",
    "validate_rows",
]

logger = logging.getLogger(__name__)

DATE_FORMAT_MESSAGE = "invalid date format found; all dates must be YYYY-MM-DD"


@dataclass
class MergedRange:
    """Mutable accumulator used while merging one phase's entries."""
    start_date: date
    end_date: date
    additional_data: dict[str, str] = field(default_factory=dict)

    def absorb(self, entry: ParsedEntry) -> None:
        if entry.end_date > self.end_date:
            self.end_date = entry.end_date
        self.additional_data = {**self.additional_data, **entry.additional_data}


def _cell(row: Sequence[str], index: int) -> str:
    return row[index] if index < len(row) else ""


def validate_rows(rows: Sequence[Sequence[str]], indices: ResolvedIndices) -> list[ParsedEntry]:
    """Validate data rows (``rows[0]`` is the header and is skipped).

    Rows with an empty phase are dropped silently. Any unparsable date raises
    InvalidDateFormat, any end-before-start raises InvalidDateRange; both fail
    the entire batch.
    """
    extra_columns = indices.extra_columns
    entries: list[ParsedEntry] = []
    for row_number, row in enumerate(rows[1:], start=1):
        phase = _cell(row, indices.phase)
        if not phase:
            logger.debug(f"data row {row_number}: empty phase, skipped")
            continue

        start = parse_calendar_date(_cell(row, indices.start_date))
        end = parse_calendar_date(_cell(row, indices.end_date))
        if start is None or end is None:
            raise InvalidDateFormat(f"{DATE_FORMAT_MESSAGE} (data row {row_number}, phase \"{phase}\")")
        if end < start:
            raise InvalidDateRange(phase)

        entries.append(
            ParsedEntry(
                phase=phase,
                start_date=start,
                end_date=end,
                additional_data={header: _cell(row, i) for i, header in extra_columns},
                row_number=row_number,
            )
        )
    return entries


def merge_entries(entries: Sequence[ParsedEntry]) -> list[MergedRange]:
    """Merge one phase's entries into non-overlapping, non-adjacent ranges.

    Entries are stable-sorted by start date first, so ties keep row order and
    later rows win on additional_data key collisions.
    """
    merged: list[MergedRange] = []
    for entry in sorted(entries, key=lambda e: e.start_date):
        if merged and is_adjacent_or_overlapping(merged[-1].end_date, entry.start_date):
            merged[-1].absorb(entry)
            continue
        merged.append(
            MergedRange(
                start_date=entry.start_date,
                end_date=entry.end_date,
                additional_data=dict(entry.additional_data),
            )
        )
    return merged


def consolidate(rows: Sequence[Sequence[str]], indices: ResolvedIndices) -> list[TimelineRecord]:
    """Validate, group and merge rows into one TimelineRecord per phase.

    Raises:
        InvalidDateFormat: a start/end cell is not a real YYYY-MM-DD date
        InvalidDateRange: a row ends before it starts
        EmptyDataset: no row with a non-empty phase
    """
    entries = validate_rows(rows, indices)
    if not entries:
        raise EmptyDataset("no data rows found to create a timeline")

    groups: dict[str, list[ParsedEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.phase, []).append(entry)

    records: list[TimelineRecord] = []
    for phase, group in groups.items():
        ranges = merge_entries(group)
        if len(ranges) > 1:
            logger.warning(
                f'phase "{phase}": {len(ranges) - 1} disjoint range(s) after '
                f"{ranges[0].end_date.isoformat()} dropped, keeping first range only"
            )
        first = ranges[0]
        records.append(
            TimelineRecord(
                phase=phase,
                start_date=first.start_date,
                end_date=first.end_date,
                additional_data=first.additional_data,
            )
        )

    if not records:
        raise EmptyDataset("no valid timeline data could be created")
    logger.debug(f"consolidated {len(entries)} rows into {len(records)} phases")
    return records
