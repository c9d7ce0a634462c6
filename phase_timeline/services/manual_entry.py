from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from ..models.errors import InvalidManualEntry
from ..models.timeline import ManualEntry, TimelineRecord
from .dates import first_of_month

"""Manual entry normalizer.

Hand-entered phases cover whole months of a single calendar year. Each entry
maps straight to a TimelineRecord (first day of start month .. first day of
end month); entries are not merged. Duplicate phase names are kept unless the
caller asks for uniqueness.
"""

__all__ = [
    "normalize_manual_entries",
]

logger = logging.getLogger(__name__)

_MONTH_RANGE = range(0, 12)
_YEAR_RANGE = range(date.min.year, date.max.year + 1)


def _validate(entry: ManualEntry, position: int) -> None:
    if not entry.phase.strip():
        raise InvalidManualEntry(f"entry {position}: phase is required")
    for label, month in (("start month", entry.start_month), ("end month", entry.end_month)):
        if not isinstance(month, int) or isinstance(month, bool) or month not in _MONTH_RANGE:
            raise InvalidManualEntry(f"entry {position}: {label} must be 0-11, got {month!r}")
    if entry.start_month > entry.end_month:
        raise InvalidManualEntry(
            f'entry {position} ("{entry.phase}"): start month must not be after end month'
        )


def normalize_manual_entries(
    entries: Iterable[ManualEntry],
    year: int | None = None,
    *,
    unique_phases: bool = False,
) -> list[TimelineRecord]:
    """Validate manual entries and convert them to timeline records.

    Args:
        entries: entries in display order
        year: calendar year for all dates (default: current year)
        unique_phases: reject a repeated phase name instead of emitting duplicates

    Raises:
        InvalidManualEntry: any entry invalid or year out of range; nothing is
            returned in that case
    """
    if year is not None and (not isinstance(year, int) or isinstance(year, bool) or year not in _YEAR_RANGE):
        raise InvalidManualEntry(f"year must be {date.min.year}-{date.max.year}, got {year!r}")

    items = list(entries)
    for position, entry in enumerate(items, start=1):
        _validate(entry, position)

    if unique_phases:
        seen: set[str] = set()
        for position, entry in enumerate(items, start=1):
            if entry.phase in seen:
                raise InvalidManualEntry(f'entry {position}: duplicate phase "{entry.phase}"')
            seen.add(entry.phase)

    target_year = year if year is not None else date.today().year
    records = [
        TimelineRecord(
            phase=entry.phase,
            start_date=first_of_month(target_year, entry.start_month),
            end_date=first_of_month(target_year, entry.end_month),
            additional_data={"description": entry.description} if entry.description else {},
        )
        for entry in items
    ]
    logger.debug(f"normalized {len(records)} manual entries for {target_year}")
    return records
