from __future__ import annotations

import re
from datetime import date, timedelta

"""Calendar-date helpers shared by the consolidator and the manual normalizer.

Only one textual format is accepted: ``YYYY-MM-DD`` with exactly four, two and
two digits. No locale handling, no time component.
"""

__all__ = [
    "DATE_PATTERN",
    "first_of_month",
    "is_adjacent_or_overlapping",
    "parse_calendar_date",
]

DATE_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
ONE_DAY = timedelta(days=1)


def parse_calendar_date(value: str | None) -> date | None:
    """Return the date for a ``YYYY-MM-DD`` string, or None if it is not one.

    Both shape (2024-1-5 is rejected) and calendar validity (2024-02-30,
    2024-13-01 are rejected) are checked.
    """
    if value is None:
        return None
    m = DATE_PATTERN.fullmatch(value)
    if m is None:
        return None
    year, month, day = (int(g) for g in m.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def is_adjacent_or_overlapping(current_end: date, next_start: date) -> bool:
    """True when an interval starting at ``next_start`` joins one ending at ``current_end``.

    Overlap includes touching on the same day; adjacency is a start exactly one
    day after the current end.
    """
    if current_end == date.max:
        return True
    return next_start <= current_end + ONE_DAY


def first_of_month(year: int, month_index: int) -> date:
    """First day of a 0-based month (0 = January)."""
    return date(year, month_index + 1, 1)
