from __future__ import annotations

"""Validation error taxonomy for timeline batches.

Every error here is terminal for the batch being processed: no partial
timeline is ever produced. ``error_type`` is the UPPER_SNAKE code written to
the JSON Lines error log (see ``phase_timeline.logging.error_log``).

``MappingRequired`` is deliberately NOT part of this hierarchy; it is a
returned signal, defined in ``phase_timeline.models.field_mapping``.
"""

__all__ = [
    "TimelineValidationError",
    "InvalidMapping",
    "InvalidDateFormat",
    "InvalidDateRange",
    "EmptyDataset",
    "InvalidManualEntry",
]


class TimelineValidationError(Exception):
    """Base class for whole-batch validation failures."""

    error_type = "VALIDATION_ERROR"


class InvalidMapping(TimelineValidationError):
    """Raised when a caller-selected field mapping does not match the header."""

    error_type = "INVALID_MAPPING"


class InvalidDateFormat(TimelineValidationError):
    """Raised when a date cell is not a real YYYY-MM-DD calendar date."""

    error_type = "INVALID_DATE_FORMAT"


class InvalidDateRange(TimelineValidationError):
    """Raised when a row's end date precedes its start date."""

    error_type = "INVALID_DATE_RANGE"

    def __init__(self, phase: str, message: str | None = None) -> None:
        self.phase = phase
        super().__init__(
            message or f'invalid date range for phase "{phase}": end date is before start date'
        )


class EmptyDataset(TimelineValidationError):
    """Raised when no usable rows remain after validation."""

    error_type = "EMPTY_DATASET"


class InvalidManualEntry(TimelineValidationError):
    """Raised when a manually entered record is incomplete or out of order."""

    error_type = "INVALID_MANUAL_ENTRY"
