"""Domain models for the phase timeline builder.

Tabular input is described by FieldMapping / ResolvedIndices / MappingRequired,
validated rows by ParsedEntry, and delivered output by TimelineRecord.
"""

from .error_record import ErrorRecord
from .errors import (
    EmptyDataset,
    InvalidDateFormat,
    InvalidDateRange,
    InvalidManualEntry,
    InvalidMapping,
    TimelineValidationError,
)
from .field_mapping import DEFAULT_MAPPING, FieldMapping, MappingRequired, ResolvedIndices
from .processing_result import BatchStatus, FileStat, PipelineResult, RunResult, TimelineResult
from .timeline import ManualEntry, ParsedEntry, TimelineRecord

__all__ = [
    # Mapping models
    "DEFAULT_MAPPING",
    "FieldMapping",
    "MappingRequired",
    "ResolvedIndices",
    # Timeline models
    "ManualEntry",
    "ParsedEntry",
    "TimelineRecord",
    # Results
    "BatchStatus",
    "FileStat",
    "PipelineResult",
    "RunResult",
    "TimelineResult",
    # Errors
    "ErrorRecord",
    "EmptyDataset",
    "InvalidDateFormat",
    "InvalidDateRange",
    "InvalidManualEntry",
    "InvalidMapping",
    "TimelineValidationError",
]
