from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Union

from .field_mapping import MappingRequired
from .timeline import TimelineRecord

"""Processing result models.

TimelineResult is what the pipeline hands back for one batch of text.
FileStat / RunResult aggregate per-file outcomes for the CLI SUMMARY line.
"""

__all__ = [
    "BatchStatus",
    "FileStat",
    "PipelineResult",
    "RunResult",
    "TimelineResult",
]


@dataclass(frozen=True)
class TimelineResult:
    """Successful consolidation of one batch."""
    source: str  # file name or "<text>"
    records: tuple[TimelineRecord, ...]

    @property
    def phases(self) -> list[str]:
        return [r.phase for r in self.records]


PipelineResult = Union[TimelineResult, MappingRequired]


class BatchStatus(Enum):
    """Outcome of one input batch.

    - SUCCESS: timeline produced
    - FAILED: terminal validation error, nothing produced
    - MAPPING_REQUIRED: default columns absent and no mapping supplied
    """
    SUCCESS = "success"
    FAILED = "failed"
    MAPPING_REQUIRED = "mapping_required"


@dataclass(frozen=True)
class FileStat:
    source: str
    status: BatchStatus
    phases: int = 0
    start_date: date | None = None  # earliest start across records
    end_date: date | None = None  # latest end across records
    error_type: str | None = None


@dataclass(frozen=True)
class RunResult:
    """Aggregated outcome of a CLI run over one or more inputs."""
    file_stats: tuple[FileStat, ...]

    def _count(self, status: BatchStatus) -> int:
        return sum(1 for s in self.file_stats if s.status is status)

    @property
    def success_files(self) -> int:
        return self._count(BatchStatus.SUCCESS)

    @property
    def failed_files(self) -> int:
        return self._count(BatchStatus.FAILED)

    @property
    def mapping_required_files(self) -> int:
        return self._count(BatchStatus.MAPPING_REQUIRED)

    @property
    def total_phases(self) -> int:
        return sum(s.phases for s in self.file_stats)

    @property
    def span(self) -> tuple[date, date] | None:
        starts = [s.start_date for s in self.file_stats if s.start_date is not None]
        ends = [s.end_date for s in self.file_stats if s.end_date is not None]
        if not starts or not ends:
            return None
        return min(starts), max(ends)
