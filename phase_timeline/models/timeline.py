from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType

"""Timeline domain models.

ParsedEntry is the validated form of one CSV data row; it lives only for the
duration of one consolidate() call. TimelineRecord is the delivered output and
is immutable: additional_data is exposed as a read-only mapping so a delivered
timeline cannot be edited in place.
"""

__all__ = [
    "ManualEntry",
    "ParsedEntry",
    "TimelineRecord",
]


def _frozen_mapping(data: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(data or {}))


@dataclass(frozen=True)
class ParsedEntry:
    """One validated data row (start_date <= end_date guaranteed by the validator)."""
    phase: str
    start_date: date
    end_date: date
    additional_data: dict[str, str] = field(default_factory=dict)
    row_number: int = 0  # 1-based among non-blank data rows, not a file line


@dataclass(frozen=True)
class TimelineRecord:
    """Consolidated interval for one phase."""
    phase: str
    start_date: date
    end_date: date
    additional_data: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # frozen dataclass: bypass __setattr__ to swap in the read-only view
        object.__setattr__(self, "additional_data", _frozen_mapping(self.additional_data))

    def to_dict(self) -> dict[str, object]:
        return {
            "phase": self.phase,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "additionalData": dict(self.additional_data),
        }


@dataclass(frozen=True)
class ManualEntry:
    """Hand-entered phase spanning whole months (months are 0-based: 0=January)."""
    phase: str
    start_month: int
    end_month: int
    description: str = ""

    @staticmethod
    def from_dict(data: Mapping[str, object]) -> ManualEntry:
        """Build from the camelCase keys used by manual-entry YAML files."""
        return ManualEntry(
            phase=str(data.get("phase") or ""),
            start_month=data.get("startMonth", 0),  # type: ignore[arg-type]
            end_month=data.get("endMonth", 11),  # type: ignore[arg-type]
            description=str(data.get("description") or ""),
        )
