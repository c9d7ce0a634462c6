from __future__ import annotations

from dataclasses import dataclass

"""Field mapping models.

A FieldMapping names the header columns holding the phase, start date and end
date. Resolving it against a concrete header row yields either ResolvedIndices
or a MappingRequired signal (no usable default columns, ask the user).
"""

__all__ = [
    "DEFAULT_MAPPING",
    "FieldMapping",
    "MappingRequired",
    "ResolvedIndices",
]


@dataclass(frozen=True)
class FieldMapping:
    """Column names for the three semantic fields.

    Keys in YAML config use the camelCase names ``phase`` / ``startDate`` /
    ``endDate``; see ``from_dict``.
    """
    phase: str
    start_date: str
    end_date: str

    @staticmethod
    def from_dict(data: dict[str, str]) -> FieldMapping:
        return FieldMapping(
            phase=data["phase"],
            start_date=data["startDate"],
            end_date=data["endDate"],
        )

    def to_dict(self) -> dict[str, str]:
        return {"phase": self.phase, "startDate": self.start_date, "endDate": self.end_date}


DEFAULT_MAPPING = FieldMapping(phase="phase", start_date="startDate", end_date="endDate")


@dataclass(frozen=True)
class ResolvedIndices:
    """Header indices for a mapping that resolved against a table."""
    headers: tuple[str, ...]
    phase: int
    start_date: int
    end_date: int

    @property
    def extra_columns(self) -> list[tuple[int, str]]:
        """(index, header) pairs for every column outside the mapped three."""
        mapped = {self.phase, self.start_date, self.end_date}
        return [(i, h) for i, h in enumerate(self.headers) if i not in mapped]


@dataclass(frozen=True)
class MappingRequired:
    """Signal: default columns are absent, the caller must supply a mapping."""
    headers: tuple[str, ...]
