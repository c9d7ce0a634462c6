from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ..models.errors import InvalidMapping
from ..models.field_mapping import DEFAULT_MAPPING, FieldMapping, MappingRequired, ResolvedIndices

"""Tabular text parser.

- First non-blank line is the header, remaining non-blank lines are data rows.
- Fields are split on a literal comma and whitespace-trimmed. Quoted fields
  containing commas are not supported.
- Column resolution: default names (phase/startDate/endDate) when the caller
  gives no mapping, otherwise the caller's mapping must resolve completely.
"""

__all__ = [
    "DELIMITER",
    "RawTable",
    "parse_table",
    "preview_rows",
    "read_text_file",
    "resolve_mapping",
]

DELIMITER = ","
_BOM = "\ufeff"

RawTable = list[list[str]]


def read_text_file(path: Path) -> str:
    """Read an uploaded file as UTF-8 text (BOM tolerated)."""
    return path.read_text(encoding="utf-8-sig")


def _split_line(line: str) -> list[str]:
    return [cell.strip() for cell in line.split(DELIMITER)]


def parse_table(text: str) -> RawTable:
    """Split raw delimited text into header row + data rows.

    Lines that are empty after trimming are not rows, so a trailing newline
    (or CRLF line endings) never yields a phantom record. Only "\\n" ends a
    line; a stray "\\r" is removed by the cell trim, and other separators such
    as form feed or U+2028 stay inside their cell. An input without a
    single non-blank line gives an empty table.
    """
    if text.startswith(_BOM):
        text = text[len(_BOM):]
    return [_split_line(line) for line in text.split("\n") if line.strip()]


def _index_of(headers: Sequence[str], name: str) -> int:
    try:
        return list(headers).index(name)
    except ValueError:
        return -1


def resolve_mapping(
    headers: Sequence[str], mapping: FieldMapping | None = None
) -> ResolvedIndices | MappingRequired:
    """Resolve phase/start/end header indices.

    Without a mapping the default column names are tried; if any is missing a
    MappingRequired signal carrying the headers is returned so the caller can
    ask for a mapping and call again.

    With a mapping every named column must exist, otherwise InvalidMapping is
    raised. That path never returns MappingRequired.
    """
    header_tuple = tuple(headers)
    selected = mapping or DEFAULT_MAPPING
    phase = _index_of(header_tuple, selected.phase)
    start = _index_of(header_tuple, selected.start_date)
    end = _index_of(header_tuple, selected.end_date)

    if -1 in (phase, start, end):
        if mapping is None:
            return MappingRequired(headers=header_tuple)
        missing = [
            name
            for name, idx in (
                (selected.phase, phase),
                (selected.start_date, start),
                (selected.end_date, end),
            )
            if idx == -1
        ]
        raise InvalidMapping(
            f"selected fields are not valid in this table: {missing} not in headers {list(header_tuple)}"
        )
    return ResolvedIndices(headers=header_tuple, phase=phase, start_date=start, end_date=end)


def preview_rows(table: RawTable, limit: int = 5) -> list[list[str]]:
    """Header plus the first ``limit`` data rows, for display before mapping."""
    if limit < 0:
        raise ValueError("preview limit must be >= 0")
    return [list(row) for row in table[: limit + 1]]
