"""Core services: date helpers, consolidation, manual entries, pipeline, export."""

from .consolidator import consolidate, merge_entries, validate_rows
from .manual_entry import normalize_manual_entries
from .pipeline import process_text

__all__ = [
    "consolidate",
    "merge_entries",
    "normalize_manual_entries",
    "process_text",
    "validate_rows",
]
