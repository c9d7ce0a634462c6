from .parser import parse_table, preview_rows, read_text_file, resolve_mapping

__all__ = ["parse_table", "preview_rows", "read_text_file", "resolve_mapping"]
