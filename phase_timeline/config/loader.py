from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.errors import InvalidManualEntry
from ..models.field_mapping import FieldMapping
from ..models.timeline import ManualEntry

"""Config loader.

Responsibilities:
- Load YAML config (default ``config/timeline.yml``)
- Validate against the bundled JSON schema (additionalProperties: false)
- Apply defaults (preview_rows=5, unique_phases=False, error_log_directory=./logs)
- Load manual-entry YAML files for the ``manual`` command
"""

_config_dir = Path(__file__).parent
SCHEMA_PATH = _config_dir / "config_schema.json"
MANUAL_ENTRIES_SCHEMA_PATH = _config_dir / "manual_entries_schema.json"
ERROR_LOG_SCHEMA_PATH = _config_dir / "error_log_schema.json"

DEFAULT_CONFIG_PATH = Path("config/timeline.yml")
CONFIG_PATH_ENV = "PHASE_TIMELINE_CONFIG"

DEFAULT_PREVIEW_ROWS = 5
DEFAULT_ERROR_LOG_DIRECTORY = "./logs"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ManualEntryConfig:
    year: int | None = None  # None -> current calendar year
    unique_phases: bool = False


@dataclass(frozen=True)
class TimelineConfig:
    field_mapping: FieldMapping | None = None  # None -> default columns, then ask
    preview_rows: int = DEFAULT_PREVIEW_ROWS
    manual_entry: ManualEntryConfig = ManualEntryConfig()
    error_log_directory: str = DEFAULT_ERROR_LOG_DIRECTORY


def _load_schema(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"schema not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: schema missing/unreadable, or data violates it
    """
    schema = _load_schema(SCHEMA_PATH)
    try:
        jsonschema.validate(data, schema)
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(explicit: str | None = None) -> tuple[Path, bool]:
    """Return (path, required).

    Priority: explicit --config, then $PHASE_TIMELINE_CONFIG, then the default
    location. Only the default location may be absent.
    """
    if explicit:
        return Path(explicit), True
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path), True
    return DEFAULT_CONFIG_PATH, False


def load_config(path: Path, required: bool = True) -> TimelineConfig:
    if not path.exists():
        if required:
            raise ConfigError(f"config file not found: {path}")
        return TimelineConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    mapping_raw = data.get("field_mapping")
    manual_raw = data.get("manual_entry", {})
    return TimelineConfig(
        field_mapping=FieldMapping.from_dict(mapping_raw) if mapping_raw else None,
        preview_rows=data.get("preview_rows", DEFAULT_PREVIEW_ROWS),
        manual_entry=ManualEntryConfig(
            year=manual_raw.get("year"),
            unique_phases=manual_raw.get("unique_phases", False),
        ),
        error_log_directory=data.get("error_log_directory", DEFAULT_ERROR_LOG_DIRECTORY),
    )


def load_manual_entries(path: Path) -> list[ManualEntry]:
    """Load a YAML list of ``{phase, startMonth, endMonth, description}``.

    Raises:
        ConfigError: file missing or not YAML
        InvalidManualEntry: content does not have the expected shape
    """
    if not path.exists():
        raise ConfigError(f"manual entries file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    schema = _load_schema(MANUAL_ENTRIES_SCHEMA_PATH)
    try:
        jsonschema.validate(data, schema)
    except ValidationError as e:
        raise InvalidManualEntry(f"manual entries file invalid: {e.message}") from e
    return [ManualEntry.from_dict(item) for item in data]
