from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the batch error log.

One record per failed batch. Serialised as a JSON Lines object with a fixed
key set (timestamp, source, error_type, message); see
``phase_timeline/config/error_log_schema.json``.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: input the batch came from (file name, or "<manual>")
        error_type: UPPER_SNAKE classification, e.g. INVALID_DATE_RANGE
        message: human readable failure description
    """
    timestamp: str  # ISO8601 UTC
    source: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(source: str, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(timestamp=ts, source=source, error_type=error_type, message=message)

    @staticmethod
    def from_exception(source: str, exc: Exception) -> ErrorRecord:
        """Build a record from a validation (or config) exception.

        Exceptions without an ``error_type`` attribute are classified by their
        class name, e.g. ConfigError -> CONFIG_ERROR.
        """
        error_type = getattr(exc, "error_type", None) or _upper_snake(type(exc).__name__)
        return ErrorRecord.create(source=source, error_type=error_type, message=str(exc))

    def to_json_line(self) -> str:
        # dataclass -> dict keeps the key set fixed
        return json.dumps(asdict(self), ensure_ascii=False)


def _upper_snake(name: str) -> str:
    out: list[str] = []
    for i, ch in enumerate(name):
        if ch.isupper() and i > 0 and not name[i - 1].isupper():
            out.append("_")
        out.append(ch.upper())
    return "".join(out)
