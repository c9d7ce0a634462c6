from __future__ import annotations
import json
from pathlib import Path
from phase_timeline.logging.error_log import ErrorLogBuffer, ErrorRecord


def test_error_log_buffer_flush(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "logs")
    buf.append(ErrorRecord.create("a.csv", "INVALID_DATE_FORMAT", "bad date"))
    buf.append(ErrorRecord.create("b.csv", "EMPTY_DATASET", "no rows"))
    path = buf.flush()
    assert path is not None and path.exists()
    assert path.parent == temp_workdir / "logs"
    assert path.name.startswith("errors-") and path.suffix == ".log"
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        assert set(json.loads(raw).keys()) == {"timestamp", "source", "error_type", "message"}
    assert len(buf) == 0


def test_error_log_buffer_empty_flush_creates_nothing(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "logs")
    assert buf.flush() is None
    assert not (temp_workdir / "logs").exists()


def test_error_log_buffer_multiple_flushes_append(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "logs")
    buf.append(ErrorRecord.create("a.csv", "EMPTY_DATASET", "x"))
    path = buf.flush()
    size1 = path.stat().st_size
    buf.append(ErrorRecord.create("a.csv", "EMPTY_DATASET", "y"))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1
