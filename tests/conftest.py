# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from phase_timeline.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("PHASE_TIMELINE_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """field_mapping:
  phase: Stage
  startDate: Begin
  endDate: Finish
preview_rows: 3
manual_entry:
  year: 2024
  unique_phases: false
error_log_directory: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "timeline.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def default_csv_text() -> str:
    return (
        "phase,startDate,endDate,owner\n"
        "Design,2024-01-01,2024-01-10,alice\n"
        "Build,2024-02-01,2024-03-15,bob\n"
        "Design,2024-01-11,2024-01-20,carol\n"
    )


@pytest.fixture()
def write_csv(temp_workdir: Path):
    def _write(name: str, text: str) -> Path:
        path = temp_workdir / "data" / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
