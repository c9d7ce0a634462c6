from __future__ import annotations

import json

from phase_timeline.config.loader import ConfigError
from phase_timeline.models.error_record import ErrorRecord
from phase_timeline.models.errors import InvalidDateRange

"""Unit tests for ErrorRecord model."""


def test_error_record_json_line_has_fixed_keys():
    rec = ErrorRecord.create(source="plan.csv", error_type="EMPTY_DATASET", message="no data rows")
    data = json.loads(rec.to_json_line())
    assert set(data.keys()) == {"timestamp", "source", "error_type", "message"}
    assert data["timestamp"].endswith("Z")
    assert data["source"] == "plan.csv"


def test_error_record_from_validation_error():
    rec = ErrorRecord.from_exception("plan.csv", InvalidDateRange("Build"))
    assert rec.error_type == "INVALID_DATE_RANGE"
    assert '"Build"' in rec.message


def test_error_record_from_other_exception_uses_class_name():
    rec = ErrorRecord.from_exception("plan.csv", ConfigError("bad"))
    assert rec.error_type == "CONFIG_ERROR"


def test_error_record_keeps_non_ascii():
    rec = ErrorRecord.create("計画.csv", "EMPTY_DATASET", "空")
    assert "計画.csv" in rec.to_json_line()
