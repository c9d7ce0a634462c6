from __future__ import annotations

import dataclasses
from datetime import date

import pytest

from phase_timeline.models.field_mapping import DEFAULT_MAPPING, FieldMapping, ResolvedIndices
from phase_timeline.models.timeline import TimelineRecord


def test_timeline_record_is_immutable():
    source = {"owner": "alice"}
    record = TimelineRecord("A", date(2024, 1, 1), date(2024, 1, 2), source)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.phase = "B"  # type: ignore[misc]
    with pytest.raises(TypeError):
        record.additional_data["owner"] = "bob"  # type: ignore[index]
    # later changes to the caller's dict do not leak in
    source["owner"] = "mallory"
    assert record.additional_data["owner"] == "alice"


def test_timeline_record_to_dict():
    record = TimelineRecord("A", date(2024, 1, 1), date(2024, 1, 2), {"k": "v"})
    assert record.to_dict() == {
        "phase": "A",
        "startDate": "2024-01-01",
        "endDate": "2024-01-02",
        "additionalData": {"k": "v"},
    }


def test_field_mapping_dict_round_trip_keys():
    mapping = FieldMapping.from_dict({"phase": "Stage", "startDate": "Begin", "endDate": "Finish"})
    assert mapping == FieldMapping("Stage", "Begin", "Finish")
    assert mapping.to_dict()["startDate"] == "Begin"
    assert DEFAULT_MAPPING.to_dict() == {"phase": "phase", "startDate": "startDate", "endDate": "endDate"}


def test_resolved_indices_extra_columns():
    resolved = ResolvedIndices(headers=("a", "phase", "b", "startDate", "endDate"), phase=1, start_date=3, end_date=4)
    assert resolved.extra_columns == [(0, "a"), (2, "b")]
