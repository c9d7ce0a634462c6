from __future__ import annotations

from datetime import date

import pytest

from phase_timeline.models.errors import InvalidManualEntry
from phase_timeline.models.timeline import ManualEntry
from phase_timeline.services.manual_entry import normalize_manual_entries


def test_manual_entries_map_to_first_of_month():
    records = normalize_manual_entries(
        [
            ManualEntry("Research", 0, 2, "lit review"),
            ManualEntry("Writing", 3, 11),
        ],
        year=2024,
    )
    assert [(r.phase, r.start_date, r.end_date) for r in records] == [
        ("Research", date(2024, 1, 1), date(2024, 3, 1)),
        ("Writing", date(2024, 4, 1), date(2024, 12, 1)),
    ]
    assert dict(records[0].additional_data) == {"description": "lit review"}
    assert dict(records[1].additional_data) == {}


def test_same_start_and_end_month_is_valid():
    records = normalize_manual_entries([ManualEntry("Defense", 5, 5)], year=2024)
    assert records[0].start_date == records[0].end_date == date(2024, 6, 1)


def test_start_after_end_fails_whole_batch():
    with pytest.raises(InvalidManualEntry):
        normalize_manual_entries([ManualEntry("Ok", 0, 1), ManualEntry("Bad", 6, 2)], year=2024)


@pytest.mark.parametrize("phase", ["", "   "])
def test_blank_phase_fails(phase):
    with pytest.raises(InvalidManualEntry):
        normalize_manual_entries([ManualEntry(phase, 0, 1)], year=2024)


@pytest.mark.parametrize("start,end", [(-1, 2), (0, 12), (True, 3)])
def test_month_out_of_range_fails(start, end):
    with pytest.raises(InvalidManualEntry):
        normalize_manual_entries([ManualEntry("P", start, end)], year=2024)


@pytest.mark.parametrize("year", [0, -5, 10000, True])
def test_year_out_of_range_fails(year):
    with pytest.raises(InvalidManualEntry, match="year must be 1-9999"):
        normalize_manual_entries([ManualEntry("P", 0, 1)], year=year)


def test_year_bounds_are_valid():
    assert normalize_manual_entries([ManualEntry("P", 0, 0)], year=1)[0].start_date == date(1, 1, 1)
    assert normalize_manual_entries([ManualEntry("P", 11, 11)], year=9999)[0].end_date == date(9999, 12, 1)


def test_default_year_is_current_year():
    records = normalize_manual_entries([ManualEntry("P", 0, 0)])
    assert records[0].start_date.year == date.today().year


def test_duplicate_phases_kept_by_default():
    records = normalize_manual_entries([ManualEntry("P", 0, 1), ManualEntry("P", 3, 4)], year=2024)
    assert [r.phase for r in records] == ["P", "P"]


def test_duplicate_phases_rejected_when_unique_required():
    with pytest.raises(InvalidManualEntry) as e:
        normalize_manual_entries(
            [ManualEntry("P", 0, 1), ManualEntry("P", 3, 4)], year=2024, unique_phases=True
        )
    assert "duplicate" in str(e.value)


def test_empty_entry_list_gives_empty_timeline():
    assert normalize_manual_entries([], year=2024) == []


def test_manual_entry_from_dict_defaults():
    entry = ManualEntry.from_dict({"phase": "P"})
    assert (entry.start_month, entry.end_month, entry.description) == (0, 11, "")
