from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from ..models.timeline import TimelineRecord

"""Timeline export via pandas.

Columns: phase, startDate, endDate, then every additional_data key in order of
first appearance across the records. Records lacking a key get an empty cell.
An additional key that clashes with a base column is written as
``additional.<key>`` so its values are kept.
"""

__all__ = [
    "BASE_COLUMNS",
    "timeline_to_frame",
    "write_timeline_csv",
]

BASE_COLUMNS = ["phase", "startDate", "endDate"]
COLLISION_PREFIX = "additional."


def timeline_to_frame(records: Sequence[TimelineRecord]) -> pd.DataFrame:
    extra: list[str] = []
    for r in records:
        for key in r.additional_data:
            if key not in extra:
                extra.append(key)
    columns = {key: f"{COLLISION_PREFIX}{key}" if key in BASE_COLUMNS else key for key in extra}

    rows = []
    for r in records:
        row: dict[str, str] = {
            "phase": r.phase,
            "startDate": r.start_date.isoformat(),
            "endDate": r.end_date.isoformat(),
        }
        for key in extra:
            row[columns[key]] = r.additional_data.get(key, "")
        rows.append(row)
    return pd.DataFrame(rows, columns=BASE_COLUMNS + list(columns.values()))


def write_timeline_csv(records: Sequence[TimelineRecord], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    timeline_to_frame(records).to_csv(path, index=False, encoding="utf-8")
    return path
