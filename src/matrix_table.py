from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

import pandas as pd

from src.constants import (
    CONTROL_RATINGS,
    Q_CONTROL_LABELS,
    SCORE_GROUP_LABELS,
    SCORE_GROUPS,
    TEXT_FIELDS,
    WEEKS_TRACKED,
)
from src.edits import update_field, update_score, update_weekly

# Editable grid shown on the matrix page. Column ids are stable keys used to
# route each changed cell back to the matching edit operation.
WEEK_COLUMNS = [f"W{i}" for i in range(1, WEEKS_TRACKED + 1)]
RATING_COLUMNS = [f"{rating} Rating" for rating in CONTROL_RATINGS]
STATUS_COLUMNS = ["workstation_status", "mfg_status", "plant_status"]


def score_column(group: str, check: str) -> str:
    return f"{group}:{check}"


def score_label(group: str, check: str) -> str:
    """Grid header for a score cell; Q'Control methods carry their name."""
    label = f"{SCORE_GROUP_LABELS[group]} {check}"
    if group == "q_control":
        label = f"{label} {Q_CONTROL_LABELS[check]}"
    return label


SCORE_COLUMNS = [score_column(g, c) for g, checks in SCORE_GROUPS.items() for c in checks]
READ_ONLY_COLUMNS = ["s_no", "recurrence"] + RATING_COLUMNS + STATUS_COLUMNS


def editor_frame(entries: List[Dict[str, Any]]) -> pd.DataFrame:
    rows = []
    for e in entries:
        row: Dict[str, Any] = {"s_no": e["s_no"]}
        for field in TEXT_FIELDS:
            row[field] = e.get(field, "")
        row["defect_rating"] = e["defect_rating"]
        for col, count in zip(WEEK_COLUMNS, e["weekly_recurrence"]):
            row[col] = count
        row["recurrence"] = e.get("recurrence")
        for group, checks in SCORE_GROUPS.items():
            scores = e.get(group) or {}
            for check in checks:
                row[score_column(group, check)] = scores.get(check)
        ratings = e.get("control_rating") or {}
        for rating, col in zip(CONTROL_RATINGS, RATING_COLUMNS):
            row[col] = ratings.get(rating)
        for col in STATUS_COLUMNS:
            row[col] = e.get(col)
        rows.append(row)
    columns = (
        ["s_no"] + TEXT_FIELDS + ["defect_rating"] + WEEK_COLUMNS + ["recurrence"]
        + SCORE_COLUMNS + RATING_COLUMNS + STATUS_COLUMNS
    )
    return pd.DataFrame(rows, columns=columns)


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _cell_text(value: Any) -> str:
    return "" if _is_empty(value) else str(value)


def _cell_score(value: Any) -> Optional[int]:
    if _is_empty(value):
        return None
    if float(value) != int(value):
        raise ValueError(f"Scores must be whole numbers, got {value!r}")
    return int(value)


def _cell_count(value: Any) -> int:
    score = _cell_score(value)
    return 0 if score is None else score


def apply_editor_changes(entries: List[Dict[str, Any]], edited: pd.DataFrame) -> List[Dict[str, Any]]:
    """Replay every changed grid cell through the edit operations.

    Rows are matched by s_no; read-only columns are ignored. Raises ValueError
    for a cell the edit layer rejects.
    """
    by_s_no = {e["s_no"]: e for e in entries}
    out = list(entries)
    for row in edited.to_dict("records"):
        s_no = int(row["s_no"])
        current = by_s_no.get(s_no)
        if current is None:
            continue
        for field in TEXT_FIELDS:
            value = _cell_text(row.get(field))
            if value != current.get(field, ""):
                out = update_field(out, s_no, field, value)
        if _cell_score(row.get("defect_rating")) != current["defect_rating"]:
            out = update_field(out, s_no, "defect_rating", row.get("defect_rating"))
        for idx, col in enumerate(WEEK_COLUMNS):
            value = _cell_count(row.get(col))
            if value != current["weekly_recurrence"][idx]:
                out = update_weekly(out, s_no, idx, value)
        for group, checks in SCORE_GROUPS.items():
            scores = current.get(group) or {}
            for check in checks:
                value = _cell_score(row.get(score_column(group, check)))
                if value != scores.get(check):
                    out = update_score(out, s_no, group, check, value)
    return out
