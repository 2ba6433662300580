from __future__ import annotations

import io
import logging
from typing import Any, Dict, List

import pandas as pd
from openpyxl.styles import Alignment
from openpyxl.utils import get_column_letter

from src.constants import (
    CONTROL_RATINGS,
    FIELD_LABELS,
    SCORE_GROUP_LABELS,
    SCORE_GROUPS,
    WEEKS_TRACKED,
)

logger = logging.getLogger(__name__)

_LEAD_FIELDS = ["s_no", "source", "operation_station", "designation", "concern", "defect_rating"]
_TAIL_FIELDS = ["workstation_status", "mfg_status", "plant_status", "resp", "mfg_action", "target"]


def _columns() -> List[str]:
    cols = [FIELD_LABELS[f] for f in _LEAD_FIELDS]
    cols += [f"W{i}" for i in range(1, WEEKS_TRACKED + 1)]
    cols += [FIELD_LABELS["recurrence"], FIELD_LABELS["recurrence_count_plus_defect"]]
    for group, checks in SCORE_GROUPS.items():
        cols += [f"{SCORE_GROUP_LABELS[group]} {check}" for check in checks]
    cols += [f"{rating} Rating" for rating in CONTROL_RATINGS]
    cols += [FIELD_LABELS[f] for f in _TAIL_FIELDS]
    return cols


def _row(entry: Dict[str, Any]) -> Dict[str, Any]:
    row: Dict[str, Any] = {FIELD_LABELS[f]: entry.get(f) for f in _LEAD_FIELDS}
    for i, count in enumerate(entry.get("weekly_recurrence") or [], start=1):
        row[f"W{i}"] = count
    row[FIELD_LABELS["recurrence"]] = entry.get("recurrence")
    row[FIELD_LABELS["recurrence_count_plus_defect"]] = entry.get("recurrence_count_plus_defect")
    for group, checks in SCORE_GROUPS.items():
        scores = entry.get(group) or {}
        for check in checks:
            row[f"{SCORE_GROUP_LABELS[group]} {check}"] = scores.get(check)
    ratings = entry.get("control_rating") or {}
    for rating in CONTROL_RATINGS:
        row[f"{rating} Rating"] = ratings.get(rating)
    for f in _TAIL_FIELDS:
        row[FIELD_LABELS[f]] = entry.get(f)
    return row


def entries_to_frame(entries: List[Dict[str, Any]]) -> pd.DataFrame:
    return pd.DataFrame([_row(e) for e in entries], columns=_columns())


def to_csv_bytes(entries: List[Dict[str, Any]]) -> bytes:
    return entries_to_frame(entries).to_csv(index=False).encode("utf-8")


def to_xlsx_bytes(entries: List[Dict[str, Any]], sheet_name: str = "QA Matrix") -> bytes:
    buf = io.BytesIO()
    df = entries_to_frame(entries)
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
        ws = writer.book[sheet_name]
        ws.freeze_panes = "A2"
        for row in ws.iter_rows(min_row=1, max_row=ws.max_row, min_col=1, max_col=ws.max_column):
            for cell in row:
                cell.alignment = Alignment(wrap_text=True, vertical="top")
        for col_idx in range(1, ws.max_column + 1):
            col_letter = get_column_letter(col_idx)
            max_len = 0
            for row_idx in range(1, min(ws.max_row, 300) + 1):
                val = ws.cell(row=row_idx, column=col_idx).value
                if val is None:
                    continue
                max_len = max(max_len, len(str(val)))
            ws.column_dimensions[col_letter].width = max(8, min(60, max_len + 2))
    logger.info("Exported %d entries to xlsx", len(entries))
    return buf.getvalue()
