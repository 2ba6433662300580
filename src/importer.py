from __future__ import annotations

import csv
import io
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
from zipfile import BadZipFile

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from src.constants import (
    DEFAULT_DEFECT_RATING,
    DEFECT_RATINGS,
    IMPORT_COLUMN_ALIASES,
    IMPORT_DEFAULT_SOURCE,
    IMPORT_EXTENSIONS,
)
from src.qa_model import new_entry

logger = logging.getLogger(__name__)


def _read_csv(data: bytes) -> pd.DataFrame:
    # Rows may carry more cells than the header; size the frame to the widest row.
    text = data.decode("utf-8-sig")
    width = max((len(row) for row in csv.reader(io.StringIO(text))), default=0)
    if width == 0:
        return pd.DataFrame()
    return pd.read_csv(
        io.StringIO(text),
        header=None,
        names=list(range(width)),
        dtype=object,
        skip_blank_lines=False,
    )


def read_upload(filename: str, data: bytes) -> pd.DataFrame:
    """Read an uploaded sheet without a header so row 0 stays the header row."""
    suffix = Path(filename or "").suffix.lower()
    if suffix not in IMPORT_EXTENSIONS:
        raise ValueError(f"Unsupported file type {suffix or '(none)'}; expected one of {list(IMPORT_EXTENSIONS)}")
    if suffix == ".csv":
        return _read_csv(data)
    try:
        return pd.read_excel(io.BytesIO(data), header=None, dtype=object, engine="openpyxl")
    except (BadZipFile, InvalidFileException) as exc:
        raise ValueError(f"{filename} is not a readable .xlsx workbook") from exc


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value == ""


def _cell_text(value: Any) -> str:
    return "" if _is_blank(value) else str(value).strip()


def find_column(headers: Sequence[str], names: Sequence[str]) -> int:
    """Index of the first header matching an alias: exact, then prefix, then substring."""
    for name in names:
        n = name.lower()
        if n in headers:
            return headers.index(n)
        for idx, h in enumerate(headers):
            if h.startswith(n):
                return idx
        for idx, h in enumerate(headers):
            if n in h:
                return idx
    return -1


def _get_val(row: List[Any], col: int) -> str:
    if col < 0 or col >= len(row):
        return ""
    return _cell_text(row[col])


def _get_num(row: List[Any], col: int) -> Optional[float]:
    if col < 0 or col >= len(row):
        return None
    v = row[col]
    if _is_blank(v):
        return None
    try:
        num = float(str(v).strip())
    except ValueError:
        return None
    return None if math.isnan(num) else num


def _defect_rating(raw: Optional[float]) -> int:
    if raw is not None and raw in DEFECT_RATINGS:
        return int(raw)
    return DEFAULT_DEFECT_RATING


def parse_sheet(frame: pd.DataFrame, start_s_no: int) -> List[Dict[str, Any]]:
    """Turn a header-less sheet into recomputed concern records.

    Rows without concern text are skipped; sequence numbers are contiguous
    from `start_s_no`.
    """
    rows = frame.values.tolist()
    if len(rows) < 2:
        return []

    headers = [_cell_text(h).lower() for h in rows[0]]
    cols = {field: find_column(headers, names) for field, names in IMPORT_COLUMN_ALIASES.items()}
    missing = [field for field, idx in cols.items() if idx < 0]
    if missing:
        logger.info("Import: no column found for %s", ", ".join(missing))

    entries: List[Dict[str, Any]] = []
    for row in rows[1:]:
        if not row or all(_is_blank(v) for v in row):
            continue
        concern = _get_val(row, cols["concern"])
        if not concern:
            continue
        entries.append(
            new_entry(
                s_no=start_s_no + len(entries),
                source=_get_val(row, cols["source"]) or IMPORT_DEFAULT_SOURCE,
                operation_station=_get_val(row, cols["operation_station"]),
                designation=_get_val(row, cols["designation"]),
                concern=concern,
                defect_rating=_defect_rating(_get_num(row, cols["defect_rating"])),
                resp=_get_val(row, cols["resp"]),
                mfg_action=_get_val(row, cols["mfg_action"]),
                target=_get_val(row, cols["target"]),
            )
        )
    return entries


def import_upload(filename: str, data: bytes, start_s_no: int) -> List[Dict[str, Any]]:
    entries = parse_sheet(read_upload(filename, data), start_s_no)
    logger.info("Parsed %d concerns from %s", len(entries), filename)
    return entries
