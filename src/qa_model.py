from __future__ import annotations

from typing import Any, Dict, List, Optional

from src.constants import (
    DEFAULT_DEFECT_RATING,
    DEFECT_RATINGS,
    SCORE_GROUPS,
    TEXT_FIELDS,
    WEEKS_TRACKED,
)
from src.status import recalculate_statuses


def empty_scores(group: str) -> Dict[str, Optional[int]]:
    return {check: None for check in SCORE_GROUPS[group]}


def empty_weekly() -> List[int]:
    return [0] * WEEKS_TRACKED


def new_entry(
    s_no: int,
    source: str = "",
    operation_station: str = "",
    designation: str = "",
    concern: str = "",
    defect_rating: int = DEFAULT_DEFECT_RATING,
    resp: str = "",
    mfg_action: str = "",
    target: str = "",
) -> Dict[str, Any]:
    """Build a recomputed concern record with every score unset."""
    entry: Dict[str, Any] = {
        "s_no": s_no,
        "source": source,
        "operation_station": operation_station,
        "designation": designation,
        "concern": concern,
        "defect_rating": defect_rating,
        "weekly_recurrence": empty_weekly(),
        "resp": resp,
        "mfg_action": mfg_action,
        "target": target,
    }
    for group in SCORE_GROUPS:
        entry[group] = empty_scores(group)
    return recalculate_statuses(entry)


def _to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    s = str(value).strip()
    if not s:
        return None
    try:
        f = float(s)
    except ValueError:
        return None
    if f != f or not f.is_integer():
        return None
    return int(f)


def _coerce_score(value: Any) -> Optional[int]:
    n = _to_int(value)
    if n is None or n < 0:
        return None
    return n


def _coerce_weekly(value: Any) -> List[int]:
    raw = value if isinstance(value, list) else []
    weekly: List[int] = []
    for v in raw[:WEEKS_TRACKED]:
        n = _to_int(v)
        weekly.append(n if n is not None and n > 0 else 0)
    weekly.extend([0] * (WEEKS_TRACKED - len(weekly)))
    return weekly


def entry_from_dict(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Complete a loosely-typed record (e.g. a stored JSONL row) and recompute it.

    Missing text becomes "", unknown check ids are dropped, unreadable scores
    become None, and a defect rating outside 1/3/5 falls back to the default.
    Derived fields in `raw` are ignored.
    """
    dr = _to_int(raw.get("defect_rating"))
    entry: Dict[str, Any] = {
        "s_no": _to_int(raw.get("s_no")) or 0,
        "defect_rating": dr if dr in DEFECT_RATINGS else DEFAULT_DEFECT_RATING,
        "weekly_recurrence": _coerce_weekly(raw.get("weekly_recurrence")),
    }
    for field in TEXT_FIELDS:
        entry[field] = str(raw.get(field) or "")
    for group, checks in SCORE_GROUPS.items():
        scores = raw.get(group) if isinstance(raw.get(group), dict) else {}
        entry[group] = {check: _coerce_score(scores.get(check)) for check in checks}
    return recalculate_statuses(entry)
