from __future__ import annotations
from typing import Tuple, List, Dict, Any

from src.constants import (
    DEFECT_RATINGS,
    DERIVED_FIELDS,
    REQUIRED_KEYS,
    SCORE_GROUPS,
    STATUSES,
    TEXT_FIELDS,
    WEEKS_TRACKED,
)
from src.status import recalculate_statuses


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def validate_entry(rec: Dict[str, Any]) -> Tuple[bool, List[str]]:
    errs: List[str] = []

    for k in REQUIRED_KEYS:
        if k not in rec:
            errs.append(f"Missing key: {k}")

    if errs:
        return False, errs

    s_no = rec["s_no"]
    if not _is_count(s_no) or s_no < 1:
        errs.append("s_no must be a positive integer")

    for field in TEXT_FIELDS:
        if not isinstance(rec[field], str):
            errs.append(f"{field} must be a string")

    if not _is_count(rec["defect_rating"]) or rec["defect_rating"] not in DEFECT_RATINGS:
        errs.append(f"defect_rating must be one of {list(DEFECT_RATINGS)}")

    weekly = rec["weekly_recurrence"]
    if not isinstance(weekly, list) or len(weekly) != WEEKS_TRACKED:
        errs.append(f"weekly_recurrence must be a list of {WEEKS_TRACKED} items")
    elif not all(_is_count(w) for w in weekly):
        errs.append("weekly_recurrence entries must be non-negative integers")

    for group, checks in SCORE_GROUPS.items():
        scores = rec[group]
        if not isinstance(scores, dict):
            errs.append(f"{group} must be a mapping of check -> score")
            continue
        unknown = sorted(set(scores) - set(checks))
        if unknown:
            errs.append(f"{group} contains unknown checks: {unknown}")
        bad = [c for c in checks if scores.get(c) is not None and not _is_count(scores.get(c))]
        if bad:
            errs.append(f"{group} scores must be null or non-negative integers: {bad}")

    for field in ("workstation_status", "mfg_status", "plant_status"):
        if rec[field] not in STATUSES:
            errs.append(f"{field} must be one of {list(STATUSES)}")

    if errs:
        return False, errs

    # Derived fields must match a fresh recompute.
    fresh = recalculate_statuses(rec)
    stale = [k for k in DERIVED_FIELDS if rec[k] != fresh[k]]
    if stale:
        errs.append(f"derived fields are stale: {stale}")

    return len(errs) == 0, errs
