from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from src.constants import (
    LEVEL_STATUS_FIELD,
    STATUS_CLASS_ALL_OK,
    STATUS_CLASS_HAS_NG,
    STATUS_NG,
    STATUS_OK,
)

_STATUS_FIELDS = ("workstation_status", "mfg_status", "plant_status")


def source_options(entries: List[Dict[str, Any]]) -> List[str]:
    return sorted({str(e.get("source") or "") for e in entries})


def designation_options(entries: List[Dict[str, Any]]) -> List[str]:
    return sorted({str(e.get("designation") or "").upper() for e in entries})


def _matches_search(entry: Dict[str, Any], term: str) -> bool:
    return (
        term in str(entry.get("concern") or "").lower()
        or term in str(entry.get("operation_station") or "").lower()
        or term in str(entry.get("s_no"))
    )


def has_ng(entry: Dict[str, Any]) -> bool:
    return any(entry.get(f) == STATUS_NG for f in _STATUS_FIELDS)


def all_ok(entry: Dict[str, Any]) -> bool:
    return all(entry.get(f) == STATUS_OK for f in _STATUS_FIELDS)


def filter_entries(
    entries: List[Dict[str, Any]],
    search: str = "",
    source: str = "",
    designation: str = "",
    defect_rating: Optional[Union[int, str]] = None,
    status_class: str = "",
    drill_down: Optional[Tuple[int, str, str]] = None,
) -> List[Dict[str, Any]]:
    """Stable filter over the matrix; every non-empty predicate must hold.

    drill_down is a dashboard tile selection (rating, level, status).
    """
    result = list(entries)
    if search:
        term = search.lower()
        result = [e for e in result if _matches_search(e, term)]
    if source:
        result = [e for e in result if e.get("source") == source]
    if designation:
        result = [e for e in result if str(e.get("designation") or "").upper() == designation]
    if defect_rating not in (None, ""):
        dr = int(defect_rating)
        result = [e for e in result if e.get("defect_rating") == dr]
    if status_class == STATUS_CLASS_HAS_NG:
        result = [e for e in result if has_ng(e)]
    elif status_class == STATUS_CLASS_ALL_OK:
        result = [e for e in result if all_ok(e)]
    if drill_down:
        rating, level, status = drill_down
        field = LEVEL_STATUS_FIELD[level]
        result = [e for e in result if e.get("defect_rating") == rating and e.get(field) == status]
    return result


# Session keys written by the matrix filter bar.
FILTER_STATE_KEYS = {
    "search": "qa_search",
    "source": "qa_source",
    "designation": "qa_designation",
    "defect_rating": "qa_rating",
    "status_class": "qa_status",
    "drill_down": "qa_drill_down",
}


def filters_from_state(state: Mapping[str, Any]) -> Dict[str, Any]:
    """filter_entries keyword arguments from the filter bar's session keys."""
    kwargs: Dict[str, Any] = {}
    for arg, key in FILTER_STATE_KEYS.items():
        kwargs[arg] = state.get(key) or ""
    kwargs["drill_down"] = kwargs["drill_down"] or None
    return kwargs


def filters_active(selection: Mapping[str, Any]) -> bool:
    return any(selection.values())
