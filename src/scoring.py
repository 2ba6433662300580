from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple

from src.constants import (
    CONTROL_RATINGS,
    RATING_MFG,
    RATING_PLANT,
    RATING_QUALITY,
    RESIDUAL_TORQUE,
    SCORE_GROUPS,
)

# ---------------------------------------------------------------------------
# Score routing: which control rating(s) each inspection check feeds.
#   MFG      trim + chassis + final (excluding ResidualTorque)
#   Quality  q_control
#   Plant    ResidualTorque + q_control + q_control_detail
# ---------------------------------------------------------------------------
_GROUP_ROUTES: Dict[str, Tuple[str, ...]] = {
    "trim": (RATING_MFG,),
    "chassis": (RATING_MFG,),
    "final": (RATING_MFG,),
    "q_control": (RATING_QUALITY, RATING_PLANT),
    "q_control_detail": (RATING_PLANT,),
}

_CHECK_ROUTE_OVERRIDES: Dict[Tuple[str, str], Tuple[str, ...]] = {
    ("final", RESIDUAL_TORQUE): (RATING_PLANT,),
}


def _build_score_routing() -> Dict[Tuple[str, str], Tuple[str, ...]]:
    routing: Dict[Tuple[str, str], Tuple[str, ...]] = {}
    for group, checks in SCORE_GROUPS.items():
        for check in checks:
            routing[(group, check)] = _CHECK_ROUTE_OVERRIDES.get((group, check), _GROUP_ROUTES[group])
    return routing


SCORE_ROUTING = _build_score_routing()


def sum_non_null(values: Iterable[Optional[int]]) -> int:
    return sum(v for v in values if v is not None)


def contributing_fields(rating: str) -> List[Tuple[str, str]]:
    """(group, check) pairs that feed `rating`, in display order."""
    return [field for field, ratings in SCORE_ROUTING.items() if rating in ratings]


def compute_control_ratings(entry: Dict[str, Any]) -> Dict[str, int]:
    """Sum every routed score into its control rating(s).

    Null scores count as 0. Check ids outside the closed per-group sets are
    not part of any rating.
    """
    buckets: Dict[str, List[Optional[int]]] = {rating: [] for rating in CONTROL_RATINGS}
    for (group, check), ratings in SCORE_ROUTING.items():
        value = (entry.get(group) or {}).get(check)
        for rating in ratings:
            buckets[rating].append(value)
    return {rating: sum_non_null(values) for rating, values in buckets.items()}
