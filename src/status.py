from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Sequence

from src.constants import RATING_MFG, RATING_PLANT, STATUS_NG, STATUS_OK
from src.scoring import compute_control_ratings


def _gate(rating: int, defect_rating: int) -> str:
    return STATUS_OK if rating >= defect_rating else STATUS_NG


def resolve_statuses(
    control_rating: Dict[str, int],
    defect_rating: int,
    weekly_recurrence: Sequence[int],
) -> Dict[str, str]:
    """Derive the three OK/NG statuses.

    Any live recurrence in the tracked weeks forces the workstation to NG even
    when the MFG rating clears the defect rating. The Quality rating is not
    consulted.
    """
    has_recurrence = any(w > 0 for w in weekly_recurrence)
    mfg_status = _gate(control_rating[RATING_MFG], defect_rating)
    return {
        "workstation_status": STATUS_NG if has_recurrence else mfg_status,
        "mfg_status": mfg_status,
        "plant_status": _gate(control_rating[RATING_PLANT], defect_rating),
    }


def recalculate_statuses(entry: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of `entry` with every derived field recomputed.

    Must run after any change to a score, a weekly count or the defect rating.
    The input is never modified and nothing in the result is shared with it.
    """
    out = deepcopy(entry)
    dr = out["defect_rating"]
    weekly = out["weekly_recurrence"]

    recurrence = sum(weekly)
    control_rating = compute_control_ratings(out)

    out["recurrence"] = recurrence
    out["recurrence_count_plus_defect"] = dr + recurrence
    out["control_rating"] = control_rating
    out.update(resolve_statuses(control_rating, dr, weekly))
    return out
