from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from src.constants import (
    CONTROL_LEVELS,
    DEFECT_RATINGS,
    LEVEL_STATUS_FIELD,
    STATUS_NG,
    STATUS_OK,
    STATUSES,
)


def _empty_breakdown() -> Dict[int, Dict[str, Dict[str, int]]]:
    return {
        rating: {level: {status: 0 for status in STATUSES} for level in CONTROL_LEVELS}
        for rating in DEFECT_RATINGS
    }


def get_dashboard_summary(entries: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Dashboard tile counts for a recomputed collection.

    by_rating[rating][level] holds the NG / OK counts of records with that
    defect rating; the level-wide NG totals feed the top-line tiles.
    """
    by_rating = _empty_breakdown()
    ng_totals = {level: 0 for level in CONTROL_LEVELS}

    for entry in entries:
        rating_counts = by_rating.get(entry.get("defect_rating"))
        for level in CONTROL_LEVELS:
            status = entry.get(LEVEL_STATUS_FIELD[level])
            if status == STATUS_NG:
                ng_totals[level] += 1
            if rating_counts is not None and status in STATUSES:
                rating_counts[level][status] += 1

    total = len(entries)
    return {
        "total": total,
        "ng_workstation": ng_totals["Workstation"],
        "ng_mfg": ng_totals["MFG"],
        "ng_plant": ng_totals["Plant"],
        "ok_plant": total - ng_totals["Plant"],
        "by_rating": by_rating,
    }


def rating_count(summary: Dict[str, Any], rating: int, level: str, status: str) -> int:
    return int(summary["by_rating"][rating][level][status])


def summary_frame(summary: Dict[str, Any]) -> pd.DataFrame:
    """Long-form breakdown: one row per (level, rating)."""
    rows = []
    for level in CONTROL_LEVELS:
        for rating in DEFECT_RATINGS:
            rows.append(
                {
                    "level": level,
                    "rating": rating,
                    STATUS_NG: rating_count(summary, rating, level, STATUS_NG),
                    STATUS_OK: rating_count(summary, rating, level, STATUS_OK),
                }
            )
    return pd.DataFrame(rows, columns=["level", "rating", STATUS_NG, STATUS_OK])
