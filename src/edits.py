from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from src.constants import DEFECT_RATINGS, SCORE_GROUPS, TEXT_FIELDS, WEEKS_TRACKED
from src.status import recalculate_statuses

logger = logging.getLogger(__name__)

Entry = Dict[str, Any]


def _apply(entries: List[Entry], s_no: int, change: Callable[[Entry], Entry]) -> List[Entry]:
    out: List[Entry] = []
    hit = False
    for entry in entries:
        if entry.get("s_no") == s_no:
            out.append(change(entry))
            hit = True
        else:
            out.append(entry)
    if not hit:
        logger.debug("No entry with s_no=%s; collection unchanged", s_no)
    return out


def _check_count(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{what} must be a non-negative integer, got {value!r}")
    return value


def _check_defect_rating(value: Any) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"defect_rating must be one of {list(DEFECT_RATINGS)}, got {value!r}")
    try:
        dr = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"defect_rating must be one of {list(DEFECT_RATINGS)}, got {value!r}") from None
    if dr not in DEFECT_RATINGS:
        raise ValueError(f"defect_rating must be one of {list(DEFECT_RATINGS)}, got {value!r}")
    return dr


def update_score(
    entries: List[Entry],
    s_no: int,
    group: str,
    check: str,
    value: Optional[int],
) -> List[Entry]:
    if group not in SCORE_GROUPS:
        raise ValueError(f"Unknown score group: {group}")
    if check not in SCORE_GROUPS[group]:
        raise ValueError(f"Unknown check {check!r} for group {group}")
    if value is not None:
        _check_count(value, f"{group}.{check} score")

    def change(entry: Entry) -> Entry:
        scores = dict(entry.get(group) or {})
        scores[check] = value
        return recalculate_statuses({**entry, group: scores})

    return _apply(entries, s_no, change)


def update_weekly(entries: List[Entry], s_no: int, week_index: int, value: int) -> List[Entry]:
    if not 0 <= week_index < WEEKS_TRACKED:
        raise ValueError(f"week_index must be in 0..{WEEKS_TRACKED - 1}, got {week_index}")
    _check_count(value, "weekly recurrence")

    def change(entry: Entry) -> Entry:
        weekly = list(entry["weekly_recurrence"])
        weekly[week_index] = value
        return recalculate_statuses({**entry, "weekly_recurrence": weekly})

    return _apply(entries, s_no, change)


def update_field(entries: List[Entry], s_no: int, field: str, value: Any) -> List[Entry]:
    """Edit a text field, or the defect rating (which triggers a recompute)."""
    if field == "defect_rating":
        dr = _check_defect_rating(value)
        return _apply(entries, s_no, lambda e: recalculate_statuses({**e, "defect_rating": dr}))
    if field not in TEXT_FIELDS:
        raise ValueError(f"Field is not editable: {field}")
    text = "" if value is None else str(value)
    return _apply(entries, s_no, lambda e: {**e, field: text})


def delete_entry(entries: List[Entry], s_no: int) -> List[Entry]:
    return [e for e in entries if e.get("s_no") != s_no]


def append_entries(entries: List[Entry], new_entries: Iterable[Entry]) -> List[Entry]:
    added = [recalculate_statuses(e) for e in new_entries]
    logger.info("Appending %d entries to a collection of %d", len(added), len(entries))
    return list(entries) + added


def next_sequence_number(entries: List[Entry]) -> int:
    return max((int(e.get("s_no") or 0) for e in entries), default=0) + 1
