"""
Dashboard summary counts.

Run with: pytest tests/test_dashboard.py -v
"""
from src.constants import CONTROL_LEVELS, DEFECT_RATINGS
from src.dashboard import get_dashboard_summary, rating_count, summary_frame
from src.qa_model import new_entry
from src.status import recalculate_statuses


def _entry(s_no, defect_rating, weekly=None, **scores):
    e = new_entry(s_no=s_no, concern=f"concern {s_no}", defect_rating=defect_rating)
    if weekly is not None:
        e["weekly_recurrence"] = list(weekly)
    for group, values in scores.items():
        e[group] = {**e[group], **values}
    return recalculate_statuses(e)


def _sample():
    return [
        _entry(1, 1, trim={"T10": 1}),                                    # OK / OK / NG
        _entry(2, 3),                                                     # NG / NG / NG
        _entry(3, 3, weekly=[0, 1, 0, 0, 0, 0], chassis={"C10": 3}),      # NG / OK / NG
        _entry(4, 5, trim={"T10": 5}, q_control={"1.1": 5}),              # OK / OK / OK
        _entry(5, 5, q_control_detail={"CVT": 5}),                        # NG / NG / OK
    ]


def test_empty_collection():
    summary = get_dashboard_summary([])
    assert summary["total"] == 0
    assert summary["ok_plant"] == 0
    for rating in DEFECT_RATINGS:
        for level in CONTROL_LEVELS:
            assert summary["by_rating"][rating][level] == {"OK": 0, "NG": 0}


def test_top_line_tiles():
    summary = get_dashboard_summary(_sample())
    assert summary["total"] == 5
    assert summary["ng_workstation"] == 3
    assert summary["ng_mfg"] == 2
    assert summary["ng_plant"] == 3
    assert summary["ok_plant"] == 2


def test_breakdown_by_rating_and_level():
    summary = get_dashboard_summary(_sample())
    assert rating_count(summary, 1, "Workstation", "OK") == 1
    assert rating_count(summary, 1, "Plant", "NG") == 1
    assert rating_count(summary, 3, "Workstation", "NG") == 2
    assert rating_count(summary, 3, "MFG", "OK") == 1
    assert rating_count(summary, 3, "MFG", "NG") == 1
    assert rating_count(summary, 5, "Plant", "OK") == 2
    assert rating_count(summary, 5, "MFG", "NG") == 1


def test_each_level_accounts_for_every_record():
    records = _sample()
    summary = get_dashboard_summary(records)
    for level in CONTROL_LEVELS:
        total = sum(
            rating_count(summary, r, level, "NG") + rating_count(summary, r, level, "OK")
            for r in DEFECT_RATINGS
        )
        assert total == len(records)


def test_summary_does_not_touch_input():
    records = _sample()
    before = [dict(r) for r in records]
    get_dashboard_summary(records)
    assert records == before


def test_summary_frame_long_form():
    df = summary_frame(get_dashboard_summary(_sample()))
    assert list(df.columns) == ["level", "rating", "NG", "OK"]
    assert len(df) == 9
    row = df[(df["level"] == "Plant") & (df["rating"] == 5)].iloc[0]
    assert row["OK"] == 2
    assert row["NG"] == 0
