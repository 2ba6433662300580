"""
Status derivation: OK/NG per control level, recurrence override, recompute
purity and idempotence.

Run with: pytest tests/test_status.py -v
"""
import pytest

from src.constants import RESIDUAL_TORQUE
from src.qa_model import new_entry
from src.scoring import SCORE_ROUTING
from src.status import recalculate_statuses, resolve_statuses


def _entry(defect_rating=3, weekly=None, **scores):
    e = new_entry(s_no=7, concern="Loose clip", defect_rating=defect_rating)
    if weekly is not None:
        e["weekly_recurrence"] = list(weekly)
    for group, values in scores.items():
        e[group] = {**e[group], **values}
    return recalculate_statuses(e)


def _statuses(e):
    return e["workstation_status"], e["mfg_status"], e["plant_status"]


# ============================================================================
# Worked examples
# ============================================================================


class TestWorkedExamples:
    def test_all_null_scores_are_all_ng(self):
        e = _entry(defect_rating=3)
        assert e["control_rating"] == {"MFG": 0, "Quality": 0, "Plant": 0}
        assert _statuses(e) == ("NG", "NG", "NG")

    def test_trim_reaching_defect_rating_clears_mfg_and_workstation(self):
        e = _entry(defect_rating=3, trim={"T10": 1, "T20": 2})
        assert e["control_rating"]["MFG"] == 3
        assert e["mfg_status"] == "OK"
        assert e["workstation_status"] == "OK"
        assert e["plant_status"] == "NG"

    def test_recurrence_flips_workstation_only(self):
        e = _entry(defect_rating=3, trim={"T10": 1, "T20": 2})
        e["weekly_recurrence"][2] = 1
        e = recalculate_statuses(e)
        assert e["workstation_status"] == "NG"
        assert e["mfg_status"] == "OK"
        assert e["recurrence"] == 1
        assert e["recurrence_count_plus_defect"] == 4


# ============================================================================
# Rules
# ============================================================================


class TestStatusRules:
    @pytest.mark.parametrize("dr", [1, 3, 5])
    def test_gate_is_greater_or_equal(self, dr):
        below = _entry(defect_rating=dr, chassis={"C10": dr - 1}, q_control_detail={"CVT": dr - 1})
        at = _entry(defect_rating=dr, chassis={"C10": dr}, q_control_detail={"CVT": dr})
        assert below["mfg_status"] == "NG" and below["plant_status"] == "NG"
        assert at["mfg_status"] == "OK" and at["plant_status"] == "OK"

    def test_quality_rating_never_gates(self):
        e = _entry(defect_rating=5, trim={"T10": 5}, final={RESIDUAL_TORQUE: 5})
        assert e["control_rating"]["Quality"] == 0
        assert _statuses(e) == ("OK", "OK", "OK")

    def test_q_control_feeds_plant_status(self):
        e = _entry(defect_rating=3, q_control={"1.1": 3})
        assert e["control_rating"]["Quality"] == 3
        assert e["plant_status"] == "OK"
        assert e["mfg_status"] == "NG"

    @pytest.mark.parametrize("slot", range(6))
    def test_any_recurrence_slot_forces_workstation_ng(self, slot):
        weekly = [0] * 6
        weekly[slot] = 2
        e = _entry(defect_rating=1, weekly=weekly, trim={"T10": 5})
        assert e["mfg_status"] == "OK"
        assert e["workstation_status"] == "NG"

    def test_zero_score_is_kept_distinct_from_null(self):
        e = _entry(trim={"T10": 0})
        assert e["trim"]["T10"] == 0
        assert e["trim"]["T20"] is None
        assert e["control_rating"]["MFG"] == 0

    def test_resolve_statuses_directly(self):
        out = resolve_statuses({"MFG": 5, "Quality": 0, "Plant": 2}, 3, [0, 0, 0, 0, 0, 0])
        assert out == {"workstation_status": "OK", "mfg_status": "OK", "plant_status": "NG"}


# ============================================================================
# Properties
# ============================================================================


class TestRecomputeProperties:
    def test_idempotent(self):
        e = _entry(defect_rating=5, weekly=[1, 0, 0, 3, 0, 0], trim={"T10": 2}, q_control={"5.1": 4})
        once = recalculate_statuses(e)
        assert recalculate_statuses(once) == once

    def test_input_is_not_mutated_or_aliased(self):
        raw = new_entry(s_no=1, concern="c", defect_rating=3)
        raw["trim"]["T10"] = 3
        raw["control_rating"] = {"MFG": 99, "Quality": 99, "Plant": 99}
        out = recalculate_statuses(raw)
        assert raw["control_rating"]["MFG"] == 99
        assert out["control_rating"]["MFG"] == 3
        out["trim"]["T10"] = 0
        out["weekly_recurrence"][0] = 4
        assert raw["trim"]["T10"] == 3
        assert raw["weekly_recurrence"][0] == 0

    def test_stale_derived_fields_are_overwritten(self):
        e = _entry(defect_rating=3)
        e["mfg_status"] = "OK"
        e["recurrence"] = 42
        fresh = recalculate_statuses(e)
        assert fresh["mfg_status"] == "NG"
        assert fresh["recurrence"] == 0

    def test_other_fields_unchanged(self):
        e = _entry(defect_rating=3)
        e["resp"] = "Line lead"
        fresh = recalculate_statuses(e)
        assert fresh["resp"] == "Line lead"
        assert fresh["s_no"] == 7
        assert fresh["concern"] == "Loose clip"

    @pytest.mark.parametrize("field", sorted(SCORE_ROUTING))
    def test_raising_a_score_never_turns_ok_into_ng(self, field):
        group, check = field
        for dr in (1, 3, 5):
            for weekly in ([0] * 6, [0, 1, 0, 0, 0, 0]):
                prev = None
                for score in (None, 0, 1, 2, 3, 5, 8):
                    e = _entry(defect_rating=dr, weekly=weekly, **{group: {check: score}})
                    cur = _statuses(e)
                    if prev is not None:
                        for before, after in zip(prev, cur):
                            assert not (before == "OK" and after == "NG")
                    prev = cur
