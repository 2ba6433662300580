"""
Record validation used by the recompute CLI.

Run with: pytest tests/test_schema_validate.py -v
"""
import pytest

from src.qa_model import new_entry
from src.schema_validate import validate_entry
from src.status import recalculate_statuses


def _good():
    e = new_entry(s_no=1, source="Audit", concern="Door gap", defect_rating=3)
    e["trim"]["T10"] = 3
    return recalculate_statuses(e)


def test_valid_record():
    ok, errs = validate_entry(_good())
    assert ok, errs
    assert errs == []


def test_missing_key_short_circuits():
    e = _good()
    del e["plant_status"]
    ok, errs = validate_entry(e)
    assert not ok
    assert errs == ["Missing key: plant_status"]


@pytest.mark.parametrize(
    "field,value,fragment",
    [
        ("s_no", 0, "s_no"),
        ("s_no", True, "s_no"),
        ("concern", 5, "concern"),
        ("defect_rating", 2, "defect_rating"),
        ("weekly_recurrence", [0, 0, 0], "weekly_recurrence"),
        ("weekly_recurrence", [0, 0, -1, 0, 0, 0], "weekly_recurrence"),
        ("mfg_status", "Pass", "mfg_status"),
    ],
)
def test_field_errors(field, value, fragment):
    e = _good()
    e[field] = value
    ok, errs = validate_entry(e)
    assert not ok
    assert any(fragment in msg for msg in errs)


def test_unknown_check_id():
    e = _good()
    e["chassis"]["C999"] = 1
    ok, errs = validate_entry(e)
    assert not ok
    assert any("unknown checks" in msg for msg in errs)


def test_bad_score_value():
    e = _good()
    e["q_control"]["1.1"] = 1.5
    ok, errs = validate_entry(e)
    assert not ok
    assert any("q_control" in msg for msg in errs)


def test_stale_derived_fields():
    e = _good()
    e["mfg_status"] = "NG"
    e["recurrence"] = 4
    ok, errs = validate_entry(e)
    assert not ok
    assert errs == ["derived fields are stale: ['recurrence', 'mfg_status']"]
