"""
Editable matrix grid: frame layout and replay of changed cells.

Run with: pytest tests/test_matrix_table.py -v
"""
import pytest

from src.matrix_table import (
    READ_ONLY_COLUMNS,
    SCORE_COLUMNS,
    apply_editor_changes,
    editor_frame,
    score_column,
    score_label,
)
from src.qa_model import new_entry


def _matrix():
    a = new_entry(s_no=1, source="Audit", concern="Door gap", defect_rating=3)
    b = new_entry(s_no=2, source="Field", concern="Headlamp aim", defect_rating=1)
    return [a, b]


def test_frame_layout():
    df = editor_frame(_matrix())
    assert list(df["s_no"]) == [1, 2]
    assert score_column("final", "ResidualTorque") in df.columns
    assert len(SCORE_COLUMNS) == 53
    for col in READ_ONLY_COLUMNS:
        assert col in df.columns


def test_unchanged_frame_is_a_noop():
    m = _matrix()
    assert apply_editor_changes(m, editor_frame(m)) == m


def test_score_and_weekly_cells_recompute():
    m = _matrix()
    df = editor_frame(m)
    df[score_column("trim", "T10")] = [3, None]
    df.loc[0, "W2"] = 1
    out = apply_editor_changes(m, df)
    first = out[0]
    assert first["trim"]["T10"] == 3
    assert first["weekly_recurrence"] == [0, 1, 0, 0, 0, 0]
    assert first["mfg_status"] == "OK"
    assert first["workstation_status"] == "NG"
    assert out[1] == m[1]


def test_text_and_rating_cells():
    m = _matrix()
    df = editor_frame(m)
    df.loc[1, "resp"] = "Shift B"
    df.loc[1, "defect_rating"] = 5
    out = apply_editor_changes(m, df)
    assert out[1]["resp"] == "Shift B"
    assert out[1]["defect_rating"] == 5
    assert out[1]["recurrence_count_plus_defect"] == 5


def test_read_only_columns_are_ignored():
    m = _matrix()
    df = editor_frame(m)
    df.loc[0, "mfg_status"] = "OK"
    df.loc[0, "MFG Rating"] = 40
    assert apply_editor_changes(m, df) == m


def test_rows_for_unknown_s_no_are_ignored():
    m = _matrix()
    df = editor_frame(m)
    df.loc[0, "s_no"] = 99
    assert apply_editor_changes(m, df) == m


def test_invalid_cell_is_rejected():
    m = _matrix()
    df = editor_frame(m)
    df.loc[0, "defect_rating"] = 2
    with pytest.raises(ValueError):
        apply_editor_changes(m, df)


def test_score_labels():
    assert score_label("trim", "T10") == "Trim T10"
    assert score_label("final", "ResidualTorque") == "Final ResidualTorque"
    assert score_label("q_control", "3.2") == "Q'Control 3.2 Frequency measure"
