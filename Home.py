import altair as alt
import streamlit as st

from src import ui
from src.constants import (
    CONTROL_LEVELS,
    DEFECT_RATINGS,
    SCORE_GROUPS,
    STATUS_NG,
    STATUS_OK,
    TEXT_FIELDS,
    FIELD_LABELS,
)
from src.dashboard import get_dashboard_summary, rating_count, summary_frame
from src.edits import delete_entry
from src.filters import (
    designation_options,
    filter_entries,
    filters_active,
    filters_from_state,
    source_options,
)
from src.matrix_table import (
    READ_ONLY_COLUMNS,
    RATING_COLUMNS,
    WEEK_COLUMNS,
    apply_editor_changes,
    editor_frame,
    score_column,
    score_label,
)
from src.ui_helpers import configure_logging, load_records_cached, save_records

configure_logging()
st.set_page_config(page_title="QA Matrix", layout="wide")
ui.init_page()

records = load_records_cached()
summary = get_dashboard_summary(records)

ui.render_page_header(
    "QA Matrix",
    subtitle=f"Quality Assurance Control & Monitoring System · {summary['total']} concerns · {summary['ng_plant']} Plant NG",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _set_drill_down(rating: int, level: str, status: str) -> None:
    st.session_state["qa_drill_down"] = (rating, level, status)


def _clear_filters() -> None:
    st.session_state["qa_search"] = ""
    st.session_state["qa_source"] = ""
    st.session_state["qa_designation"] = ""
    st.session_state["qa_rating"] = ""
    st.session_state["qa_status"] = ""
    st.session_state.pop("qa_drill_down", None)


def _column_config() -> dict:
    config = {
        "s_no": st.column_config.NumberColumn("S.No", disabled=True),
        "defect_rating": st.column_config.SelectboxColumn("DR", options=list(DEFECT_RATINGS), required=True),
        "recurrence": st.column_config.NumberColumn("Recurrence", disabled=True),
        "workstation_status": st.column_config.TextColumn("WS", disabled=True),
        "mfg_status": st.column_config.TextColumn("MFG", disabled=True),
        "plant_status": st.column_config.TextColumn("Plant", disabled=True),
    }
    for field in TEXT_FIELDS:
        config[field] = st.column_config.TextColumn(FIELD_LABELS[field])
    for col in WEEK_COLUMNS:
        config[col] = st.column_config.NumberColumn(col, min_value=0, step=1)
    for group, checks in SCORE_GROUPS.items():
        for check in checks:
            config[score_column(group, check)] = st.column_config.NumberColumn(
                score_label(group, check), min_value=0, step=1
            )
    for col in RATING_COLUMNS:
        config[col] = st.column_config.NumberColumn(col, disabled=True)
    return config


# ---------------------------------------------------------------------------
# 1. Top summary tiles
# ---------------------------------------------------------------------------

k1, k2, k3, k4 = st.columns(4)
with k1:
    ui.kpi_card("Total Concerns", summary["total"])
with k2:
    ui.kpi_card("Workstation NG", summary["ng_workstation"], kind="danger")
with k3:
    ui.kpi_card("MFG NG", summary["ng_mfg"], kind="warning")
with k4:
    ui.kpi_card("Plant OK", summary["ok_plant"], kind="success")

# ---------------------------------------------------------------------------
# 2. Rating breakdown per control level (click to drill down)
# ---------------------------------------------------------------------------

level_cols = st.columns(len(CONTROL_LEVELS))
for col, level in zip(level_cols, CONTROL_LEVELS):
    with col:
        with ui.card(f"{level} Quality"):
            rating_cols = st.columns(len(DEFECT_RATINGS))
            for rcol, rating in zip(rating_cols, DEFECT_RATINGS):
                with rcol:
                    ng = rating_count(summary, rating, level, STATUS_NG)
                    ok = rating_count(summary, rating, level, STATUS_OK)
                    st.markdown(f"**Rating {rating}**")
                    if ng > 0:
                        st.button(
                            f"{ng} NG",
                            key=f"dd_{level}_{rating}_ng",
                            on_click=_set_drill_down,
                            args=(rating, level, STATUS_NG),
                        )
                    st.button(
                        f"{ok} OK",
                        key=f"dd_{level}_{rating}_ok",
                        on_click=_set_drill_down,
                        args=(rating, level, STATUS_OK),
                    )

if summary["total"]:
    breakdown = summary_frame(summary).melt(
        id_vars=["level", "rating"], value_vars=[STATUS_NG, STATUS_OK], var_name="status", value_name="count"
    )
    chart = (
        alt.Chart(breakdown)
        .mark_bar()
        .encode(
            x=alt.X("rating:O", title="Defect rating"),
            y=alt.Y("count:Q", title="Concerns"),
            color=alt.Color(
                "status:N",
                scale=alt.Scale(domain=[STATUS_NG, STATUS_OK], range=["#d32f2f", "#2e7d32"]),
            ),
            column=alt.Column("level:N", sort=list(CONTROL_LEVELS), title=None),
            tooltip=["level", "rating", "status", "count"],
        )
        .properties(height=220, width=180)
    )
    st.altair_chart(chart)

# ---------------------------------------------------------------------------
# 3. Filters
# ---------------------------------------------------------------------------

with ui.card("Filters"):
    f1, f2, f3, f4, f5 = st.columns([3, 1, 1, 1, 1])
    with f1:
        st.text_input("Search", key="qa_search", placeholder="Search concerns, stations...")
    with f2:
        st.selectbox("Source", [""] + source_options(records), key="qa_source",
                     format_func=lambda v: v or "All Sources")
    with f3:
        st.selectbox("Area", [""] + designation_options(records), key="qa_designation",
                     format_func=lambda v: v or "All Areas")
    with f4:
        st.selectbox("Rating", ["", "1", "3", "5"], key="qa_rating",
                     format_func=lambda v: f"Rating {v}" if v else "All Ratings")
    with f5:
        st.selectbox("Status", ["", STATUS_NG, STATUS_OK], key="qa_status",
                     format_func=lambda v: {"": "All Status", STATUS_NG: "Has NG", STATUS_OK: "All OK"}[v])

    selection = filters_from_state(st.session_state)
    # Widget keys do not survive page switches; other pages read this copy.
    st.session_state["qa_filter_selection"] = selection
    filtered = filter_entries(records, **selection)

    drill_down = selection["drill_down"]
    if drill_down:
        rating, level, status = drill_down
        ui.status_badge(f"{level} · Rating {rating} · {status}", kind=ui.status_kind(status))
    if filters_active(selection):
        st.caption(f"Showing {len(filtered)} of {len(records)} concerns")
        st.button("Clear all", on_click=_clear_filters)

# ---------------------------------------------------------------------------
# 4. Matrix details (editable)
# ---------------------------------------------------------------------------

st.subheader("QA Matrix Details")
edited = st.data_editor(
    editor_frame(filtered),
    column_config=_column_config(),
    disabled=READ_ONLY_COLUMNS,
    hide_index=True,
    use_container_width=True,
    key="qa_editor",
)

c1, c2 = st.columns([1, 3])
with c1:
    if st.button("Apply edits", type="primary"):
        try:
            updated = apply_editor_changes(records, edited)
        except ValueError as exc:
            st.error(str(exc))
        else:
            save_records(updated)
            st.rerun()
with c2:
    with st.expander("Delete a concern", expanded=False):
        choices = [e["s_no"] for e in filtered]
        target = st.selectbox("S.No", choices, key="qa_delete_s_no") if choices else None
        if target is not None and st.button("Delete", key="qa_delete_btn"):
            save_records(delete_entry(records, target))
            st.rerun()
