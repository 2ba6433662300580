import pandas as pd
import streamlit as st

from src import ui
from src.constants import IMPORT_EXTENSIONS, IMPORT_PREVIEW_ROWS
from src.edits import append_entries, next_sequence_number
from src.importer import import_upload
from src.ui_helpers import (
    configure_logging,
    finish_import,
    load_records_cached,
    pop_import_notice,
    save_records,
    uploader_key,
)

configure_logging()
st.set_page_config(page_title="Import", layout="wide")
ui.init_page()

records = load_records_cached()

ui.render_page_header(
    "Import QA Matrix Data",
    subtitle="CSV or Excel (.xlsx) with columns: Source, Station, Area, Concern, Defect Rating, Resp, Action, Target.",
)

notice = pop_import_notice(st.session_state)
if notice:
    st.success(notice)

uploaded = st.file_uploader(
    "Upload file", type=[ext.lstrip(".") for ext in IMPORT_EXTENSIONS], key=uploader_key(st.session_state)
)

if uploaded is not None:
    try:
        preview = import_upload(uploaded.name, uploaded.getvalue(), next_sequence_number(records))
    except ValueError as exc:
        st.error(str(exc))
        st.stop()

    st.markdown(f"File: **{uploaded.name}** · {len(preview)} rows detected")
    if preview:
        st.dataframe(
            pd.DataFrame(
                [
                    {
                        "#": e["s_no"],
                        "Source": e["source"],
                        "Station": e["operation_station"],
                        "Concern": e["concern"],
                        "DR": e["defect_rating"],
                    }
                    for e in preview[:IMPORT_PREVIEW_ROWS]
                ]
            ),
            hide_index=True,
            use_container_width=True,
        )
        if len(preview) > IMPORT_PREVIEW_ROWS:
            st.caption(f"...and {len(preview) - IMPORT_PREVIEW_ROWS} more rows")
        if st.button(f"Import {len(preview)} Rows", type="primary"):
            save_records(append_entries(records, preview))
            finish_import(st.session_state, f"Imported {len(preview)} concerns from {uploaded.name}.")
            st.rerun()
