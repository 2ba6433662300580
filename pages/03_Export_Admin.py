from datetime import datetime

import streamlit as st

from src import ui
from src.dashboard import get_dashboard_summary, summary_frame
from src.export import to_csv_bytes, to_xlsx_bytes
from src.filters import filter_entries, filters_active
from src.ui_helpers import configure_logging, load_records_cached, reset_records

configure_logging()
st.set_page_config(page_title="Export & Reset", layout="wide")
ui.init_page()

records = load_records_cached()
selection = st.session_state.get("qa_filter_selection")
filtered = filter_entries(records, **selection) if selection and filters_active(selection) else None

ui.render_page_header("Export & Reset", subtitle=f"{len(records)} concerns in the matrix")

stamp = datetime.now().strftime("%Y%m%d")

with ui.card("Export", "Download the full matrix, or the rows matching the current matrix filters."):
    scope = st.radio("Rows", ["All concerns", "Filtered view"], horizontal=True,
                     disabled=filtered is None)
    rows = filtered if (scope == "Filtered view" and filtered is not None) else records
    c1, c2 = st.columns(2)
    with c1:
        st.download_button(
            "Export Excel",
            data=to_xlsx_bytes(rows),
            file_name=f"qa_matrix_{stamp}.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
    with c2:
        st.download_button(
            "Export CSV",
            data=to_csv_bytes(rows),
            file_name=f"qa_matrix_{stamp}.csv",
            mime="text/csv",
        )

with ui.card("Rating breakdown"):
    st.dataframe(summary_frame(get_dashboard_summary(records)), hide_index=True, use_container_width=True)

with ui.card("Reset", "Replace every concern with the shipped baseline matrix. Edits are lost."):
    confirm = st.checkbox("I understand local edits will be discarded")
    if st.button("Reset to baseline", disabled=not confirm):
        fresh = reset_records()
        st.session_state.pop("qa_filter_selection", None)
        st.success(f"Matrix reset: {len(fresh)} concerns loaded.")
