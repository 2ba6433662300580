import streamlit as st

from src import ui
from src.constants import DEFAULT_DEFECT_RATING, DEFECT_RATINGS
from src.edits import append_entries, next_sequence_number
from src.qa_model import new_entry
from src.ui_helpers import configure_logging, load_records_cached, save_records

configure_logging()
st.set_page_config(page_title="Add Concern", layout="wide")
ui.init_page()

records = load_records_cached()
s_no = next_sequence_number(records)

ui.render_page_header("Add Concern", subtitle=f"New concern will be S.No {s_no}")

with st.form("add_concern", clear_on_submit=True):
    c1, c2, c3 = st.columns(3)
    with c1:
        source = st.text_input("Source")
        operation_station = st.text_input("Operation Station")
    with c2:
        designation = st.text_input("Area")
        defect_rating = st.selectbox(
            "Defect Rating",
            list(DEFECT_RATINGS),
            index=list(DEFECT_RATINGS).index(DEFAULT_DEFECT_RATING),
        )
    with c3:
        resp = st.text_input("Resp")
        target = st.text_input("Target")
    concern = st.text_area("Concern")
    mfg_action = st.text_area("MFG Action")
    submitted = st.form_submit_button("Add concern", type="primary")

if submitted:
    if not concern.strip():
        st.error("Concern text is required.")
    else:
        entry = new_entry(
            s_no=s_no,
            source=source.strip(),
            operation_station=operation_station.strip(),
            designation=designation.strip(),
            concern=concern.strip(),
            defect_rating=int(defect_rating),
            resp=resp.strip(),
            mfg_action=mfg_action.strip(),
            target=target.strip(),
        )
        save_records(append_entries(records, [entry]))
        st.success(f"Added concern S.No {s_no}. Scores start unset; edit them in the matrix.")
