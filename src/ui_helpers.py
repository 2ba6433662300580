from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, MutableMapping, Optional

import streamlit as st

from src.storage import load_records, overwrite_records, reset_to_baseline

_MATRIX_KEY = "_qa_matrix"
_UPLOAD_ROUND_KEY = "qa_upload_round"
_IMPORT_NOTICE_KEY = "qa_import_notice"


def configure_logging() -> None:
    level_name = str(os.getenv("QA_MATRIX_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_records_cached() -> List[Dict[str, Any]]:
    """Session-owned matrix; loaded from storage once per session."""
    if _MATRIX_KEY not in st.session_state:
        st.session_state[_MATRIX_KEY] = load_records()
    return st.session_state[_MATRIX_KEY]


def save_records(records: List[Dict[str, Any]]) -> None:
    """Replace the session matrix and persist it."""
    st.session_state[_MATRIX_KEY] = records
    overwrite_records(records)


def reset_records() -> List[Dict[str, Any]]:
    records = reset_to_baseline()
    st.session_state[_MATRIX_KEY] = records
    return records


def uploader_key(state: MutableMapping[str, Any]) -> str:
    """Widget key for the import uploader; changes after every completed import."""
    return f"qa_upload_{state.get(_UPLOAD_ROUND_KEY, 0)}"


def finish_import(state: MutableMapping[str, Any], notice: str) -> None:
    """Drop the uploaded file (new uploader key) and queue a notice for the next run."""
    state[_UPLOAD_ROUND_KEY] = state.get(_UPLOAD_ROUND_KEY, 0) + 1
    state[_IMPORT_NOTICE_KEY] = notice


def pop_import_notice(state: MutableMapping[str, Any]) -> Optional[str]:
    return state.pop(_IMPORT_NOTICE_KEY, None)
