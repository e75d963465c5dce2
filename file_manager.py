# file_manager.py
import logging

import streamlit as st

from utils_capacity_planning.errors_capacity import CapacityDataError
from utils_capacity_planning.parser_capacity import read_uploaded_csv
from utils_capacity_planning.state_capacity import DashboardState

logger = logging.getLogger(__name__)

STATE_KEY = "capacity_state"

# ---------- session bootstrap ----------
def _bootstrap_state() -> DashboardState:
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = DashboardState()
    if "uploader_nonce" not in st.session_state:
        st.session_state.uploader_nonce = 0
    return st.session_state[STATE_KEY]

@st.cache_data(show_spinner=False)
def _cached_parse(file_name: str, content_type: str, data: bytes):
    return read_uploaded_csv(file_name, content_type, data)

def _reset_upload():
    st.session_state[STATE_KEY].clear()
    st.session_state.pop("upload_error", None)
    st.session_state.pop("failed_source_id", None)
    # a fresh widget key empties the uploader
    st.session_state.uploader_nonce += 1

# ---------- PUBLIC API ----------
def file_manager_ui(label="📂 Data Upload"):
    """Renders the sidebar uploader and returns the session's DashboardState.

    A new upload replaces the active dataset only once it has parsed in full;
    a rejected or malformed file leaves the previous dataset untouched.
    """
    state = _bootstrap_state()
    st.sidebar.markdown(f"### {label}")
    st.sidebar.caption(
        "Expected format: date column + cpu_usage, memory_usage, network_traffic, power_consumption"
    )

    up = st.sidebar.file_uploader(
        "Drag and drop your CSV file here, or click to browse",
        accept_multiple_files=False,
        key=f"uploader_{st.session_state.uploader_nonce}",
    )

    if up is not None:
        source_id = getattr(up, "file_id", None) or f"{up.name}:{up.size}"
        is_active = state.dataset is not None and state.dataset.source_id == source_id
        if not is_active and st.session_state.get("failed_source_id") != source_id:
            try:
                with st.spinner(f"Parsing {up.name}..."):
                    result = _cached_parse(up.name, up.type or "", up.getvalue())
                state.load(up.name, result.records, columns=result.columns, source_id=source_id)
                st.session_state.pop("upload_error", None)
                st.session_state.pop("failed_source_id", None)
                if result.records:
                    st.sidebar.success(f"File uploaded successfully: {up.name} ({len(result.records)} rows)")
                else:
                    st.sidebar.warning(f"File uploaded but contains no data rows: {up.name}")
            except CapacityDataError as e:
                logger.warning("Upload %s rejected: %s", up.name, e)
                st.session_state["failed_source_id"] = source_id
                st.session_state["upload_error"] = f"{up.name}: {e}"

    if st.session_state.get("upload_error"):
        st.sidebar.error(st.session_state["upload_error"])

    if state.dataset is not None:
        meta = state.dataset
        st.sidebar.caption(f"**Active dataset:** {meta.name}  |  loaded: {meta.loaded_at}  |  rows: {len(meta.records)}")
        st.sidebar.button("🔄 Upload Different File", on_click=_reset_upload, use_container_width=True)

    return state
