"""Upload history list with refresh and delete-all controls."""

import streamlit as st

from directory_admin import operations
from directory_admin.components import dialogs
from directory_admin.formatting import badge_color, format_kb, format_timestamp
from directory_admin.models.schemas import UploadHistoryEntry
from directory_admin.utils import get_http_session, get_store


def render_entry(entry: UploadHistoryEntry) -> None:
    with st.container(border=True):
        col1, col2 = st.columns([3, 1])

        with col1:
            st.markdown(f"**{entry.original_name}**")
            st.caption(
                f"{format_timestamp(entry.upload_date)} • {entry.file_type.upper()} • "
                f"{format_kb(entry.file_size, digits=1)}"
            )

        with col2:
            st.markdown(f":{badge_color(entry.status)}-background[{entry.status.upper()}]")
            st.caption(f"{entry.successful_uploads}/{entry.total_rows} rows")


def render():
    """Render upload history section."""
    store = get_store()
    session = get_http_session()

    st.subheader("📊 Upload History")

    col1, col2 = st.columns(2)

    with col1:
        if st.button("🔄 Refresh"):
            with st.spinner("Loading upload history..."):
                operations.fetch_history(store, session)

    with col2:
        if st.button("🗑️ Delete All Data"):
            dialogs.confirm_delete_all(store, session)

    state = store.state
    if state.loading_history:
        st.caption("Loading upload history...")
    elif not state.history:
        st.info("No uploads yet")
    else:
        with st.container(height=300):
            for entry in state.history:
                render_entry(entry)
