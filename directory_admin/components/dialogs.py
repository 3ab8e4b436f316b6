"""Modal dialogs: test-parse and upload reports, delete-all confirmation."""

import pandas as pd
import requests
import streamlit as st

from directory_admin import operations
from directory_admin.state import ReportDialog, Store

CONFIRM_DELETE_MESSAGE = (
    "Are you sure you want to delete ALL uploaded data? This action cannot be undone."
)


@st.dialog("Directory Upload Report", width="large")
def show_report(dialog: ReportDialog):
    st.subheader(dialog.title)
    st.code(dialog.body, language=None)

    if dialog.row_errors:
        st.markdown(f"**All row errors ({len(dialog.row_errors)})**")
        df = pd.DataFrame(
            [err.model_dump() for err in dialog.row_errors],
            columns=["row", "sheet", "error"],
        )
        st.dataframe(df, hide_index=True, height=300)

    if st.button("Close", type="primary"):
        st.rerun()


@st.dialog("Delete All Data")
def confirm_delete_all(store: Store, session: requests.Session):
    """Ask for confirmation before clearing every listing on the backend."""
    st.warning(f"⚠️ {CONFIRM_DELETE_MESSAGE}")

    col1, col2 = st.columns(2)

    with col1:
        if st.button("🗑️ Yes, delete everything", type="primary"):
            with st.spinner("Deleting data..."):
                operations.delete_all(store, session, confirmed=True)
            st.rerun()

    with col2:
        if st.button("Cancel"):
            operations.delete_all(store, session, confirmed=False)
            st.rerun()
