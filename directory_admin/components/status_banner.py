"""Transient success/error banner."""

import streamlit as st

from directory_admin import operations
from directory_admin.state import ERROR
from directory_admin.utils import get_store


@st.fragment(run_every=1)
def render():
    """Render the current status message, dropping it once it has expired."""
    store = get_store()
    operations.expire_message(store)

    message = store.state.message
    if message is None:
        return

    if message.severity == ERROR:
        st.error(f"❌ {message.text}")
    else:
        st.success(f"✅ {message.text}")

    st.button("Clear Message", key="clear_message", on_click=operations.dismiss_message, args=(store,))
