"""Shared utilities for the Streamlit page."""

import requests
import streamlit as st

from directory_admin import api_client
from directory_admin.state import Store


def init_session_state() -> bool:
    """Initialize session state variables.

    Returns:
        True on the first run of a browser session
    """
    first_run = "store" not in st.session_state
    if first_run:
        st.session_state.store = Store()
    if "http_session" not in st.session_state:
        st.session_state.http_session = api_client.build_session()
    return first_run


def get_store() -> Store:
    return st.session_state.store


def get_http_session() -> requests.Session:
    return st.session_state.http_session
