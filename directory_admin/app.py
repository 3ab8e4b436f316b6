"""Streamlit admin page for bulk uploading directory listings."""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import streamlit as st

from directory_admin import operations
from directory_admin.components import dialogs, upload_page
from directory_admin.logging_config import get_logger, setup_logging
from directory_admin.utils import get_http_session, get_store, init_session_state

setup_logging()
logger = get_logger(__name__)

# Page config
st.set_page_config(
    page_title="Directory Upload Admin",
    page_icon="📤",
    layout="centered",
)


def main() -> None:
    """Main Streamlit application."""
    if init_session_state():
        logger.info("New admin session, loading upload history")
        operations.fetch_history(get_store(), get_http_session())

    upload_page.render()

    dialog = get_store().take_dialog()
    if dialog is not None:
        dialogs.show_report(dialog)


if __name__ == "__main__":
    main()
