"""Upload page: file selection, preview, test parse and bulk upload."""

import streamlit as st

from directory_admin import config, operations
from directory_admin.components import history_panel, status_banner
from directory_admin.state import SelectedFile
from directory_admin.utils import get_http_session, get_store

REQUIREMENTS = [
    "Excel (.xlsx, .xls, .xlsm) or CSV format",
    "Required Columns: COMPANY, EMAIL, PHONE NUMBER, CONTACT, CATEGORY",
    "Optional Columns: WEBSITE, SUB-CATEGORY2, IMAGE, LINK, SOCIAL MEDIA, USER",
    "IMAGE: Full URLs to images (only shown for premium users)",
    "LINK: Social media URLs",
    "SOCIAL MEDIA: Platform name (facebook, twitter, linkedin, instagram, etc.)",
    "USER: Package type (free, pro, premium) - affects display styling",
    "First row should contain headers",
    f"Maximum file size: {config.MAX_FILE_SIZE_MB}MB",
]

HOW_IT_WORKS = [
    "Upload your Excel/CSV file with directory listings",
    "The system will process each row and create directory entries",
    "Valid entries will be added to the database",
    "Any errors will be reported back to you",
    "All listings will appear on the Services page automatically",
    "You can upload new files without deleting old data",
    "Use the delete button to clear all data when needed",
]


def _on_file_change(widget_key: str) -> None:
    store = get_store()
    uploaded_file = st.session_state.get(widget_key)

    if uploaded_file is None:
        operations.clear_selection(store)
        return

    operations.select_file(
        store,
        SelectedFile(
            name=uploaded_file.name,
            size=uploaded_file.size,
            mime_type=uploaded_file.type or "",
            read=uploaded_file.getvalue,
        ),
    )


def render_requirements() -> None:
    with st.expander("📋 File Requirements", expanded=True):
        st.markdown("\n".join(f"- {item}" for item in REQUIREMENTS))


def render_how_it_works() -> None:
    with st.expander("ℹ️ How it works"):
        st.markdown("\n".join(f"{i}. {item}" for i, item in enumerate(HOW_IT_WORKS, 1)))


def render():
    """Render directory upload page."""
    store = get_store()
    session = get_http_session()

    st.title("📤 Admin: Bulk Upload Directory Listings")
    render_requirements()
    status_banner.render()

    state = store.state

    # No type filter: extensions are checked by operations.select_file
    widget_key = f"directory_file_{state.file_input_key}"
    st.file_uploader(
        "Drop your file here or click to browse",
        key=widget_key,
        on_change=_on_file_change,
        args=(widget_key,),
        help="Supports Excel (.xlsx, .xls, .xlsm) and CSV files",
        disabled=state.uploading,
    )

    state = store.state
    if state.selected_file is None:
        st.caption("📁 Supports Excel (.xlsx, .xls, .xlsm) and CSV files")
    else:
        st.success(f"✅ File Selected: {state.selected_file.name}")
        st.caption("Click to change file or drag & drop a new one")

    if state.preview is not None:
        st.markdown("**File Preview:**")
        st.info(
            f"📄 **File**: {state.preview.file_name} ({state.preview.file_size}) | "
            f"**Type**: {state.preview.file_type}"
        )

    no_file = state.selected_file is None

    if st.button("🔍 Test File Parse (Debug)", disabled=no_file or state.uploading):
        with st.spinner("Parsing file, please wait..."):
            operations.dry_run_parse(store, session)
        st.rerun()

    submit_label = "Uploading..." if state.uploading else "📤 Upload Directory Listings"
    if st.button(submit_label, type="primary", disabled=no_file or state.uploading):
        progress_bar = st.progress(0, text="Uploading... 0%")

        def on_progress(progress: int) -> None:
            progress_bar.progress(progress, text=f"Uploading... {progress}%")

        operations.submit_upload(store, session, on_progress=on_progress)
        st.rerun()

    st.divider()
    history_panel.render()

    st.divider()
    render_how_it_works()
