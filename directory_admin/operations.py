"""User operations of the directory admin page.

Each operation reads the current state from a ``Store``, calls the backend
through ``api_client`` and reports its outcome by dispatching actions. Failures
are handled here and turned into status messages; nothing is re-raised to the
page.
"""

import contextvars
import re
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, Optional

import requests

from directory_admin import api_client, config
from directory_admin.exceptions import DirectoryApiError, InvalidResponseError
from directory_admin.formatting import (
    INVALID_FILE_MESSAGE,
    dry_run_report,
    format_kb,
    upload_errors_report,
    upload_success_message,
)
from directory_admin.logging_config import action_scope, get_logger
from directory_admin.models.schemas import BulkUploadResponse
from directory_admin.state import (
    ERROR,
    SUCCESS,
    AllDataDeleted,
    DialogQueued,
    FileRejected,
    FileSelected,
    HistoryLoading,
    HistoryReplaced,
    MessageDismissed,
    MessageExpired,
    MessageShown,
    PreviewSummary,
    ProgressChanged,
    ReportDialog,
    SelectedFile,
    SelectionCleared,
    StatusMessage,
    Store,
    UploadFinished,
    UploadStarted,
    UploadSucceeded,
)

logger = get_logger(__name__)

# Case-sensitive, so "LISTINGS.CSV" is rejected
ALLOWED_FILE_PATTERN = re.compile(rf"\.({'|'.join(config.ALLOWED_FILE_TYPES)})$")

ProgressCallback = Callable[[int], None]


def is_allowed_file(file_name: str) -> bool:
    return ALLOWED_FILE_PATTERN.search(file_name) is not None


# Status messages


def show_message(
    store: Store,
    text: str,
    severity: str = SUCCESS,
    now: Optional[float] = None,
) -> None:
    """Replace the current status message; it expires after ``STATUS_MESSAGE_SECONDS``."""
    now = time.monotonic() if now is None else now
    expires_at = now + config.STATUS_MESSAGE_SECONDS
    store.dispatch(MessageShown(StatusMessage(text=text, severity=severity, expires_at=expires_at)))


def dismiss_message(store: Store) -> None:
    store.dispatch(MessageDismissed())


def expire_message(store: Store, now: Optional[float] = None) -> None:
    """Clear the status message if its lifetime is over."""
    store.dispatch(MessageExpired(time.monotonic() if now is None else now))


# File selection


def build_preview(file: SelectedFile) -> Optional[PreviewSummary]:
    """
    Read the whole file and describe it for the preview panel.

    Only the size and declared type are shown, the content itself is not
    parsed. A file that cannot be read yields no preview.
    """
    try:
        file.read()
    except Exception:
        logger.exception(f"Error previewing file: {file.name}")
        return None

    return PreviewSummary(
        file_name=file.name,
        file_size=format_kb(file.size),
        file_type=file.mime_type or config.DEFAULT_MIME_TYPE,
    )


def select_file(store: Store, file: SelectedFile) -> bool:
    """Make ``file`` the selected file if its extension is allowed."""
    with action_scope("select_file"):
        if not is_allowed_file(file.name):
            logger.info(f"Rejected file with unsupported extension: {file.name}")
            show_message(store, INVALID_FILE_MESSAGE, ERROR)
            store.dispatch(FileRejected())
            return False

        logger.info(f"Selected file: {file.name}, size={file.size} bytes, type={file.mime_type}")
        store.dispatch(FileSelected(file=file, preview=build_preview(file)))
        return True


def clear_selection(store: Store) -> None:
    store.dispatch(SelectionCleared())


# Upload history


def fetch_history(store: Store, session: requests.Session) -> None:
    """Replace the history with the backend's; keep the old list if that fails."""
    with action_scope("fetch_history"):
        store.dispatch(HistoryLoading(True))
        try:
            entries = api_client.call_upload_history_api(session)
        except DirectoryApiError as e:
            logger.error(f"Failed to fetch upload history: {e.message}")
        else:
            logger.info(f"Fetched {len(entries)} upload history entries")
            store.dispatch(HistoryReplaced(tuple(entries)))
        finally:
            store.dispatch(HistoryLoading(False))


# Dry-run parse


def dry_run_parse(store: Store, session: requests.Session) -> None:
    """Ask the backend to parse the selected file without storing it."""
    with action_scope("test_parse"):
        file = store.state.selected_file
        if file is None:
            show_message(store, "Please select a file to test.", ERROR)
            return

        try:
            result = api_client.call_test_parse_api(session, file.read(), file.name, file.mime_type)
        except Exception as e:
            message = e.message if isinstance(e, DirectoryApiError) else str(e)
            logger.warning(f"Test parse failed for {file.name}: {message}")
            show_message(store, f"Test parse failed: {message}", ERROR)
            return

        logger.info(f"Test parse result: {result.model_dump(by_alias=True)}")
        store.dispatch(DialogQueued(ReportDialog(title="Test Parse Result", body=dry_run_report(result))))


# Upload


def next_progress(progress: int) -> int:
    """Advance the simulated progress by one step without passing the cap."""
    return min(progress + config.PROGRESS_STEP, config.PROGRESS_CAP)


def _set_progress(store: Store, on_progress: Optional[ProgressCallback], progress: int) -> None:
    store.dispatch(ProgressChanged(progress))
    if on_progress is not None:
        on_progress(progress)


def _wait_with_progress(
    future: "Future[BulkUploadResponse]",
    store: Store,
    on_progress: Optional[ProgressCallback],
    interval: float,
) -> None:
    progress = 0
    while True:
        done, _ = wait([future], timeout=interval)
        if done:
            return
        progress = next_progress(progress)
        _set_progress(store, on_progress, progress)


def submit_upload(
    store: Store,
    session: requests.Session,
    on_progress: Optional[ProgressCallback] = None,
    interval: float = config.PROGRESS_INTERVAL_SECONDS,
) -> Optional[BulkUploadResponse]:
    """
    Upload the selected file and report the outcome.

    The request runs on a worker thread while this thread advances the
    simulated progress every ``interval`` seconds, calling ``on_progress`` so
    the page can redraw its progress bar.

    Args:
        store: Page state store
        session: HTTP session carrying the admin cookie
        on_progress: Called with each new progress value (0-100)
        interval: Seconds between progress steps

    Returns:
        The backend's upload summary, or None if nothing was uploaded
    """
    with action_scope("upload"):
        file = store.state.selected_file
        if file is None:
            show_message(store, "Please select a file to upload.", ERROR)
            return None
        if store.state.uploading:
            logger.warning("Upload already in progress, ignoring submit")
            return None

        store.dispatch(UploadStarted())
        if on_progress is not None:
            on_progress(0)

        try:
            content = file.read()
            with ThreadPoolExecutor(max_workers=1, thread_name_prefix="bulk-upload") as executor:
                # Worker log lines keep the upload action tag
                future = executor.submit(
                    contextvars.copy_context().run,
                    api_client.call_bulk_upload_api,
                    session,
                    content,
                    file.name,
                    file.mime_type,
                )
                _wait_with_progress(future, store, on_progress, interval)
            _set_progress(store, on_progress, 100)
            result = future.result()
        except Exception as e:
            message = e.message if isinstance(e, DirectoryApiError) else str(e)
            logger.error(f"Upload failed for {file.name}: {message}")
            show_message(store, f"Upload failed: {message}", ERROR)
            return None
        else:
            logger.info(
                f"Uploaded {file.name}: uploaded_count={result.uploaded_count}, errors={len(result.errors)}"
            )
            store.dispatch(UploadSucceeded())
            show_message(store, upload_success_message(result.uploaded_count, len(result.errors)))
            fetch_history(store, session)

            if result.errors:
                for err in result.errors:
                    logger.info(f"Row error: row={err.row}, sheet={err.sheet}, error={err.error}")
                store.dispatch(
                    DialogQueued(
                        ReportDialog(
                            title="Upload completed with errors",
                            body=upload_errors_report(result.errors),
                            row_errors=tuple(result.errors),
                        )
                    )
                )
            return result
        finally:
            store.dispatch(UploadFinished())
            if on_progress is not None:
                on_progress(0)


# Delete all


def delete_all(store: Store, session: requests.Session, confirmed: bool) -> bool:
    """
    Delete every listing and the upload history on the backend.

    Nothing happens unless the operator confirmed. Local history and selection
    are cleared only after the backend reports success.
    """
    with action_scope("delete_all"):
        if not confirmed:
            logger.info("Delete all cancelled by operator")
            return False

        try:
            result = api_client.call_clear_all_api(session)
        except DirectoryApiError as e:
            if e.status_code is None or isinstance(e, InvalidResponseError):
                logger.error(f"Error deleting data: {e.message}")
                show_message(store, "Error deleting data", ERROR)
            else:
                logger.warning(f"Failed to delete data: status={e.status_code}, error={e.message}")
                show_message(store, "Failed to delete data", ERROR)
            return False

        logger.info(f"Deleted {result.deleted_count} listings and upload history")
        show_message(store, f"Successfully deleted {result.deleted_count} listings and upload history")
        store.dispatch(AllDataDeleted())
        return True
