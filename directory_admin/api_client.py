"""Calls to the directory backend.

Every function takes a ``requests.Session`` so the admin session cookie is sent
with each request, and raises a ``DirectoryApiError`` subclass on failure.
"""

from typing import Any, Callable, List, Optional, TypeVar

import requests
from pydantic import TypeAdapter, ValidationError

from directory_admin import config
from directory_admin.exceptions import (
    BackendConnectionError,
    BackendTimeoutError,
    DirectoryApiError,
    InvalidResponseError,
)
from directory_admin.logging_config import get_logger
from directory_admin.models.schemas import (
    BulkUploadResponse,
    DeleteAllResponse,
    DryRunResponse,
    ErrorBody,
    UploadHistoryEntry,
)

logger = get_logger(__name__)

T = TypeVar("T")

UPLOAD_HISTORY_PATH = "/api/directory/upload-history"
CLEAR_ALL_PATH = "/api/directory/clear-all"
BULK_UPLOAD_PATH = "/api/directory/bulk-upload"
TEST_PARSE_PATH = "/api/directory/test-parse"

_history_adapter = TypeAdapter(List[UploadHistoryEntry])


def build_session(
    cookie_value: Optional[str] = config.SESSION_COOKIE,
    cookie_name: str = config.SESSION_COOKIE_NAME,
) -> requests.Session:
    """Create an HTTP session carrying the admin session cookie, if configured."""
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    if cookie_value:
        session.cookies.set(cookie_name, cookie_value)
    return session


def extract_error_message(response: requests.Response, fallback: str) -> str:
    """Return the ``error`` field of a JSON error body, or ``fallback``."""
    try:
        body = ErrorBody.model_validate(response.json())
    except (ValueError, ValidationError):
        return fallback
    return body.error or fallback


def _send(method: Callable[..., requests.Response], url: str, **kwargs: Any) -> requests.Response:
    try:
        return method(url, **kwargs)
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Unable to connect to backend: {url}")
        raise BackendConnectionError(f"Unable to connect to backend service at {config.API_BASE}") from e
    except requests.exceptions.Timeout as e:
        logger.error(f"Request timed out: {url}")
        raise BackendTimeoutError("Request timed out. Please try again later.") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request failed: {url}, error={e}")
        raise DirectoryApiError(str(e)) from e


def _parse(response: requests.Response, parser: Callable[[Any], T]) -> T:
    try:
        return parser(response.json())
    except (ValueError, ValidationError) as e:
        logger.error(f"Unexpected response body from {response.url}: {e}")
        raise InvalidResponseError("Unexpected response from backend", response.status_code) from e


def _check(response: requests.Response, fallback: str) -> None:
    if not response.ok:
        message = extract_error_message(response, fallback)
        logger.warning(f"Backend returned {response.status_code} for {response.url}: {message}")
        raise DirectoryApiError(message, response.status_code)


def call_upload_history_api(
    session: requests.Session,
    base_url: str = config.API_BASE,
) -> List[UploadHistoryEntry]:
    """Fetch the list of past bulk uploads."""
    response = _send(
        session.get,
        f"{base_url}{UPLOAD_HISTORY_PATH}",
        timeout=config.HISTORY_TIMEOUT_SECONDS,
    )
    _check(response, "Failed to fetch upload history")
    return _parse(response, _history_adapter.validate_python)


def call_clear_all_api(
    session: requests.Session,
    base_url: str = config.API_BASE,
) -> DeleteAllResponse:
    """Delete every uploaded listing together with the upload history."""
    response = _send(
        session.delete,
        f"{base_url}{CLEAR_ALL_PATH}",
        timeout=config.HISTORY_TIMEOUT_SECONDS,
    )
    _check(response, "Failed to delete data")
    return _parse(response, DeleteAllResponse.model_validate)


def call_bulk_upload_api(
    session: requests.Session,
    file_content: bytes,
    file_name: str,
    mime_type: Optional[str] = None,
    base_url: str = config.API_BASE,
) -> BulkUploadResponse:
    """Upload a spreadsheet so the backend creates directory listings from it."""
    files = {"file": (file_name, file_content, mime_type or config.DEFAULT_MIME_TYPE)}
    logger.info(f"Uploading {file_name}, size={len(file_content)} bytes")

    response = _send(
        session.post,
        f"{base_url}{BULK_UPLOAD_PATH}",
        files=files,
        timeout=config.UPLOAD_TIMEOUT_SECONDS,
    )
    _check(response, "Upload failed")
    return _parse(response, BulkUploadResponse.model_validate)


def call_test_parse_api(
    session: requests.Session,
    file_content: bytes,
    file_name: str,
    mime_type: Optional[str] = None,
    base_url: str = config.API_BASE,
) -> DryRunResponse:
    """Ask the backend what it would extract from a file, without storing anything."""
    files = {"file": (file_name, file_content, mime_type or config.DEFAULT_MIME_TYPE)}
    logger.info(f"Test parsing {file_name}, size={len(file_content)} bytes")

    response = _send(
        session.post,
        f"{base_url}{TEST_PARSE_PATH}",
        files=files,
        timeout=config.UPLOAD_TIMEOUT_SECONDS,
    )
    _check(response, "Test parse failed")
    return _parse(response, DryRunResponse.model_validate)
