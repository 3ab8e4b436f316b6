"""Configuration constants for the directory admin page."""

import os
from pathlib import Path
from typing import Final, Optional

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Backend
API_BASE: Final[str] = os.getenv("DIRECTORY_API_BASE", "http://localhost:5000").rstrip("/")

# The admin session is established elsewhere; the page only replays its cookie
SESSION_COOKIE_NAME: Final[str] = os.getenv("SESSION_COOKIE_NAME", "connect.sid")
SESSION_COOKIE: Final[Optional[str]] = os.getenv("SESSION_COOKIE")

# Request timeouts (seconds)
HISTORY_TIMEOUT_SECONDS: Final[float] = float(os.getenv("HISTORY_TIMEOUT_SECONDS", "30"))
UPLOAD_TIMEOUT_SECONDS: Final[float] = float(os.getenv("UPLOAD_TIMEOUT_SECONDS", "120"))

# Allowed file types
ALLOWED_FILE_TYPES: Final[tuple[str, ...]] = ("xlsx", "xls", "xlsm", "csv")
MAX_FILE_SIZE_MB: Final[int] = 10  # enforced by the backend, shown for reference
DEFAULT_MIME_TYPE: Final[str] = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Status messages
STATUS_MESSAGE_SECONDS: Final[float] = float(os.getenv("STATUS_MESSAGE_SECONDS", "5"))

# Simulated upload progress
PROGRESS_INTERVAL_SECONDS: Final[float] = float(os.getenv("PROGRESS_INTERVAL_SECONDS", "0.2"))
PROGRESS_STEP: Final[int] = 10
PROGRESS_CAP: Final[int] = 90

# Number of row errors listed in the upload report
MAX_ROW_ERRORS_SHOWN: Final[int] = 5

# Logging
LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL", "INFO")
