"""Logging configuration for the directory admin page."""

import contextvars
import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator

from directory_admin.config import LOG_LEVEL

# Name of the user operation currently running (upload, test_parse, ...)
action_context: contextvars.ContextVar[str] = contextvars.ContextVar("action", default="N/A")

_configured = False


def setup_logging() -> None:
    """Configure root logger with custom format including action support."""
    global _configured
    if _configured:
        return
    _configured = True

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | [action=%(action)s] | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    old_factory = logging.getLogRecordFactory()

    def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = old_factory(*args, **kwargs)
        # Only set if not already set by extra
        if not hasattr(record, "action"):
            record.action = action_context.get()
        return record

    logging.setLogRecordFactory(record_factory)


@contextmanager
def action_scope(action: str) -> Iterator[None]:
    """Tag every log record emitted inside the block with ``action``."""
    token = action_context.set(action)
    try:
        yield
    finally:
        action_context.reset(token)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)
