"""Text builders for the messages, reports and history rows shown on the page."""

import json
from datetime import datetime
from typing import Sequence, Union

from directory_admin import config
from directory_admin.models.schemas import DryRunResponse, RowError

INVALID_FILE_MESSAGE = "Please select an Excel (.xlsx, .xls, .xlsm) or CSV file."


def format_kb(size_bytes: int, digits: int = 2) -> str:
    """Format a byte count as kilobytes, e.g. ``1.50 KB``."""
    return f"{size_bytes / 1024:.{digits}f} KB"


def format_timestamp(value: Union[datetime, str]) -> str:
    """Render an upload timestamp in local time."""
    if isinstance(value, str):
        return value
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%Y-%m-%d %H:%M:%S")


def badge_color(status: str) -> str:
    """Map an upload status to a Streamlit markdown color."""
    if status == "completed":
        return "green"
    if status == "partial":
        return "orange"
    return "red"


def upload_success_message(uploaded_count: int, error_count: int) -> str:
    errors_clause = f"{error_count} entries had errors." if error_count > 0 else ""
    return f"Successfully uploaded {uploaded_count} listings! {errors_clause}"


def format_row_errors(errors: Sequence[RowError], limit: int = config.MAX_ROW_ERRORS_SHOWN) -> str:
    """
    List the first ``limit`` row errors, one per line.

    Args:
        errors: Row errors returned by the bulk upload endpoint
        limit: Maximum number of errors to list

    Returns:
        Lines like ``Row 4 (Sheet: Plumbers): Missing EMAIL`` followed by an
        ``... and N more errors`` line when errors were left out
    """
    lines = []
    for err in errors[:limit]:
        sheet_info = f" (Sheet: {err.sheet})" if err.sheet else ""
        lines.append(f"Row {err.row}{sheet_info}: {err.error}")

    details = "\n".join(lines)
    if len(errors) > limit:
        details += f"\n... and {len(errors) - limit} more errors"
    return details


def upload_errors_report(errors: Sequence[RowError]) -> str:
    return (
        f"Upload completed with errors:\n\n{format_row_errors(errors)}"
        "\n\nCheck the application log for full details."
    )


def dry_run_report(result: DryRunResponse) -> str:
    """Summarize a dry-run parse result as plain text."""
    message = f"File: {result.file_name}\nFormat: {result.file_extension}\nTotal Rows: {result.total_rows}"

    if result.sheets:
        message += "\n\nSheets:"
        for sheet in result.sheets:
            message += f"\n{sheet.name}: {sheet.rows} rows"

    if result.auto_categorization is not None:
        message += "\n\nAuto-Categorization:"
        for tab, industry in result.auto_categorization.items():
            message += f"\n{tab} → {industry}"

    first_row = json.dumps(result.first_row, indent=2, ensure_ascii=False)
    message += f"\n\nHeaders: {', '.join(result.headers)}\n\nFirst Row: {first_row}"
    return message

