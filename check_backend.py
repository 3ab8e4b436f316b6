#!/usr/bin/env python3
"""Check that the directory backend is reachable with the configured session."""

import argparse
import sys

from directory_admin import api_client, config
from directory_admin.exceptions import DirectoryApiError


def check_upload_history(base_url: str) -> bool:
    """Fetch the upload history and print a short summary."""
    print("=" * 60)
    print("Checking upload history endpoint")
    print("=" * 60)
    session = api_client.build_session()
    try:
        entries = api_client.call_upload_history_api(session, base_url=base_url)
    except DirectoryApiError as e:
        status = f" (status {e.status_code})" if e.status_code else ""
        print(f"❌ Error{status}: {e.message}")
        return False

    print(f"Entries: {len(entries)}")
    for entry in entries[:5]:
        print(f"  {entry.original_name}: {entry.status} {entry.successful_uploads}/{entry.total_rows} rows")
    return True


def main():
    parser = argparse.ArgumentParser(description="Check the directory backend")
    parser.add_argument(
        "--url",
        type=str,
        default=config.API_BASE,
        help=f"Backend base URL (default: {config.API_BASE})",
    )

    args = parser.parse_args()

    if not check_upload_history(args.url.rstrip("/")):
        print("\n⚠️  Backend unreachable or session cookie rejected.")
        print("   Set DIRECTORY_API_BASE and SESSION_COOKIE in .env")
        sys.exit(1)

    print("\n✅ Backend check passed")


if __name__ == "__main__":
    main()
