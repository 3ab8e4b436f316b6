#!/usr/bin/env python3
"""Start the directory upload admin page."""

import sys
from pathlib import Path

from streamlit.web import cli as stcli

from directory_admin import config

if __name__ == "__main__":
    app_path = Path(__file__).parent / "directory_admin" / "app.py"

    print("=" * 60)
    print("Starting directory upload admin")
    print("=" * 60)
    print(f"Backend: {config.API_BASE}")
    print(f"Session cookie: {'set' if config.SESSION_COOKIE else 'not set'}")
    print(f"Log level: {config.LOG_LEVEL}")
    print("=" * 60)
    print("Press Ctrl+C to stop")
    print()

    sys.argv = ["streamlit", "run", str(app_path)]
    sys.exit(stcli.main())
