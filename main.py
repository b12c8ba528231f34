#!/usr/bin/env python3
from __future__ import annotations

"""Main entrypoint: validate the configuration and launch Streamlit."""

import subprocess
import sys
from pathlib import Path

from country_explorer.config import load_config
from country_explorer.errors import ConfigError


REPO_ROOT = Path(__file__).resolve().parent


def main() -> int:
    """Check the configuration, then hand over to the Streamlit UI."""
    try:
        config = load_config()
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    print(f"[info] Using source '{config.active_source}' ({config.display_policy.value})")
    cmd = [
        sys.executable,
        "-m",
        "streamlit",
        "run",
        str(REPO_ROOT / "streamlit_app.py"),
    ]
    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        print("\n[info] Interrupted by user (Ctrl+C). Exiting cleanly.")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
