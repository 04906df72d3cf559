"""
Environment helpers.

Developers often keep local overrides (timezone, log level, timeout) in a repo-local
`.env` file. Running via uvicorn/CLI/pytest from different working directories should
still pick it up, so the file is searched upwards from the current directory.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv, load_dotenv


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load `.env` once if present; returns the loaded env path (or None).

    `HIKECAST_ENV_FILE` points at an explicit file. It never overrides env vars already
    set in the process environment.
    """
    explicit = os.getenv("HIKECAST_ENV_FILE")
    if explicit:
        env_path = Path(explicit).expanduser().resolve()
    else:
        found = find_dotenv(usecwd=True)
        if not found:
            return None
        env_path = Path(found)

    if not env_path.is_file():
        return None
    load_dotenv(dotenv_path=env_path, override=False)
    return env_path
