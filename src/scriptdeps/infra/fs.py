from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the per-user data directory and normalizes user-supplied
directory paths for the interfaces and the engine.
"""

import os
from typing import Optional

APP_DIR_NAME = "scriptdeps"
UNIX_APP_DIR_NAME = ".scriptdeps"


def get_user_data_dir() -> str:
    """
    Resolve the OS-specific directory for persistent application data.

    - Windows: %LOCALAPPDATA%/scriptdeps
    - Linux/Mac: ~/.scriptdeps

    Returns:
        str: Absolute path of the directory (created when missing).
    """
    path = ""
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        path = os.path.abspath(UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Turn a user-supplied directory into an absolute path.

    Expands '~' and environment variables; an empty input uses the fallback.

    Args:
        path: Raw path string.
        fallback: Path used when the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip() or fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))
