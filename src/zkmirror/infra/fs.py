from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, application data directory resolution and
mirror directory housekeeping. Acts as an abstraction over the 'os' and
'shutil' modules so that the rest of the application shares one behavior
across Windows and Unix-like systems.
"""

import os
import shutil
from typing import Optional, Tuple

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "zkmirror"
UNIX_APP_DIR_NAME = ".zkmirror"
SNAPSHOTS_SUBDIR = "snapshots"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/zkmirror
    - Linux/Mac: ~/.zkmirror

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def get_default_snapshots_dir() -> str:
    """Return the default store used by the local storage target."""
    return os.path.join(get_user_data_dir(), SNAPSHOTS_SUBDIR)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def get_mirror_path(work_dir: str, snapshot_id: str) -> str:
    """Locate the mirror directory of a snapshot inside the working directory."""
    return os.path.join(work_dir, snapshot_id)

# -----------------------------------------------------------------------------
# FILESYSTEM OPERATIONS API
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


def remove_tree(path: str) -> bool:
    """
    Delete a directory hierarchy, tolerating its absence.

    Returns:
        bool: True if nothing remains at the path afterwards.
    """
    if not os.path.exists(path):
        return True
    shutil.rmtree(path, ignore_errors=True)
    return not os.path.exists(path)
