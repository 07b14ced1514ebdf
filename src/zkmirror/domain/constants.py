from __future__ import annotations

"""
Domain Constants.

Centralizes the fixed names of the mirror layout and the identifiers of the
supported storage targets.
"""

from typing import Dict

# -----------------------------------------------------------------------------
# MIRROR LAYOUT
# -----------------------------------------------------------------------------

# Name of the file holding a leaf znode payload inside its mirror directory
CONTENT_FILE = "content"

# Reserved metadata marker written at the snapshot root
META_FILE = ".zkmirror"

# Snapshot root entries that never stand for a znode
RESERVED_ROOT_ENTRIES = (META_FILE,)

# Placeholder substituted for ':' in mirrored directory names
ESC_COLON = "ZKMIRROR_ESC_COLON"

ARCHIVE_EXTENSION = ".zip"
SNAPSHOT_ID_PREFIX = "zk"

# -----------------------------------------------------------------------------
# TREE SERVICE
# -----------------------------------------------------------------------------

ROOT_PATH = "/"
DEFAULT_ENDPOINT = "127.0.0.1:2181"
DEFAULT_CONNECT_TIMEOUT = 1.0

# -----------------------------------------------------------------------------
# STORAGE TARGETS
# -----------------------------------------------------------------------------

TARGET_TTY = "tty"
TARGET_LOCAL = "local"
TARGET_REMOTE = "remote"

# Values > 0 denote targets that archive and transfer snapshots
STORAGE_TARGETS: Dict[str, int] = {
    TARGET_TTY: 0,
    TARGET_LOCAL: 1,
    TARGET_REMOTE: 2,
}
