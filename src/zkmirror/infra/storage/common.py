from __future__ import annotations

import hashlib

from zkmirror import __version__
from zkmirror.domain.constants import STORAGE_TARGETS

USER_AGENT = f"zkmirror-Client/{__version__}"
DEFAULT_TIMEOUT = 30
CHUNK_SIZE = 8192


def lookup_storage_target(name: str) -> int:
    """
    Classify a storage target name.

    Returns:
        int: 0 for the interactive no-op target, > 0 for targets that
            archive and transfer, -1 for unknown names.
    """
    return STORAGE_TARGETS.get((name or "").strip().lower(), -1)


def calculate_sha256(file_path: str) -> str:
    """Compute SHA-256 digest for local file integrity verification."""
    sha256_hash = hashlib.sha256()
    with open(file_path, "rb") as f:
        for byte_block in iter(lambda: f.read(4096), b""):
            sha256_hash.update(byte_block)
    return sha256_hash.hexdigest()
