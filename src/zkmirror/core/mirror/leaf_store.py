from __future__ import annotations

"""
Leaf Payload Store.

Reads and writes the payload of a single leaf znode to the content file
inside its mirror directory. Payloads are stored verbatim; branch
directories never receive a content file.
"""

import logging
import os

from zkmirror.domain.constants import CONTENT_FILE
from zkmirror.domain.errors import ContentNotFound, ContentReadFailure, ContentWriteFailure

logger = logging.getLogger(__name__)


def content_path(mirror_dir: str) -> str:
    return os.path.join(mirror_dir, CONTENT_FILE)


def has_content(mirror_dir: str) -> bool:
    """Tell whether a mirror directory represents a leaf."""
    return os.path.isfile(content_path(mirror_dir))


def read_content(mirror_dir: str) -> bytes:
    """
    Load the payload stored for a leaf.

    Args:
        mirror_dir: Mirror directory of the leaf.

    Returns:
        bytes: Raw payload.

    Raises:
        ContentNotFound: If the directory holds no content file.
        ContentReadFailure: On any other I/O fault.
    """
    cfile = content_path(mirror_dir)
    if not os.path.isfile(cfile):
        raise ContentNotFound(f"No content file in {mirror_dir}", cfile)

    try:
        with open(cfile, "rb") as f:
            return f.read()
    except OSError as e:
        raise ContentReadFailure(f"Cannot read {cfile}: {e}", cfile, e) from e


def write_content(mirror_dir: str, payload: bytes) -> str:
    """
    Store the payload of a leaf, creating its mirror directory chain.

    The content file is created exclusively: an existing one is never
    overwritten.

    Args:
        mirror_dir: Mirror directory of the leaf.
        payload: Raw payload bytes.

    Returns:
        str: Path of the written content file.

    Raises:
        ContentWriteFailure: If the file exists already or cannot be written.
    """
    cfile = content_path(mirror_dir)
    try:
        os.makedirs(mirror_dir, exist_ok=True)
        with open(cfile, "xb") as f:
            f.write(payload)
    except OSError as e:
        raise ContentWriteFailure(f"Cannot write {cfile}: {e}", cfile, e) from e

    logger.debug(f"Stored {len(payload)} bytes at {cfile}")
    return cfile
