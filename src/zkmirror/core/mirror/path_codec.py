from __future__ import annotations

"""
Znode Path Codec.

Maps absolute znode paths to filesystem-safe paths relative to a snapshot
root and back. The snapshot root itself stands for "/". Colons are legal in
znode names but not on every filesystem, so each one is replaced by a fixed
placeholder token on the way out and restored on the way in.

Names that already contain the placeholder token decode to a colon; such
names cannot round-trip.
"""

import os

from zkmirror.domain.constants import ESC_COLON, ROOT_PATH
from zkmirror.domain.errors import PathDecodeFailure

_RESERVED_SEGMENTS = (".", "..")


def to_mirror_path(tree_path: str) -> str:
    """
    Translate an absolute znode path into a relative mirror path.

    Args:
        tree_path: Absolute slash-delimited znode path.

    Returns:
        str: Path relative to the snapshot root ("" for the root znode).

    Raises:
        PathDecodeFailure: If the znode path is not absolute or malformed.
    """
    if not tree_path.startswith(ROOT_PATH):
        raise PathDecodeFailure(f"Not an absolute znode path: {tree_path!r}", tree_path)
    if tree_path == ROOT_PATH:
        return ""

    segments = tree_path[1:].split("/")
    for seg in segments:
        if not seg or seg in _RESERVED_SEGMENTS:
            raise PathDecodeFailure(f"Malformed znode path: {tree_path!r}", tree_path)

    return os.path.join(*[escape_segment(seg) for seg in segments])


def to_tree_path(relative_path: str) -> str:
    """
    Translate a mirror path relative to the snapshot root into a znode path.

    Args:
        relative_path: Filesystem path relative to the snapshot root.

    Returns:
        str: Absolute znode path ("/" for the snapshot root).

    Raises:
        PathDecodeFailure: If the path is absolute, escapes the root or has
            empty segments.
    """
    if relative_path in ("", os.curdir):
        return ROOT_PATH
    if os.path.isabs(relative_path):
        raise PathDecodeFailure(f"Mirror path is not relative: {relative_path!r}", relative_path)

    segments = relative_path.replace(os.sep, "/").split("/")
    for seg in segments:
        if not seg or seg in _RESERVED_SEGMENTS:
            raise PathDecodeFailure(f"Malformed mirror path: {relative_path!r}", relative_path)

    return ROOT_PATH + "/".join(unescape_segment(seg) for seg in segments)


def escape_segment(name: str) -> str:
    return name.replace(":", ESC_COLON)


def unescape_segment(name: str) -> str:
    return name.replace(ESC_COLON, ":")


def has_escape_collision(name: str) -> bool:
    """Tell whether a znode name would not survive an escape round trip."""
    return ESC_COLON in name
