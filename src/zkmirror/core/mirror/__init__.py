from __future__ import annotations

from .leaf_store import has_content, read_content, write_content
from .mirror_walker import MirrorWalker
from .path_codec import to_mirror_path, to_tree_path
from .reapers import make_mirror_reaper
from .tree_walker import TreeWalker, child_path

__all__ = [
    "MirrorWalker",
    "TreeWalker",
    "child_path",
    "has_content",
    "make_mirror_reaper",
    "read_content",
    "to_mirror_path",
    "to_tree_path",
    "write_content",
]
