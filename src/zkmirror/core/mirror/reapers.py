from __future__ import annotations

"""
Reap Functions.

Builds the per-leaf actions used by the backup traversal.
"""

import logging
import os

from zkmirror.core.mirror.leaf_store import write_content
from zkmirror.core.mirror.path_codec import has_escape_collision, to_mirror_path
from zkmirror.domain.constants import RESERVED_ROOT_ENTRIES, ROOT_PATH
from zkmirror.domain.errors import ContentWriteFailure
from zkmirror.domain.tree_models import ReapFn

logger = logging.getLogger(__name__)


def make_mirror_reaper(snapshot_root: str) -> ReapFn:
    """
    Create a reap function that stores each leaf under `snapshot_root`.

    Leaves below a top-level znode named like the metadata marker cannot be
    stored; the reap function raises ContentWriteFailure for them and the
    walk skips them.

    Args:
        snapshot_root: Mirror directory standing for the root znode.

    Returns:
        ReapFn: Callable writing (path, payload) into the mirror.
    """

    def reap(path: str, payload: bytes) -> None:
        if path == ROOT_PATH:
            # The snapshot root is reserved and never restored as a znode
            logger.debug("Root znode has no children, nothing to mirror")
            return
        if any(has_escape_collision(seg) for seg in path.split("/")):
            logger.warning(f"znode {path} contains the colon escape token and will not restore verbatim")
        relative = to_mirror_path(path)
        if relative.split(os.sep, 1)[0] in RESERVED_ROOT_ENTRIES:
            raise ContentWriteFailure(
                f"znode {path} collides with the reserved snapshot root entry", path
            )
        mirror_dir = os.path.join(snapshot_root, relative)
        write_content(mirror_dir, payload)
        logger.debug(f"Reaped leaf znode {path}")

    return reap
