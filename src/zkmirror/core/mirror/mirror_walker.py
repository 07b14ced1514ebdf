from __future__ import annotations

"""
Restore Traversal.

Replays a mirror directory into a znode tree. Directories are visited in
explicit pre-order (a parent before its children, siblings sorted by name)
so that every branch exists before its children are created.

The insertion policy is additive: a znode that already exists is left
untouched. Any failure aborts the remaining walk, since continuing after a
missed parent would leave the tree half-built in unknown order.
"""

import logging
import os
from typing import List, Optional

from zkmirror.core.mirror.leaf_store import has_content, read_content
from zkmirror.core.mirror.path_codec import to_tree_path
from zkmirror.domain.constants import CONTENT_FILE, RESERVED_ROOT_ENTRIES
from zkmirror.domain.errors import ContentReadFailure
from zkmirror.domain.mirror_models import RestoreReport
from zkmirror.domain.tree_models import TreeClient

logger = logging.getLogger(__name__)


class MirrorWalker:
    """Pre-order, create-if-absent restorer over a tree service connection."""

    def __init__(self, client: TreeClient, acl: Optional[list] = None) -> None:
        self.client = client
        self.acl = acl
        self.report = RestoreReport()

    def restore(self, snapshot_root: str) -> RestoreReport:
        """
        Create every znode of the mirror that the tree does not hold yet.

        Args:
            snapshot_root: Mirror directory standing for the root znode.

        Returns:
            RestoreReport: Counters of created and skipped znodes.

        Raises:
            ExistenceCheckFailure, ContentReadFailure, NodeCreateFailure,
            PathDecodeFailure: On the first failure; `self.report` keeps the
                counters reached so far.
        """
        self.report = RestoreReport()
        snapshot_root = os.path.abspath(snapshot_root)
        stack: List[str] = list(reversed(self._subdirectories(snapshot_root, is_root=True)))

        while stack:
            current = stack.pop()
            self._visit(snapshot_root, current)
            stack.extend(reversed(self._subdirectories(current)))

        logger.info(
            f"Restore of {snapshot_root} done: {self.report.created} created, "
            f"{self.report.skipped_existing} already present"
        )
        return self.report

    def _visit(self, snapshot_root: str, mirror_dir: str) -> None:
        znode = to_tree_path(os.path.relpath(mirror_dir, snapshot_root))
        self.report.visited += 1

        if self.client.exists(znode):
            logger.info(f"znode {znode} exists already")
            self.report.skipped_existing += 1
            return

        if has_content(mirror_dir):
            logger.debug(f"Attempting to insert {znode} as leaf znode")
            payload = read_content(mirror_dir)
            self.client.create(znode, payload, self.acl)
            self.report.created_leaves += 1
            logger.info(f"Created leaf znode {znode}")
        else:
            logger.debug(f"Attempting to insert {znode} as a non-leaf znode")
            self.client.create(znode, b"", self.acl)
            self.report.created_branches += 1
            logger.info(f"Created non-leaf znode {znode}")

    @staticmethod
    def _subdirectories(path: str, is_root: bool = False) -> List[str]:
        """
        List child directories in name order.

        Only files are reserved: the metadata marker at the snapshot root and
        content files. A directory with a reserved name is a regular znode.
        """
        subdirs: List[str] = []
        try:
            with os.scandir(path) as it:
                for entry in it:
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(entry.path)
                    elif entry.name == CONTENT_FILE or (is_root and entry.name in RESERVED_ROOT_ENTRIES):
                        continue
                    else:
                        logger.debug(f"Ignoring stray file {entry.path}")
        except OSError as e:
            raise ContentReadFailure(f"Cannot list mirror directory {path}: {e}", path, e) from e
        subdirs.sort()
        return subdirs
