from __future__ import annotations

"""
Backup Traversal.

Walks a live znode tree depth-first and hands every leaf to a reap
function. Children are visited in the order the service lists them and
each visit queries the service again, so no snapshot isolation is implied.

Failures are confined to the subtree where they happen: the subtree is
logged, recorded in the WalkReport and the walk moves on to its siblings.
"""

import logging
from typing import List

from zkmirror.domain.constants import ROOT_PATH
from zkmirror.domain.errors import (
    ChildListFailure,
    ContentWriteFailure,
    PathDecodeFailure,
    ValueFetchFailure,
)
from zkmirror.domain.mirror_models import WalkReport
from zkmirror.domain.tree_models import ReapFn, TreeClient

logger = logging.getLogger(__name__)

# Failures that abandon one subtree without stopping the walk
_SUBTREE_FAILURES = (ChildListFailure, ValueFetchFailure, ContentWriteFailure, PathDecodeFailure)


def child_path(parent: str, name: str) -> str:
    """Join a child name onto its parent znode path."""
    if parent == ROOT_PATH:
        return ROOT_PATH + name
    return parent + "/" + name


class TreeWalker:
    """Depth-first, pre-order leaf collector over a tree service connection."""

    def __init__(self, client: TreeClient) -> None:
        self.client = client

    def walk(self, path: str, reap_fn: ReapFn) -> WalkReport:
        """
        Visit `path` and everything below it.

        Args:
            path: Absolute znode path to start from.
            reap_fn: Called once per leaf with (path, payload).

        Returns:
            WalkReport: Visit counters and the subtrees that were skipped.
        """
        report = WalkReport()
        stack: List[str] = [path]

        while stack:
            current = stack.pop()
            report.visited += 1
            logger.debug(f"On node {current}")

            try:
                children = self.client.list_children(current)
                logger.debug(f"{current} has {len(children)} children")

                if children:
                    # Reversed so that the first child is popped first
                    for name in reversed(children):
                        stack.append(child_path(current, name))
                    continue

                payload = self.client.get_value(current)
                reap_fn(current, payload)
                report.reaped += 1

            except _SUBTREE_FAILURES as e:
                logger.error(f"Skipping subtree {current}: {e}")
                report.skipped_paths.append(current)

        if report.skipped_paths:
            logger.warning(
                f"Walk of {path} finished with {report.skipped_subtrees} skipped subtree(s)"
            )
        return report
