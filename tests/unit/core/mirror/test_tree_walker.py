from __future__ import annotations

"""
Unit tests for the Backup Traversal.

Verifies leaf classification, pre-order reaping, child path construction
and confinement of failures to their subtree.
"""

from typing import Callable, List, Tuple

from zkmirror.core.mirror.tree_walker import TreeWalker, child_path
from zkmirror.domain.errors import ContentWriteFailure


def _collect() -> Tuple[List[Tuple[str, bytes]], Callable[[str, bytes], None]]:
    reaped: List[Tuple[str, bytes]] = []

    def reap(path: str, payload: bytes) -> None:
        reaped.append((path, payload))

    return reaped, reap


def test_child_path_joining() -> None:
    """TC-01: The root concatenates directly, other paths use one slash."""
    assert child_path("/", "a") == "/a"
    assert child_path("/a", "b") == "/a/b"


def test_reaps_only_leaves(sample_tree) -> None:
    """TC-02: Branches are traversed, leaves are reaped with their payload."""
    reaped, reap = _collect()

    report = TreeWalker(sample_tree).walk("/", reap)

    assert reaped == [("/x", b"hello"), ("/y/z/w", b"world")]
    assert report.reaped == 2
    assert report.visited == 5
    assert report.complete is True
    # Branch values are never fetched
    assert ("get_value", "/y") not in sample_tree.calls
    assert ("get_value", "/y/z") not in sample_tree.calls


def test_depth_first_preorder_in_service_order(empty_tree) -> None:
    """TC-03: A subtree is exhausted before the next sibling is entered."""
    for path in ["/b/2", "/a", "/b/1/deep", "/c"]:
        empty_tree.add(path, path.encode())
    reaped, reap = _collect()

    TreeWalker(empty_tree).walk("/", reap)

    assert [p for p, _ in reaped] == ["/b/2", "/b/1/deep", "/a", "/c"]


def test_walk_from_subtree(sample_tree) -> None:
    """TC-04: Walking a non-root path only reaps below it."""
    reaped, reap = _collect()

    TreeWalker(sample_tree).walk("/y", reap)

    assert reaped == [("/y/z/w", b"world")]


def test_child_list_failure_does_not_stop_siblings(empty_tree) -> None:
    """TC-05: A failing subtree is skipped and its siblings are still reaped."""
    empty_tree.add("/a/1", b"a1")
    empty_tree.add("/b/1", b"b1")
    empty_tree.add("/c", b"c")
    empty_tree.fail_list.add("/b")
    reaped, reap = _collect()

    report = TreeWalker(empty_tree).walk("/", reap)

    assert [p for p, _ in reaped] == ["/a/1", "/c"]
    assert report.skipped_paths == ["/b"]
    assert report.skipped_subtrees == 1
    assert report.complete is False


def test_value_fetch_failure_skips_leaf(sample_tree) -> None:
    """TC-06: A leaf whose value cannot be fetched is skipped."""
    sample_tree.fail_get.add("/x")
    reaped, reap = _collect()

    report = TreeWalker(sample_tree).walk("/", reap)

    assert reaped == [("/y/z/w", b"world")]
    assert report.skipped_paths == ["/x"]


def test_reap_failure_is_localized(sample_tree) -> None:
    """TC-07: A write failure in the reap function counts as a skipped leaf."""
    reaped: List[str] = []

    def reap(path: str, payload: bytes) -> None:
        if path == "/x":
            raise ContentWriteFailure("disk full", path)
        reaped.append(path)

    report = TreeWalker(sample_tree).walk("/", reap)

    assert reaped == ["/y/z/w"]
    assert report.reaped == 1
    assert report.skipped_paths == ["/x"]


def test_unreachable_start_path(empty_tree) -> None:
    """TC-08: A missing start node yields an empty, incomplete report."""
    reaped, reap = _collect()

    report = TreeWalker(empty_tree).walk("/missing", reap)

    assert reaped == []
    assert report.skipped_paths == ["/missing"]


def test_deep_tree_has_no_recursion_limit(empty_tree) -> None:
    """TC-09: Trees deeper than the interpreter recursion limit are walked."""
    deep = "".join(f"/n{i}" for i in range(1500))
    empty_tree.add(deep, b"bottom")
    reaped, reap = _collect()

    TreeWalker(empty_tree).walk("/", reap)

    assert reaped == [(deep, b"bottom")]
