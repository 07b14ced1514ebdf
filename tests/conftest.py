from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. An in-memory tree service with per-operation failure injection.
3. Shared fixtures for trees and configuration dictionaries.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from zkmirror.domain.errors import (  # noqa: E402
    ChildListFailure,
    ExistenceCheckFailure,
    NodeCreateFailure,
    ValueFetchFailure,
)


# -----------------------------------------------------------------------------
# In-memory tree service
# -----------------------------------------------------------------------------
class InMemoryTreeClient:
    """
    Dict-backed stand-in for a ZooKeeper connection.

    Children keep insertion order. Paths listed in the fail_* sets raise the
    corresponding mirror error, and every call is recorded in `calls`.
    """

    def __init__(self) -> None:
        self.values: Dict[str, bytes] = {"/": b""}
        self.children: Dict[str, List[str]] = {"/": []}
        self.fail_list: Set[str] = set()
        self.fail_get: Set[str] = set()
        self.fail_exists: Set[str] = set()
        self.fail_create: Set[str] = set()
        self.calls: List[Tuple[str, str]] = []
        self.closed = False

    def add(self, path: str, value: bytes = b"") -> None:
        """Insert a znode, creating missing parents with empty values."""
        parent = "/"
        for name in path.strip("/").split("/"):
            current = parent.rstrip("/") + "/" + name
            if current not in self.values:
                self.children[parent].append(name)
                self.children[current] = []
                self.values[current] = b""
            parent = current
        self.values[path] = value

    def list_children(self, path: str) -> List[str]:
        self.calls.append(("list_children", path))
        if path in self.fail_list or path not in self.values:
            raise ChildListFailure(f"cannot list {path}", path)
        return list(self.children[path])

    def get_value(self, path: str) -> bytes:
        self.calls.append(("get_value", path))
        if path in self.fail_get or path not in self.values:
            raise ValueFetchFailure(f"cannot get {path}", path)
        return self.values[path]

    def exists(self, path: str) -> bool:
        self.calls.append(("exists", path))
        if path in self.fail_exists:
            raise ExistenceCheckFailure(f"cannot check {path}", path)
        return path in self.values

    def create(self, path: str, value: bytes = b"", acl: Optional[list] = None) -> str:
        self.calls.append(("create", path))
        parent = path.rpartition("/")[0] or "/"
        if path in self.fail_create or path in self.values or parent not in self.values:
            raise NodeCreateFailure(f"cannot create {path}", path)
        self.add(path, value)
        return path

    def close(self) -> None:
        self.closed = True


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def empty_tree() -> InMemoryTreeClient:
    """Return a tree holding only the root znode."""
    return InMemoryTreeClient()


@pytest.fixture
def sample_tree() -> InMemoryTreeClient:
    """
    Return the reference tree.

    Structure:
    /
      x        = "hello"
      y
        z
          w    = "world"
    """
    client = InMemoryTreeClient()
    client.add("/x", b"hello")
    client.add("/y/z/w", b"world")
    return client


@pytest.fixture
def connect_to() -> Callable[[InMemoryTreeClient], Callable[[str, float], InMemoryTreeClient]]:
    """Build a connect factory handing out the given in-memory tree."""
    def factory(client: InMemoryTreeClient) -> Callable[[str, float], InMemoryTreeClient]:
        def connect(endpoint: str, timeout: float) -> InMemoryTreeClient:
            return client
        return connect
    return factory


@pytest.fixture
def mock_config_dict(tmp_path: Path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'zkmirror.domain.config' with every
    path pointing inside the test's temporary directory.
    """
    return {
        "endpoint": "127.0.0.1:2181",
        "connect_timeout": 1.0,
        "snapshot_id": "snap-test",
        "work_dir": str(tmp_path / "work"),
        "keep_mirror": False,
        "storage_target": "local",
        "local_target_dir": str(tmp_path / "store"),
        "remote_url": "",
    }
