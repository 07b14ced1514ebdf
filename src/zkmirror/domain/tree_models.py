from __future__ import annotations

"""
Tree Service Domain Models.

Describes the contract the mirroring core expects from a tree service
connection and the per-leaf action applied while traversing it.
"""

from typing import Callable, List, Optional, Protocol

# Caller-supplied action applied once per leaf during backup: (path, payload)
ReapFn = Callable[[str, bytes], None]


class TreeClient(Protocol):
    """
    The four blocking operations the mirroring core performs on the tree.

    Implementations raise ChildListFailure, ValueFetchFailure,
    ExistenceCheckFailure and NodeCreateFailure respectively.
    """

    def list_children(self, path: str) -> List[str]:
        ...

    def get_value(self, path: str) -> bytes:
        ...

    def exists(self, path: str) -> bool:
        ...

    def create(self, path: str, value: bytes = b"", acl: Optional[list] = None) -> str:
        ...
