from __future__ import annotations

"""
ZooKeeper Connection Adapter.

Wraps a kazoo session behind the four-operation TreeClient contract used by
the mirroring core and translates kazoo failures into the mirror error
taxonomy. The connection is an explicit object owned by the caller.
"""

import logging
from typing import List, Optional

from kazoo.client import KazooClient
from kazoo.exceptions import KazooException
from kazoo.handlers.threading import KazooTimeoutError
from kazoo.security import OPEN_ACL_UNSAFE

from zkmirror.domain.constants import DEFAULT_CONNECT_TIMEOUT
from zkmirror.domain.errors import (
    ChildListFailure,
    ExistenceCheckFailure,
    NodeCreateFailure,
    ServiceUnreachable,
    ValueFetchFailure,
)

logger = logging.getLogger(__name__)


class KazooTreeClient:
    """TreeClient implementation backed by a started KazooClient."""

    def __init__(self, zk: KazooClient) -> None:
        self._zk = zk

    @classmethod
    def connect(cls, endpoint: str, timeout: float = DEFAULT_CONNECT_TIMEOUT) -> "KazooTreeClient":
        """
        Open a session against a ZooKeeper ensemble.

        Args:
            endpoint: Comma-separated host:port list.
            timeout: Connect timeout in seconds.

        Returns:
            KazooTreeClient: A connected client.

        Raises:
            ServiceUnreachable: If the endpoint is malformed or no session could
                be established in time.
        """
        logger.debug(f"Connecting to ZooKeeper at {endpoint} (timeout {timeout}s)")
        try:
            zk = KazooClient(hosts=endpoint, timeout=timeout)
        except ValueError as e:
            raise ServiceUnreachable(f"Invalid ZooKeeper endpoint {endpoint!r}: {e}", endpoint, e) from e

        try:
            zk.start(timeout=timeout)
        except (KazooTimeoutError, KazooException) as e:
            zk.close()
            raise ServiceUnreachable(f"Cannot connect to ZooKeeper at {endpoint}: {e}", endpoint, e) from e

        logger.info(f"Connected to ZooKeeper at {endpoint}")
        return cls(zk)

    def close(self) -> None:
        try:
            self._zk.stop()
        finally:
            self._zk.close()

    def __enter__(self) -> "KazooTreeClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # TreeClient contract
    # -------------------------------------------------------------------------

    def list_children(self, path: str) -> List[str]:
        try:
            return list(self._zk.get_children(path))
        except KazooException as e:
            raise ChildListFailure(f"Cannot list children of {path}: {e!r}", path, e) from e

    def get_value(self, path: str) -> bytes:
        try:
            data, _stat = self._zk.get(path)
        except KazooException as e:
            raise ValueFetchFailure(f"Cannot get value of {path}: {e!r}", path, e) from e
        return data or b""

    def exists(self, path: str) -> bool:
        try:
            return self._zk.exists(path) is not None
        except KazooException as e:
            raise ExistenceCheckFailure(f"Cannot check existence of {path}: {e!r}", path, e) from e

    def create(self, path: str, value: bytes = b"", acl: Optional[list] = None) -> str:
        try:
            return self._zk.create(path, value, acl=acl or OPEN_ACL_UNSAFE)
        except KazooException as e:
            raise NodeCreateFailure(f"Cannot create {path}: {e!r}", path, e) from e
