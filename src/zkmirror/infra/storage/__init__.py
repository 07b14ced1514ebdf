from __future__ import annotations

"""
Storage Target Infrastructure.

Facade over the storage-target selector and the local/remote transfer
clients.
"""

from zkmirror.infra.storage.common import calculate_sha256, lookup_storage_target
from zkmirror.infra.storage.local_client import fetch_local, store_local
from zkmirror.infra.storage.remote_client import download_artifact, upload_artifact
from zkmirror.infra.storage.transfer import from_remote, to_remote

__all__ = [
    "calculate_sha256",
    "download_artifact",
    "fetch_local",
    "from_remote",
    "lookup_storage_target",
    "store_local",
    "to_remote",
    "upload_artifact",
]
