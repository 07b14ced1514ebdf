from __future__ import annotations

"""
Storage Target Dispatch.

Routes snapshot artifacts to and from the configured storage target. The
interactive `tty` target never archives or transfers anything.
"""

import logging
from typing import Any, Dict

from zkmirror.domain.constants import TARGET_LOCAL, TARGET_REMOTE
from zkmirror.domain.errors import ConfigurationError
from zkmirror.infra.storage.local_client import fetch_local, store_local
from zkmirror.infra.storage.remote_client import download_artifact, upload_artifact

logger = logging.getLogger(__name__)


def to_remote(artifact: str, cfg: Dict[str, Any]) -> str:
    """
    Ship an artifact to the configured storage target.

    Returns:
        str: Location of the artifact at the target.
    """
    target = cfg.get("storage_target", "")
    if target == TARGET_LOCAL:
        return store_local(artifact, cfg["local_target_dir"])
    if target == TARGET_REMOTE:
        return upload_artifact(artifact, _require_remote_url(cfg))
    raise ConfigurationError(f"Storage target '{target}' does not accept artifacts", target)


def from_remote(name: str, cfg: Dict[str, Any], dest_dir: str) -> str:
    """
    Retrieve an artifact from the configured storage target into `dest_dir`.

    Returns:
        str: Local path of the retrieved artifact.
    """
    target = cfg.get("storage_target", "")
    if target == TARGET_LOCAL:
        return fetch_local(name, cfg["local_target_dir"], dest_dir)
    if target == TARGET_REMOTE:
        return download_artifact(name, _require_remote_url(cfg), dest_dir)
    raise ConfigurationError(f"Storage target '{target}' does not provide artifacts", target)


def _require_remote_url(cfg: Dict[str, Any]) -> str:
    url = (cfg.get("remote_url") or "").strip()
    if not url:
        raise ConfigurationError("The remote storage target requires 'remote_url'", "remote_url")
    return url
