from __future__ import annotations

"""
Core orchestration engine.

Coordinates the two snapshot workflows.

Backup:
1. Validates configuration and resolves the snapshot id.
2. Connects to the tree service.
3. Walks the tree, reaping every leaf into a fresh mirror directory.
4. Writes the metadata marker.
5. Archives and transfers the mirror when the storage target asks for it.

Restore:
1. Validates configuration (a snapshot id and a transferring target are required).
2. Fetches and unpacks the artifact into a staging directory.
3. Connects to the tree service.
4. Replays the mirror into the tree, creating absent znodes only.
"""

import logging
import os
import tempfile
from typing import Any, Callable, Dict, Optional

from zkmirror.core.mirror.mirror_walker import MirrorWalker
from zkmirror.core.mirror.reapers import make_mirror_reaper
from zkmirror.core.mirror.tree_walker import TreeWalker
from zkmirror.core.validator import validate_config
from zkmirror.domain.config import generate_snapshot_id
from zkmirror.domain.constants import ROOT_PATH
from zkmirror.domain.errors import MirrorError
from zkmirror.domain.mirror_models import (
    BackupResult,
    RestoreResult,
    WalkReport,
    create_backup_result,
    create_restore_result,
)
from zkmirror.domain.tree_models import TreeClient
from zkmirror.infra.fs import get_mirror_path, remove_tree
from zkmirror.infra.storage import from_remote, lookup_storage_target, to_remote
from zkmirror.infra.zk_client import KazooTreeClient
from zkmirror.services.snapshot import archive, artifact_name, unarchive, write_metadata

logger = logging.getLogger(__name__)

ConnectFn = Callable[[str, float], TreeClient]


def run_backup(
        config: Optional[Dict[str, Any]],
        *,
        connect: ConnectFn = KazooTreeClient.connect,
) -> BackupResult:
    """
    Execute a full backup of the tree into a snapshot.

    Args:
        config: The configuration dictionary (raw or partial).
        connect: Factory opening a tree service connection (endpoint, timeout).

    Returns:
        BackupResult: Status, traversal counters and artifact location.
    """
    logger.info("Backup started.")
    cfg = _prepare_config(config)
    if not cfg["snapshot_id"]:
        cfg["snapshot_id"] = generate_snapshot_id()

    if not cfg["endpoint"]:
        return _backup_failure(cfg, "No tree service endpoint configured.")

    target_level = lookup_storage_target(cfg["storage_target"])
    mirror_path = get_mirror_path(cfg["work_dir"], cfg["snapshot_id"])

    if os.path.exists(mirror_path):
        return _backup_failure(cfg, f"Mirror directory exists already: {mirror_path}")

    # -------------------------------------------------------------------------
    # 1) Walk the tree into the mirror
    # -------------------------------------------------------------------------
    report = WalkReport()
    try:
        client = connect(cfg["endpoint"], cfg["connect_timeout"])
    except MirrorError as e:
        return _backup_failure(cfg, str(e))

    try:
        os.makedirs(mirror_path)
        report = TreeWalker(client).walk(ROOT_PATH, make_mirror_reaper(mirror_path))
        write_metadata(mirror_path, cfg["snapshot_id"], cfg["endpoint"])
    except (OSError, MirrorError) as e:
        return _backup_failure(cfg, f"Backup aborted: {e}", report, mirror_path)
    finally:
        _close(client)

    logger.info(
        f"Mirrored {report.reaped} leaf znode(s) out of {report.visited} visited into {mirror_path}"
    )

    # -------------------------------------------------------------------------
    # 2) Archive and transfer
    # -------------------------------------------------------------------------
    location = ""
    if target_level > 0:
        try:
            artifact = archive(mirror_path)
            location = to_remote(artifact, cfg)
        except MirrorError as e:
            return _backup_failure(cfg, f"Snapshot transfer failed: {e}", report, mirror_path)

        if os.path.abspath(location) != os.path.abspath(artifact):
            os.remove(artifact)
        if not cfg["keep_mirror"]:
            remove_tree(mirror_path)
            logger.debug(f"Removed mirror directory {mirror_path}")
    else:
        logger.info(f"Storage target '{cfg['storage_target']}' keeps the mirror at {mirror_path}")

    summary = {
        "endpoint": cfg["endpoint"],
        "complete": report.complete,
        "mirror_kept": target_level <= 0 or cfg["keep_mirror"],
    }
    logger.info("Backup completed successfully.")
    return create_backup_result(
        cfg, report, mirror_path=mirror_path, artifact=location, summary_extra=summary
    )


def run_restore(
        config: Optional[Dict[str, Any]],
        *,
        connect: ConnectFn = KazooTreeClient.connect,
) -> RestoreResult:
    """
    Replay a stored snapshot into the tree.

    Args:
        config: The configuration dictionary (raw or partial).
        connect: Factory opening a tree service connection (endpoint, timeout).

    Returns:
        RestoreResult: Status and counters of created/skipped znodes.
    """
    logger.info("Restore started.")
    cfg = _prepare_config(config)

    if not cfg["snapshot_id"]:
        return _restore_failure(cfg, "A snapshot id is required to restore.")
    if not cfg["endpoint"]:
        return _restore_failure(cfg, "No tree service endpoint configured.")
    if lookup_storage_target(cfg["storage_target"]) <= 0:
        return _restore_failure(cfg, f"Cannot restore from storage target '{cfg['storage_target']}'.")

    with tempfile.TemporaryDirectory(prefix="zkmirror-restore-") as staging_dir:
        logger.debug(f"Using temporary staging directory: {staging_dir}")
        try:
            artifact = from_remote(artifact_name(cfg["snapshot_id"]), cfg, staging_dir)
            snapshot_root = unarchive(
                artifact, cfg["snapshot_id"], dest_dir=os.path.join(staging_dir, "extract")
            )
            client = connect(cfg["endpoint"], cfg["connect_timeout"])
        except MirrorError as e:
            return _restore_failure(cfg, str(e))

        walker = MirrorWalker(client)
        try:
            report = walker.restore(snapshot_root)
        except MirrorError as e:
            logger.error(f"Restore aborted at {e.path or snapshot_root}: {e}")
            return create_restore_result(cfg, walker.report, error=f"Restore aborted: {e}")
        finally:
            _close(client)

    logger.info("Restore completed successfully.")
    return create_restore_result(
        cfg, report, artifact=artifact_name(cfg["snapshot_id"]),
        summary_extra={"endpoint": cfg["endpoint"]},
    )


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _prepare_config(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")
    return cfg


def _close(client: TreeClient) -> None:
    close = getattr(client, "close", None)
    if close is not None:
        close()


def _backup_failure(
        cfg: Dict[str, Any],
        msg: str,
        report: Optional[WalkReport] = None,
        mirror_path: str = "",
) -> BackupResult:
    logger.error(msg)
    return create_backup_result(cfg, report, error=msg, mirror_path=mirror_path)


def _restore_failure(cfg: Dict[str, Any], msg: str) -> RestoreResult:
    logger.error(msg)
    return create_restore_result(cfg, error=msg)
