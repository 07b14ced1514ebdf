from __future__ import annotations

"""
Snapshot Assembler.

Turns a finished mirror directory into a single zip artifact and unpacks
such an artifact back into a mirror directory for the restore walk. Also
owns the metadata marker file written at the snapshot root.

Archive entries are rooted at the snapshot id directory, e.g.
`zk-20240101T000000Z/app/config/content`.
"""

import json
import logging
import os
import tempfile
import zipfile
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from zkmirror import __version__
from zkmirror.domain.constants import ARCHIVE_EXTENSION, META_FILE
from zkmirror.domain.errors import ArchiveFailure

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# METADATA MARKER
# -----------------------------------------------------------------------------

def write_metadata(snapshot_root: str, snapshot_id: str, endpoint: str) -> str:
    """
    Write the reserved metadata marker at the snapshot root.

    Returns:
        str: Path of the marker file.
    """
    meta_path = os.path.join(snapshot_root, META_FILE)
    meta = {
        "snapshot_id": snapshot_id,
        "created": datetime.now(timezone.utc).isoformat(),
        "service": "zk",
        "endpoint": endpoint,
        "tool_version": __version__,
    }
    try:
        os.makedirs(snapshot_root, exist_ok=True)
        with open(meta_path, "w", encoding="utf-8") as f:
            json.dump(meta, f, indent=2)
    except OSError as e:
        raise ArchiveFailure(f"Cannot write metadata marker {meta_path}: {e}", meta_path, e) from e
    return meta_path


def read_metadata(snapshot_root: str) -> Dict[str, Any]:
    """Load the metadata marker; an absent or unreadable marker yields {}."""
    meta_path = os.path.join(snapshot_root, META_FILE)
    if not os.path.exists(meta_path):
        return {}
    try:
        with open(meta_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Unreadable metadata marker {meta_path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}

# -----------------------------------------------------------------------------
# ARCHIVE / UNARCHIVE
# -----------------------------------------------------------------------------

def artifact_name(snapshot_id: str) -> str:
    return snapshot_id + ARCHIVE_EXTENSION


def archive(mirror_dir: str, dest_dir: Optional[str] = None) -> str:
    """
    Pack a mirror directory into `<snapshot_id>.zip`.

    Args:
        mirror_dir: Snapshot root; its name is the snapshot id.
        dest_dir: Where to put the artifact (defaults to the mirror's parent).

    Returns:
        str: Path of the created artifact.

    Raises:
        ArchiveFailure: If the mirror is missing or the zip cannot be written.
    """
    mirror_dir = os.path.abspath(mirror_dir)
    if not os.path.isdir(mirror_dir):
        raise ArchiveFailure(f"Mirror directory not found: {mirror_dir}", mirror_dir)

    parent = os.path.dirname(mirror_dir)
    snapshot_id = os.path.basename(mirror_dir)
    artifact = os.path.join(dest_dir or parent, artifact_name(snapshot_id))

    try:
        with zipfile.ZipFile(artifact, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for root, dirs, files in os.walk(mirror_dir):
                dirs.sort()
                zf.write(root, os.path.relpath(root, parent))
                for name in sorted(files):
                    full = os.path.join(root, name)
                    zf.write(full, os.path.relpath(full, parent))
    except OSError as e:
        raise ArchiveFailure(f"Cannot create archive {artifact}: {e}", artifact, e) from e

    logger.info(f"Archived {mirror_dir} into {artifact}")
    return artifact


def unarchive(artifact: str, snapshot_id: str = "", dest_dir: Optional[str] = None) -> str:
    """
    Unpack an artifact into a mirror directory.

    Args:
        artifact: Path of the zip file.
        snapshot_id: Expected snapshot id (defaults to the artifact name).
        dest_dir: Extraction directory (defaults to a fresh temporary one).

    Returns:
        str: The extracted snapshot root.

    Raises:
        ArchiveFailure: If the zip is unreadable, holds entries escaping the
            extraction directory or lacks the snapshot root.
    """
    if not snapshot_id:
        snapshot_id = os.path.basename(artifact)
        if snapshot_id.endswith(ARCHIVE_EXTENSION):
            snapshot_id = snapshot_id[:-len(ARCHIVE_EXTENSION)]

    target = os.path.abspath(dest_dir or tempfile.mkdtemp(prefix="zkmirror-"))

    try:
        with zipfile.ZipFile(artifact, "r") as zf:
            for member in zf.namelist():
                resolved = os.path.abspath(os.path.join(target, member))
                if os.path.commonpath([target, resolved]) != target:
                    raise ArchiveFailure(f"Archive entry escapes extraction dir: {member}", artifact)
            zf.extractall(target)
    except (OSError, zipfile.BadZipFile) as e:
        raise ArchiveFailure(f"Cannot extract archive {artifact}: {e}", artifact, e) from e

    snapshot_root = os.path.join(target, snapshot_id)
    if not os.path.isdir(snapshot_root):
        raise ArchiveFailure(f"Archive {artifact} holds no snapshot '{snapshot_id}'", artifact)

    logger.info(f"Unarchived {artifact} into {snapshot_root}")
    return snapshot_root
