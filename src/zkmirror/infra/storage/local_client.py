from __future__ import annotations

import logging
import os
import shutil

from zkmirror.domain.errors import TransferFailure
from zkmirror.infra.fs import safe_mkdir
from zkmirror.infra.storage.common import calculate_sha256

logger = logging.getLogger(__name__)


def store_local(artifact: str, target_dir: str) -> str:
    """Copy an artifact into the local snapshot store and verify the copy."""
    dest = os.path.join(target_dir, os.path.basename(artifact))
    created, err = safe_mkdir(target_dir)
    if not created:
        raise TransferFailure(f"Cannot create snapshot store {target_dir}: {err}", target_dir)

    try:
        shutil.copyfile(artifact, dest)
        if calculate_sha256(dest) != calculate_sha256(artifact):
            raise TransferFailure(f"Checksum mismatch after copying to {dest}", dest)
    except OSError as e:
        raise TransferFailure(f"Cannot store {artifact} in {target_dir}: {e}", dest, e) from e

    logger.info(f"Stored snapshot artifact at {dest}")
    return dest


def fetch_local(name: str, target_dir: str, dest_dir: str) -> str:
    """Copy an artifact out of the local snapshot store into `dest_dir`."""
    src = os.path.join(target_dir, name)
    if not os.path.isfile(src):
        raise TransferFailure(f"Snapshot artifact not found: {src}", src)

    dest = os.path.join(dest_dir, name)
    try:
        shutil.copyfile(src, dest)
    except OSError as e:
        raise TransferFailure(f"Cannot fetch {src}: {e}", src, e) from e

    logger.info(f"Fetched snapshot artifact {src}")
    return dest
