from __future__ import annotations

import logging
import os
from typing import Optional

import requests

from zkmirror.domain.errors import TransferFailure
from zkmirror.infra.storage.common import CHUNK_SIZE, DEFAULT_TIMEOUT, USER_AGENT, calculate_sha256

logger = logging.getLogger(__name__)

CHECKSUM_HEADER = "X-Checksum-Sha256"


def _artifact_url(base_url: str, name: str) -> str:
    return base_url.rstrip("/") + "/" + name


def upload_artifact(artifact: str, base_url: str) -> str:
    """PUT an artifact to the remote store; returns its URL."""
    url = _artifact_url(base_url, os.path.basename(artifact))
    headers = {
        "User-Agent": USER_AGENT,
        "Content-Type": "application/zip",
        CHECKSUM_HEADER: calculate_sha256(artifact),
    }
    logger.info(f"Uploading snapshot artifact to {url}")

    try:
        with open(artifact, "rb") as f:
            response = requests.put(url, data=f, headers=headers, timeout=DEFAULT_TIMEOUT)
        response.raise_for_status()
    except (OSError, requests.exceptions.RequestException) as e:
        raise TransferFailure(f"Upload to {url} failed: {e}", url, e) from e

    return url


def download_artifact(name: str, base_url: str, dest_dir: str) -> str:
    """GET an artifact from the remote store into `dest_dir` using buffered streaming."""
    url = _artifact_url(base_url, name)
    dest = os.path.join(dest_dir, name)
    headers = {"User-Agent": USER_AGENT}
    logger.info(f"Downloading snapshot artifact from {url}")

    expected: Optional[str] = None
    try:
        with requests.get(url, headers=headers, stream=True, timeout=DEFAULT_TIMEOUT) as response:
            response.raise_for_status()
            expected = response.headers.get(CHECKSUM_HEADER)
            with open(dest, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
    except (OSError, requests.exceptions.RequestException) as e:
        raise TransferFailure(f"Download from {url} failed: {e}", url, e) from e

    if expected and calculate_sha256(dest) != expected:
        raise TransferFailure(f"Checksum mismatch for {url}", url)
    return dest
