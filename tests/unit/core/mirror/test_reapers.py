from __future__ import annotations

"""
Unit tests for the Reap Functions.

Verifies where leaves land in the mirror and which znodes cannot be stored.
"""

from pathlib import Path

import pytest

from zkmirror.core.mirror.reapers import make_mirror_reaper
from zkmirror.domain.constants import CONTENT_FILE, ESC_COLON, META_FILE
from zkmirror.domain.errors import ContentWriteFailure


def test_leaf_written_under_mirror_path(tmp_path: Path) -> None:
    """TC-01: A leaf lands in its escaped directory with the raw payload."""
    reap = make_mirror_reaper(str(tmp_path))

    reap("/a:b/c", b"\x00raw")

    assert (tmp_path / f"a{ESC_COLON}b" / "c" / CONTENT_FILE).read_bytes() == b"\x00raw"


def test_root_is_never_written(tmp_path: Path) -> None:
    """TC-02: Reaping the root znode leaves the mirror empty."""
    make_mirror_reaper(str(tmp_path))("/", b"")

    assert list(tmp_path.iterdir()) == []


@pytest.mark.parametrize("path", ["/" + META_FILE, "/" + META_FILE + "/deep/leaf"])
def test_root_marker_collision_is_refused(tmp_path: Path, path: str) -> None:
    """TC-03: Znodes under a top-level marker name would overwrite the marker."""
    reap = make_mirror_reaper(str(tmp_path))

    with pytest.raises(ContentWriteFailure) as exc:
        reap(path, b"v")

    assert exc.value.path == path
    assert not (tmp_path / META_FILE).exists()


def test_marker_name_below_root_is_written(tmp_path: Path) -> None:
    """TC-04: Only the top level is reserved."""
    make_mirror_reaper(str(tmp_path))("/app/" + META_FILE, b"payload")

    assert (tmp_path / "app" / META_FILE / CONTENT_FILE).read_bytes() == b"payload"
