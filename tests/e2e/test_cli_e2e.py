from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes
and stream output (stdout/stderr). No ZooKeeper ensemble is needed: every
case stops before a session is opened, or points at a closed port.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "zkmirror" / "main.py"


def run_cli(args: List[str], home: Path) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH and redirects HOME so that
    the persisted configuration of the developer running the tests is never
    read or written.

    Args:
        args: List of command line arguments (excluding 'python' and script path).
        home: Directory used as the user's home.

    Returns:
        subprocess.CompletedProcess: The result object containing returncode, stdout, and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)
    env["LOCALAPPDATA"] = str(home)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
        timeout=60,
    )


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


def test_cli_dump_config(home: Path, tmp_path: Path) -> None:
    """
    TC-01: Verify --dump-config prints the merged configuration (Exit Code 0).
    """
    args = [
        "backup",
        "-e", "zk1:2181",
        "-t", "local",
        "--target-dir", str(tmp_path / "store"),
        "--dump-config",
    ]

    result = run_cli(args, home)

    assert result.returncode == 0, f"CLI failed with stderr: {result.stderr}"

    try:
        data: Dict[str, Any] = json.loads(result.stdout)
    except json.JSONDecodeError:
        pytest.fail(f"Failed to decode JSON output: {result.stdout}")

    assert data["endpoint"] == "zk1:2181"
    assert data["storage_target"] == "local"
    assert data["local_target_dir"] == str(tmp_path / "store")


def test_cli_restore_requires_snapshot(home: Path) -> None:
    """
    TC-02: Verify restore without a snapshot id is an input error (Exit Code 2).
    """
    result = run_cli(["restore", "--use-defaults"], home)

    assert result.returncode == 2
    assert "--snapshot" in result.stderr


def test_cli_restore_from_tty_fails(home: Path) -> None:
    """
    TC-03: Verify the tty target cannot provide snapshots (Exit Code 1).
    """
    result = run_cli(["restore", "--use-defaults", "-t", "tty", "-s", "x"], home)

    assert result.returncode == 1
    assert "tty" in result.stderr


def test_cli_save_config_persists(home: Path) -> None:
    """
    TC-04: Verify --save-config writes the effective configuration.
    """
    result = run_cli(["backup", "-e", "zk9:2181", "--save-config", "--dump-config"], home)

    assert result.returncode == 0

    saved = json.loads((home / ".zkmirror" / "config.json").read_text(encoding="utf-8"))
    assert saved["endpoint"] == "zk9:2181"


def test_cli_rejects_unknown_target(home: Path) -> None:
    """
    TC-05: Verify argparse rejects storage targets outside the known set.
    """
    result = run_cli(["backup", "-t", "s3"], home)

    assert result.returncode == 2
    assert "invalid choice" in result.stderr
