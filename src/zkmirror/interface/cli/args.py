from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed argparse
namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

from zkmirror import __version__
from zkmirror.domain.constants import STORAGE_TARGETS

OPERATIONS = ("backup", "restore")

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the zkmirror CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="zkmirror",
        description="Mirror a ZooKeeper tree to the filesystem and replay it back.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    p.add_argument(
        "operation",
        choices=OPERATIONS,
        help="backup: tree -> snapshot, restore: snapshot -> tree.",
    )

    # --- Tree Service ---
    p.add_argument(
        "-e", "--endpoint",
        dest="endpoint",
        default=None,
        help="ZooKeeper host:port list, e.g. 10.0.0.1:2181,10.0.0.2:2181.",
    )
    p.add_argument(
        "--timeout",
        dest="connect_timeout",
        type=float,
        default=None,
        help="Connect timeout in seconds.",
    )

    # --- Snapshot Placement ---
    p.add_argument(
        "-s", "--snapshot",
        dest="snapshot_id",
        default=None,
        help="Snapshot identifier (generated on backup when omitted; required on restore).",
    )
    p.add_argument(
        "-w", "--work-dir",
        dest="work_dir",
        default=None,
        help="Directory in which the mirror directory is created.",
    )
    p.add_argument(
        "--keep-mirror",
        action="store_true",
        help="Keep the mirror directory after archiving.",
    )

    # --- Storage Target ---
    p.add_argument(
        "-t", "--target",
        dest="storage_target",
        choices=sorted(STORAGE_TARGETS),
        default=None,
        help="Where snapshots are stored; 'tty' keeps only the local mirror.",
    )
    p.add_argument(
        "--target-dir",
        dest="local_target_dir",
        default=None,
        help="Snapshot store of the 'local' target.",
    )
    p.add_argument(
        "--remote-url",
        dest="remote_url",
        default=None,
        help="Base URL of the 'remote' target.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective configuration for later runs.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        nargs="?",
        const="",
        default=None,
        help="Also write logs to a rotating file (user data dir when no path is given).",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset (None means unset).
    """
    overrides: Dict[str, Any] = {
        "endpoint": args.endpoint,
        "connect_timeout": args.connect_timeout,
        "snapshot_id": args.snapshot_id,
        "work_dir": args.work_dir,
        "storage_target": args.storage_target,
        "local_target_dir": args.local_target_dir,
        "remote_url": args.remote_url,
    }
    if args.keep_mirror:
        overrides["keep_mirror"] = True
    return overrides
