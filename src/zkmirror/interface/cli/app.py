from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of configuration
sources (defaults, persisted state and CLI overrides), engine execution and
result rendering.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Union

from zkmirror.core.engine import run_backup, run_restore
from zkmirror.core.validator import validate_config
from zkmirror.domain.config import get_default_config, load_config, save_config
from zkmirror.domain.mirror_models import BackupResult, RestoreResult
from zkmirror.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from zkmirror.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 invalid input, 130 interrupted).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    log_file = get_default_log_path() if args.log_file == "" else args.log_file
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_config:
        save_config(clean_conf)

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    if args.operation == "restore" and not clean_conf["snapshot_id"]:
        msg = "restore requires --snapshot"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    try:
        if args.operation == "backup":
            result: Union[BackupResult, RestoreResult] = run_backup(clean_conf)
        else:
            result = run_restore(clean_conf)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130

    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge the set override values into the base configuration.

    Only keys known to the base are taken, preventing schema pollution.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: Union[BackupResult, RestoreResult]) -> None:
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    print(f"Snapshot: {result.snapshot_id} (target: {result.storage_target})")

    if isinstance(result, BackupResult):
        print(f"Znodes visited: {result.visited}")
        print(f"Leaves mirrored: {result.reaped}")
        if result.skipped_subtrees:
            print(f"Subtrees skipped: {result.skipped_subtrees}")
            for path in result.skipped_paths:
                print(f"  - {path}")
        if result.artifact:
            print(f"Artifact: {result.artifact}")
        elif result.mirror_path:
            print(f"Mirror: {result.mirror_path}")
    else:
        print(f"Leaf znodes created: {result.created_leaves}")
        print(f"Branch znodes created: {result.created_branches}")
        print(f"Already present: {result.skipped_existing}")


if __name__ == "__main__":
    sys.exit(main())
