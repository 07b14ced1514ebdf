from __future__ import annotations

"""
Mirror Domain Data Models.

Defines the reports produced by the two traversal directions and the result
objects handed from the engine to the interface layer, together with their
factory functions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# TRAVERSAL REPORTS
# -----------------------------------------------------------------------------

@dataclass
class WalkReport:
    """
    Outcome counters of a backup traversal.

    A backup is best-effort: subtrees that could not be listed, fetched or
    written are skipped and recorded here instead of failing the walk.

    Attributes:
        visited: Number of znodes visited.
        reaped: Number of leaves handed to the reap function.
        skipped_paths: Roots of the subtrees abandoned on error.
    """
    visited: int = 0
    reaped: int = 0
    skipped_paths: List[str] = field(default_factory=list)

    @property
    def skipped_subtrees(self) -> int:
        return len(self.skipped_paths)

    @property
    def complete(self) -> bool:
        return not self.skipped_paths


@dataclass
class RestoreReport:
    """
    Outcome counters of a restore traversal.

    Attributes:
        visited: Mirror directories examined (reserved entries excluded).
        created_leaves: Leaf znodes created with a payload.
        created_branches: Branch placeholders created with an empty payload.
        skipped_existing: Znodes left untouched because they already existed.
    """
    visited: int = 0
    created_leaves: int = 0
    created_branches: int = 0
    skipped_existing: int = 0

    @property
    def created(self) -> int:
        return self.created_leaves + self.created_branches

# -----------------------------------------------------------------------------
# ENGINE RESULTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class BackupResult:
    """
    Result of a complete backup run.

    `ok` reflects whether the walk and the archive/transfer stage ran;
    partial subtree losses are reported through `skipped_subtrees`.
    """
    ok: bool
    error: str

    snapshot_id: str
    storage_target: str
    mirror_path: str = ""
    artifact: str = ""

    visited: int = 0
    reaped: int = 0
    skipped_subtrees: int = 0
    skipped_paths: List[str] = field(default_factory=list)

    summary: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RestoreResult:
    """Result of a complete restore run."""
    ok: bool
    error: str

    snapshot_id: str
    storage_target: str
    artifact: str = ""

    visited: int = 0
    created_leaves: int = 0
    created_branches: int = 0
    skipped_existing: int = 0

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_backup_result(
        cfg: Dict[str, Any],
        report: Optional[WalkReport] = None,
        *,
        error: str = "",
        mirror_path: str = "",
        artifact: str = "",
        summary_extra: Optional[Dict[str, Any]] = None,
) -> BackupResult:
    """
    Build a backup result; a non-empty error marks the run as failed.

    Args:
        cfg: Configuration used for the run.
        report: Traversal counters, if the walk took place.
        error: Failure description.
        mirror_path: Local mirror directory.
        artifact: Archive location at the storage target.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        BackupResult: An immutable result object.
    """
    report = report or WalkReport()
    return BackupResult(
        ok=not error,
        error=error,
        snapshot_id=cfg.get("snapshot_id", ""),
        storage_target=cfg.get("storage_target", ""),
        mirror_path=mirror_path,
        artifact=artifact,
        visited=report.visited,
        reaped=report.reaped,
        skipped_subtrees=report.skipped_subtrees,
        skipped_paths=list(report.skipped_paths),
        summary=summary_extra or {},
    )


def create_restore_result(
        cfg: Dict[str, Any],
        report: Optional[RestoreReport] = None,
        *,
        error: str = "",
        artifact: str = "",
        summary_extra: Optional[Dict[str, Any]] = None,
) -> RestoreResult:
    """Build a restore result; a non-empty error marks the run as failed."""
    report = report or RestoreReport()
    return RestoreResult(
        ok=not error,
        error=error,
        snapshot_id=cfg.get("snapshot_id", ""),
        storage_target=cfg.get("storage_target", ""),
        artifact=artifact,
        visited=report.visited,
        created_leaves=report.created_leaves,
        created_branches=report.created_branches,
        skipped_existing=report.skipped_existing,
        summary=summary_extra or {},
    )
