from __future__ import annotations

"""
Mirror Error Taxonomy.

Every failure raised by the mirroring core and its collaborators derives from
MirrorError and carries the tree path or filesystem path it concerns.
Backup traversal localizes the fetch/write kinds to a subtree; restore
traversal escalates everything.
"""

from typing import Optional


class MirrorError(Exception):
    """
    Base class for all mirroring failures.

    Attributes:
        path: Tree path or filesystem path the failure is about.
        cause: Underlying exception, when one exists.
    """

    def __init__(self, message: str, path: str = "", cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause


# -----------------------------------------------------------------------------
# TREE SERVICE FAILURES
# -----------------------------------------------------------------------------

class ServiceUnreachable(MirrorError):
    """The tree service could not be reached at connect time."""


class ChildListFailure(MirrorError):
    """Listing the children of a znode failed."""


class ValueFetchFailure(MirrorError):
    """Fetching the payload of a znode failed."""


class ExistenceCheckFailure(MirrorError):
    """Checking whether a znode exists failed."""


class NodeCreateFailure(MirrorError):
    """Creating a znode failed."""


# -----------------------------------------------------------------------------
# MIRROR FAILURES
# -----------------------------------------------------------------------------

class ContentReadFailure(MirrorError):
    """A content file could not be read."""


class ContentNotFound(ContentReadFailure):
    """A mirror directory holds no content file."""


class ContentWriteFailure(MirrorError):
    """A content file could not be written."""


class PathDecodeFailure(MirrorError):
    """A tree path or mirror path cannot be mapped to the other space."""


# -----------------------------------------------------------------------------
# COLLABORATOR FAILURES
# -----------------------------------------------------------------------------

class ArchiveFailure(MirrorError):
    """Packing or unpacking a snapshot archive failed."""


class TransferFailure(MirrorError):
    """Moving an archive to or from a storage target failed."""


class ConfigurationError(MirrorError):
    """The runtime configuration does not allow the requested operation."""
