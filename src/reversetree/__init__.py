"""reversetree - dependency resolution provenance.

Records, next to every artifact in a local repository, the dependency chains
that caused it to be resolved.
"""

from reversetree.foundation.errors import ErrorCode, ReverseTreeError
from reversetree.resolution import (
    Artifact,
    CollectStepData,
    Dependency,
    LocalRepository,
    RepositoryEvent,
    RepositorySession,
    RequestTrace,
)
from reversetree.tracking import (
    ReverseTreeRepositoryListener,
    TrackingOutcome,
    install_reverse_tree_listener,
    read_tracking,
)

__version__ = "0.1.0"

__all__ = [
    # Resolution boundary
    "Artifact",
    "Dependency",
    "LocalRepository",
    "RequestTrace",
    "CollectStepData",
    "RepositoryEvent",
    "RepositorySession",
    # Tracking
    "ReverseTreeRepositoryListener",
    "TrackingOutcome",
    "install_reverse_tree_listener",
    "read_tracking",
    # Errors
    "ReverseTreeError",
    "ErrorCode",
]
