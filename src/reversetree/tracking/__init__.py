"""Reverse tree tracking.

Records why each artifact in the local repository was resolved: the chain of
dependencies from the requesting project down to the artifact, stored leaf
first in a ``.tracking`` directory beside the artifact.

Example:
    >>> from reversetree.tracking import ReverseTreeRepositoryListener
    >>> listener = ReverseTreeRepositoryListener()
    >>> unsubscribe = listener.attach(session.dispatcher)
    >>>
    >>> # Read back what was recorded
    >>> records = read_tracking(session.local_repository.tracking_dir_of(artifact))
"""

from reversetree.tracking.filters import EventFilter, is_in_scope, is_local_repository_artifact
from reversetree.tracking.flattener import flatten
from reversetree.tracking.listener import (
    ReverseTreeRepositoryListener,
    TrackingOutcome,
    install_reverse_tree_listener,
)
from reversetree.tracking.reader import TrackingRecord, iter_tracked_artifacts, read_tracking
from reversetree.tracking.unwinder import find_collect_step
from reversetree.tracking.writer import (
    TRACKING_DIR,
    ProvenanceWriter,
    WriteResult,
    tracking_file_name,
)

__all__ = [
    # Filtering
    "EventFilter",
    "is_in_scope",
    "is_local_repository_artifact",
    # Trace and rendering
    "find_collect_step",
    "flatten",
    # Persistence
    "TRACKING_DIR",
    "ProvenanceWriter",
    "WriteResult",
    "tracking_file_name",
    "TrackingRecord",
    "read_tracking",
    "iter_tracked_artifacts",
    # Event handling
    "ReverseTreeRepositoryListener",
    "TrackingOutcome",
    "install_reverse_tree_listener",
]
