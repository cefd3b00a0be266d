"""Reverse tree listener.

Records, for every artifact resolved from the local repository during graph
collection, the dependency chain that pulled it in.

Example:
    >>> from reversetree.foundation.config import get_config
    >>> config = get_config()
    >>> session = RepositorySession.for_basedir(config.local_repository_path())
    >>> unsubscribe = install_reverse_tree_listener(session, config)
    >>> # engine resolves artifacts and dispatches events on session.dispatcher
    >>> if unsubscribe:
    ...     unsubscribe()
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from reversetree.foundation.config import ReverseTreeConfig
from reversetree.foundation.errors import ReverseTreeError
from reversetree.resolution.events import (
    EventType,
    RepositoryEvent,
    RepositoryEventDispatcher,
    RepositorySession,
)
from reversetree.tracking.filters import EventFilter
from reversetree.tracking.flattener import flatten
from reversetree.tracking.unwinder import find_collect_step
from reversetree.tracking.writer import ProvenanceWriter

logger = logging.getLogger(__name__)

OutcomeStatus = Literal["recorded", "skipped", "failed"]


@dataclass(frozen=True, slots=True)
class TrackingOutcome:
    """What the listener did with one event."""

    status: OutcomeStatus
    reason: str = ""
    path: Path | None = None
    lines: tuple[str, ...] = ()
    error: ReverseTreeError | None = None

    @classmethod
    def skipped(cls, reason: str) -> "TrackingOutcome":
        return cls(status="skipped", reason=reason)

    def raise_for_error(self) -> None:
        """Raise the carried error, if any."""
        if self.error is not None:
            raise self.error


class ReverseTreeRepositoryListener:
    """Handles ARTIFACT_RESOLVED events and writes reverse tree records.

    Holds no per-event state, so one instance may serve concurrent
    dispatching threads.
    """

    def __init__(
        self,
        event_filter: EventFilter | None = None,
        writer: ProvenanceWriter | None = None,
    ) -> None:
        self.event_filter = event_filter or EventFilter()
        self.writer = writer or ProvenanceWriter()

    def __call__(self, event: RepositoryEvent) -> TrackingOutcome | None:
        """Dispatcher entry point.

        Raises:
            ReverseTreeError: If the tracking record could not be written.
        """
        if event.type is not EventType.ARTIFACT_RESOLVED:
            return None
        outcome = self.artifact_resolved(event)
        outcome.raise_for_error()
        return outcome

    def attach(self, dispatcher: RepositoryEventDispatcher) -> Callable[[], None]:
        """Register on ``dispatcher``; returns the unsubscribe function."""
        return dispatcher.add_listener(self)

    def artifact_resolved(self, event: RepositoryEvent) -> TrackingOutcome:
        """Record the reverse tree for ``event`` if it is a collection-time resolution."""
        artifact = event.artifact
        if not self.event_filter.accept(event):
            logger.debug("Skipping %s: not in local repository", artifact)
            return TrackingOutcome.skipped("not in local repository")

        step = find_collect_step(event.trace)
        if step is None:
            logger.debug("Skipping %s: no collect step in trace", artifact)
            return TrackingOutcome.skipped("no collect step")

        if not self.event_filter.accept_step(event, step):
            logger.debug("Skipping %s: collect step is for %s", artifact, step.node)
            return TrackingOutcome.skipped("different node")

        lines = flatten(step)
        result = self.writer.persist(artifact.file, step.root, lines)
        if not result.ok:
            logger.warning("Reverse tree for %s not recorded: %s", artifact, result.error)
            return TrackingOutcome(
                status="failed",
                path=result.path,
                lines=tuple(lines),
                error=result.error,
            )

        logger.debug("Recorded reverse tree for %s in %s", artifact, result.path)
        return TrackingOutcome(status="recorded", path=result.path, lines=tuple(lines))


def install_reverse_tree_listener(
    session: RepositorySession,
    config: ReverseTreeConfig,
    listener: ReverseTreeRepositoryListener | None = None,
) -> Callable[[], None] | None:
    """Attach a reverse tree listener to ``session`` when recording is enabled.

    Returns:
        The unsubscribe function, or None when recording is disabled.
    """
    if not config.record_reverse_tree:
        return None
    listener = listener or ReverseTreeRepositoryListener()
    logger.debug("Recording reverse tree into %s", session.local_repository.basedir)
    return listener.attach(session.dispatcher)
