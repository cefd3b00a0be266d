"""Repository events and the per-session dispatcher.

The resolution engine owns a :class:`RepositorySession` and dispatches
:class:`RepositoryEvent` instances on its dispatcher. Listeners run
synchronously on the dispatching thread, in registration order, and their
exceptions propagate to the engine.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from reversetree.resolution.models import Artifact, LocalRepository
from reversetree.resolution.trace import RequestTrace

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Kinds of repository events an engine may dispatch."""

    ARTIFACT_RESOLVING = "artifact_resolving"
    ARTIFACT_RESOLVED = "artifact_resolved"
    ARTIFACT_DOWNLOADED = "artifact_downloaded"
    METADATA_RESOLVED = "metadata_resolved"


RepositoryListener = Callable[["RepositoryEvent"], object]
"""Listener callback type: (event) -> Any"""


class RepositoryEventDispatcher:
    """Registry of listeners for one resolution session.

    Example:
        >>> dispatcher = RepositoryEventDispatcher()
        >>> unsubscribe = dispatcher.add_listener(print)
        >>> # Later...
        >>> unsubscribe()
    """

    def __init__(self) -> None:
        self._listeners: list[RepositoryListener] = []
        self._lock = threading.Lock()

    def add_listener(self, listener: RepositoryListener) -> Callable[[], None]:
        """Register ``listener``.

        Returns:
            Unsubscribe function. Call to remove the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @property
    def listeners(self) -> tuple[RepositoryListener, ...]:
        with self._lock:
            return tuple(self._listeners)

    def dispatch(self, event: "RepositoryEvent") -> None:
        """Deliver ``event`` to every registered listener."""
        for listener in self.listeners:
            listener(event)


@dataclass(frozen=True, slots=True)
class RepositorySession:
    """Per-build resolution session: the local cache and the event dispatcher."""

    local_repository: LocalRepository
    dispatcher: RepositoryEventDispatcher = field(default_factory=RepositoryEventDispatcher)

    @classmethod
    def for_basedir(cls, basedir: Path) -> "RepositorySession":
        return cls(local_repository=LocalRepository(basedir))

    def artifact_resolved(self, artifact: Artifact, trace: RequestTrace | None = None) -> "RepositoryEvent":
        """Build and dispatch an ARTIFACT_RESOLVED event."""
        event = RepositoryEvent(
            type=EventType.ARTIFACT_RESOLVED,
            session=self,
            artifact=artifact,
            trace=trace,
        )
        logger.debug("Dispatching %s for %s", event.type.value, artifact)
        self.dispatcher.dispatch(event)
        return event


@dataclass(frozen=True, slots=True)
class RepositoryEvent:
    """Immutable notification fired by the resolution engine."""

    type: EventType
    session: RepositorySession
    artifact: Artifact
    trace: RequestTrace | None = None
