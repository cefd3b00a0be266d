"""Relevance checks for artifact-resolved events."""

import os
from pathlib import Path

from reversetree.resolution.events import RepositoryEvent, RepositorySession
from reversetree.resolution.models import Artifact
from reversetree.resolution.trace import CollectStepData


def _normalized(path: Path) -> str:
    return os.path.normpath(os.fspath(path))


def is_local_repository_artifact(session: RepositorySession, artifact: Artifact) -> bool:
    """Whether the artifact's file lives in the session's local repository.

    Artifacts of projects being built in the current session resolve to their
    source tree, not to the cache, and must never get tracking data.
    """
    if artifact.file is None:
        return False
    return _normalized(artifact.file).startswith(_normalized(session.local_repository.basedir))


def is_in_scope(artifact: Artifact, node_artifact: Artifact) -> bool:
    """Whether ``artifact`` is the same logical node as ``node_artifact``.

    Compares group, artifact id and version only. Collection rewrites the
    extension to ``pom`` while reading descriptors, and parent descriptors are
    resolved under the same step, so the resolved artifact may be a different
    node altogether.
    """
    return artifact.gav == node_artifact.gav


class EventFilter:
    """Two-stage filter applied by the reverse tree listener."""

    def accept(self, event: RepositoryEvent) -> bool:
        """Stage one: the resolved artifact comes from the local repository."""
        return is_local_repository_artifact(event.session, event.artifact)

    def accept_step(self, event: RepositoryEvent, step: CollectStepData) -> bool:
        """Stage two: the event refers to the collection step's own node."""
        return is_in_scope(event.artifact, step.node.artifact)
