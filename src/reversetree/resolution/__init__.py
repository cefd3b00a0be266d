"""Boundary types shared with the dependency resolution engine."""

from reversetree.resolution.events import (
    EventType,
    RepositoryEvent,
    RepositoryEventDispatcher,
    RepositoryListener,
    RepositorySession,
)
from reversetree.resolution.models import Artifact, Dependency, LocalRepository
from reversetree.resolution.trace import (
    ArtifactRequestData,
    CollectStepData,
    DescriptorRequestData,
    OpaqueData,
    RequestTrace,
    TraceData,
)

__all__ = [
    # Models
    "Artifact",
    "Dependency",
    "LocalRepository",
    # Traces
    "RequestTrace",
    "TraceData",
    "CollectStepData",
    "DescriptorRequestData",
    "ArtifactRequestData",
    "OpaqueData",
    # Events
    "EventType",
    "RepositoryEvent",
    "RepositoryEventDispatcher",
    "RepositoryListener",
    "RepositorySession",
]
