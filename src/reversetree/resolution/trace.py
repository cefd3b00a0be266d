"""Request traces attached to resolution operations.

A trace is a singly-linked chain of request scopes, innermost first. Each node
may carry one payload from a closed set of variants, so consumers can match on
the variant instead of probing arbitrary objects.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from reversetree.resolution.models import Artifact, Dependency


@dataclass(frozen=True, slots=True)
class CollectStepData:
    """One step of dependency graph collection.

    ``path`` holds the ancestors of ``node`` in root-to-parent order; the first
    element is the root that requested the collection.
    """

    context: str
    path: tuple[Dependency, ...]
    node: Dependency

    @property
    def root(self) -> Dependency:
        """Request root of this step (``node`` itself when the path is empty)."""
        return self.path[0] if self.path else self.node


@dataclass(frozen=True, slots=True)
class DescriptorRequestData:
    """Descriptor (model) fetch for an artifact, including parent descriptors."""

    artifact: Artifact


@dataclass(frozen=True, slots=True)
class ArtifactRequestData:
    """Plain artifact resolution request outside of graph collection."""

    artifact: Artifact
    context: str = ""


@dataclass(frozen=True, slots=True)
class OpaqueData:
    """Anything else an engine attaches to a trace (plugin context, etc)."""

    value: Any


TraceData = CollectStepData | DescriptorRequestData | ArtifactRequestData | OpaqueData


@dataclass(frozen=True, slots=True)
class RequestTrace:
    """A node of the trace chain."""

    data: TraceData | None = None
    parent: "RequestTrace | None" = None

    @classmethod
    def new_trace(cls, data: TraceData | None = None) -> "RequestTrace":
        """Start a new chain."""
        return cls(data=data)

    def new_child(self, data: TraceData | None = None) -> "RequestTrace":
        """Open a nested scope below this one."""
        return RequestTrace(data=data, parent=self)

    def iter_chain(self) -> Iterator["RequestTrace"]:
        """Yield this node and its ancestors, innermost first."""
        trace: RequestTrace | None = self
        while trace is not None:
            yield trace
            trace = trace.parent
