"""Trace unwinding: find the collection step behind a resolution event."""

from reversetree.resolution.trace import (
    ArtifactRequestData,
    CollectStepData,
    DescriptorRequestData,
    OpaqueData,
    RequestTrace,
)


def find_collect_step(trace: RequestTrace | None) -> CollectStepData | None:
    """Return the nearest enclosing collection step, or None.

    Walks from the innermost trace node to the outermost one and stops at the
    first :class:`CollectStepData` payload.
    """
    if trace is None:
        return None
    for node in trace.iter_chain():
        match node.data:
            case CollectStepData() as step:
                return step
            case DescriptorRequestData() | ArtifactRequestData() | OpaqueData() | None:
                continue
    return None
