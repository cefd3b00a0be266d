"""Render a collection step as reverse tree lines."""

from reversetree.resolution.trace import CollectStepData

INDENT = "  "


def flatten(step: CollectStepData) -> list[str]:
    """Render ``step`` leaf first.

    The first line is the step's node; each following line is one ancestor,
    walking from the immediate parent back to the request root, indented by
    two spaces per level of distance from the node. Every line ends with the
    step context in parentheses.

    Example:
        >>> flatten(step)  # path [app, mid], node lib, context "compile"
        ['com.x:lib:2.0 (compile)', '  com.x:mid:1.0 (compile)', '    com.x:app:1.0 (compile)']
    """
    suffix = f" ({step.context})"
    lines = [f"{step.node}{suffix}"]
    for depth, ancestor in enumerate(reversed(step.path), start=1):
        lines.append(f"{INDENT * depth}{ancestor}{suffix}")
    return lines
