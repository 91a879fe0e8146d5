"""Error types raised by the shortest-path core.

All of them are caused by invalid input and are deterministic: calling the
same operation again with the same arguments raises the same error. The HTTP
layer translates them into status codes; nothing inside the core retries.
"""


class GraphError(Exception):
    """Base class for every error raised by the graph core."""


class InvalidGraph(GraphError, ValueError):
    """Duplicate node id, edge to an unknown node, or a negative weight."""


class SourceNotFound(GraphError, LookupError):
    """The source id passed to `compute` is not part of the graph."""

    def __init__(self, source_id: str):
        super().__init__(f"Source node {source_id!r} not found in graph")
        self.source_id = source_id


class TargetNotFound(GraphError, LookupError):
    """The target id asked for by a collaborator is not part of the graph."""

    def __init__(self, target_id: str):
        super().__init__(f"Target node {target_id!r} not found in graph")
        self.target_id = target_id


class PathConsistencyError(GraphError, RuntimeError):
    """Two consecutive path nodes are not joined by an arc.

    A path reconstructed from a predecessor map always has its arcs, so this
    only fires when a result is paired with the wrong graph.
    """
