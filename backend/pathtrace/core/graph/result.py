"""Immutable result of one shortest-path run.

A `DijkstraResult` is what `compute` hands back to its caller. It owns the
final distance map, the predecessor map and the trace, and offers the
queries the rest of the system needs:

- `get_distance(node_id)`: shortest distance, or +inf.
- `get_path(target)`: node ids from the source to `target`.
- `path_weight(graph, target)`: total weight of that path from graph arcs.
- `is_edge_on_path(target, a, b)`: used to highlight edges.
- `get_trace()`: the formatted log of every decision.

Results are never mutated after `compute` returns. The maps are exposed as
read-only views, so a result can be shared with any number of readers
(drawing code, the run archive, API handlers) without copying.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from .errors import PathConsistencyError
from .graph_model import Arc, Graph, NodeId
from .trace import TraceEntry, format_trace


@dataclass(frozen=True)
class DijkstraResult:
    """Distances, predecessors and trace produced from one source.

    Attributes
    ----------
    source:
        The node the run started from.
    distances:
        node_id -> shortest distance from `source`. Every node of the graph
        has an entry; unreached nodes hold `math.inf`.
    predecessors:
        node_id -> previous node on the shortest path, or None for the
        source and for unreached nodes.
    trace_entries:
        Structured trace in the order the decisions were made.
    predecessor_arcs:
        node_id -> the arc whose relaxation set its predecessor. With
        parallel edges this is the edge the path actually uses.
    """

    source: NodeId
    distances: Mapping[NodeId, float]
    predecessors: Mapping[NodeId, Optional[NodeId]]
    trace_entries: Tuple[TraceEntry, ...] = ()
    predecessor_arcs: Mapping[NodeId, Arc] = field(default_factory=dict)
    _trace_lines: Tuple[str, ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # freeze caller-supplied dicts behind read-only views
        object.__setattr__(self, "distances", MappingProxyType(dict(self.distances)))
        object.__setattr__(self, "predecessors", MappingProxyType(dict(self.predecessors)))
        object.__setattr__(self, "predecessor_arcs", MappingProxyType(dict(self.predecessor_arcs)))
        object.__setattr__(self, "trace_entries", tuple(self.trace_entries))
        object.__setattr__(self, "_trace_lines", format_trace(self.trace_entries))

    def get_distance(self, node_id: NodeId) -> float:
        """Shortest distance to `node_id`, or +inf if unreached or unknown.

        This never raises, so "not in the graph" and "not reachable" look the
        same here; check graph membership separately if the difference
        matters.
        """

        return self.distances.get(node_id, math.inf)

    def get_predecessor(self, node_id: NodeId) -> Optional[NodeId]:
        return self.predecessors.get(node_id)

    def is_reached(self, node_id: NodeId) -> bool:
        return not math.isinf(self.get_distance(node_id))

    def reached_nodes(self) -> List[NodeId]:
        """Ids with a finite distance, in graph order."""

        return [node_id for node_id, d in self.distances.items() if not math.isinf(d)]

    def get_path(self, target: NodeId) -> List[NodeId]:
        """Reconstruct the shortest path from the source to `target`.

        Returns an empty list if `target` is unknown or was never reached,
        and `[source]` when `target` is the source itself.
        """

        if not self.is_reached(target):
            return []

        path: List[NodeId] = []
        cur: Optional[NodeId] = target
        while cur is not None:
            path.append(cur)
            if len(path) > len(self.distances):
                raise PathConsistencyError(f"Predecessor chain from {target!r} contains a cycle")
            cur = self.predecessors.get(cur)
        path.reverse()

        if path[0] != self.source:
            raise PathConsistencyError(
                f"Predecessor chain from {target!r} ends at {path[0]!r}, not at the source {self.source!r}"
            )
        return path

    def _path_arc(self, graph: Graph, u: NodeId, v: NodeId) -> Arc:
        # pick the arc u->v the path really uses when parallel edges exist
        candidates = graph.arcs_between(u, v)
        if not candidates:
            raise PathConsistencyError(f"No arc {u!r}->{v!r} in graph")

        recorded = self.predecessor_arcs.get(v)
        if recorded is not None and recorded.source == u:
            for arc in candidates:
                if arc == recorded and arc.edge_id == recorded.edge_id:
                    return arc

        tight = [arc for arc in candidates if self.get_distance(u) + arc.weight == self.get_distance(v)]
        return min(tight or candidates, key=lambda arc: arc.weight)

    def path_arcs(self, graph: Graph, target: NodeId) -> List[Arc]:
        """Arcs along `get_path(target)`, one per consecutive pair."""

        path = self.get_path(target)
        return [self._path_arc(graph, u, v) for u, v in zip(path, path[1:])]

    def path_weight(self, graph: Graph, target: NodeId) -> float:
        """Sum arc weights along `get_path(target)`.

        Returns +inf when there is no path and 0.0 for the trivial path
        `[source]`. Between two path nodes joined by parallel edges, the arc
        that set the predecessor is used, so the total equals
        `get_distance(target)`. A missing arc means this result was paired
        with a different graph and raises `PathConsistencyError`.
        """

        if not self.is_reached(target):
            return math.inf
        return sum((arc.weight for arc in self.path_arcs(graph, target)), 0.0)

    def is_edge_on_path(
        self, target: NodeId, a: NodeId, b: NodeId, edge_id: Optional[int] = None
    ) -> bool:
        """True if `a` and `b` are consecutive (in either order) on the path to `target`.

        Pass `edge_id` to ask about one specific edge: among parallel edges
        between `a` and `b` only the one the path used matches.
        """

        path = self.get_path(target)
        for u, v in zip(path, path[1:]):
            if not ((u == a and v == b) or (u == b and v == a)):
                continue
            used = self.predecessor_arcs.get(v)
            if edge_id is None or used is None or used.edge_id < 0:
                return True
            if used.edge_id == edge_id:
                return True
        return False

    def get_trace(self) -> Tuple[str, ...]:
        """Formatted trace lines, in chronological order."""

        return self._trace_lines

    def get_trace_entries(self) -> Tuple[TraceEntry, ...]:
        return self.trace_entries
