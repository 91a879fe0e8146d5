"""View model for drawing the graph with a highlighted shortest path.

The frontend draws nodes at their coordinates, one line per undirected edge
with its weight, and colours whatever lies on the current path. All of that
"currently highlighted" state lives in the `HighlightView` built here; the
graph and the result are only read.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from pathtrace.core.graph.errors import TargetNotFound
from pathtrace.core.graph.graph_model import Graph, NodeId
from pathtrace.core.graph.result import DijkstraResult


@dataclass(frozen=True)
class HighlightNode:
    id: NodeId
    x: int
    y: int
    highlighted: bool


@dataclass(frozen=True)
class HighlightEdge:
    a: NodeId
    b: NodeId
    weight: float
    on_path: bool


@dataclass(frozen=True)
class HighlightView:
    source: NodeId
    target: NodeId
    path: Tuple[NodeId, ...]
    total_distance: float
    nodes: Tuple[HighlightNode, ...]
    edges: Tuple[HighlightEdge, ...]


def build_highlight(graph: Graph, result: DijkstraResult, target: NodeId) -> HighlightView:
    """Mark the nodes and edges on the shortest path to `target`.

    Edges come from `graph.edges()`, one per undirected connection, so each
    road is drawn once even though the graph stores two arcs for it. When
    parallel edges join two path nodes, only the one the path used is marked.
    """

    if not graph.has_node(target):
        raise TargetNotFound(target)

    path = result.get_path(target)
    on_path = set(path)

    nodes = tuple(
        HighlightNode(id=node.id, x=node.x, y=node.y, highlighted=node.id in on_path)
        for node in graph.nodes()
    )
    edges = tuple(
        HighlightEdge(
            a=edge.source,
            b=edge.target,
            weight=edge.weight,
            on_path=result.is_edge_on_path(target, edge.source, edge.target, edge.edge_id),
        )
        for edge in graph.edges()
    )

    return HighlightView(
        source=result.source,
        target=target,
        path=tuple(path),
        total_distance=result.path_weight(graph, target),
        nodes=nodes,
        edges=edges,
    )
