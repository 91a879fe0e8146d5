"""In-memory graph model used by the shortest-path engine.

This module is intentionally **DSA-focused**:
- It knows nothing about HTTP, FastAPI, or the database.
- The graph is stored as **adjacency lists**, which are efficient for sparse
  graphs and are exactly what Dijkstra needs: for a node `u` we only touch
  the arcs that actually leave `u`.

IMPORTANT DESIGN CHOICES:
1. Arcs are *directed*. An undirected edge A-B with weight w is stored as two
   arcs (A->B, w) and (B->A, w). Parallel edges between the same pair are
   allowed; each keeps its own `edge_id`.
2. Adjacency lists keep the order in which edges were added. The engine
   relaxes arcs in that order, so the trace is reproducible for a fixed
   edge-insertion sequence.
3. Nodes are kept in insertion order as well, for deterministic display.
4. There are no removal operations: a graph is built once and is read-only
   while the engine runs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import InvalidGraph


NodeId = str


@dataclass(frozen=True)
class Node:
    """A graph node. Coordinates are only used for drawing."""

    id: NodeId
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Arc:
    """Directed, weighted arc `source -> target`.

    `edge_id` is the index of the undirected edge the arc belongs to; both
    arcs of one edge share it, and parallel edges between the same pair of
    nodes get different ids. It is left out of equality.
    """

    source: NodeId
    target: NodeId
    weight: float
    edge_id: int = field(default=-1, compare=False)


class Graph:
    """Weighted graph made of nodes and directed arcs.

    Core responsibilities:
    - Validate input at build time (unique ids, known endpoints,
      non-negative weights) so the engine never has to.
    - Provide `neighbors(node_id)` for the relaxation loop.
    """

    def __init__(self) -> None:
        self._nodes: Dict[NodeId, Node] = {}
        # adjacency list: node_id -> outgoing arcs in edge-insertion order
        self._adjacency: Dict[NodeId, List[Arc]] = {}
        # one arc per undirected edge, as passed to add_edge
        self._edges: List[Arc] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._nodes)}, edges={len(self._edges)})"

    # -------------------- Construction -------------------- #

    def add_node(self, node_id: NodeId, x: int = 0, y: int = 0) -> Node:
        """Add a node; raises `InvalidGraph` if the id is already present."""

        if node_id in self._nodes:
            raise InvalidGraph(f"Duplicate node id {node_id!r}")

        node = Node(id=node_id, x=x, y=y)
        self._nodes[node_id] = node
        self._adjacency[node_id] = []
        return node

    def add_edge(self, a: NodeId, b: NodeId, weight: float) -> Tuple[Arc, Arc]:
        """Add an undirected edge as the two arcs (a->b) and (b->a).

        Raises `InvalidGraph` if either endpoint is unknown or the weight is
        negative (or not a finite number). Validation happens before any
        insertion, so a failed call leaves the graph unchanged.
        """

        for node_id in (a, b):
            if node_id not in self._nodes:
                raise InvalidGraph(f"Edge {a!r}-{b!r} references unknown node {node_id!r}")

        try:
            weight = float(weight)
        except (TypeError, ValueError):
            raise InvalidGraph(f"Edge {a!r}-{b!r} has a non-numeric weight {weight!r}")

        if math.isnan(weight) or math.isinf(weight):
            raise InvalidGraph(f"Edge {a!r}-{b!r} has a non-finite weight {weight!r}")
        if weight < 0:
            raise InvalidGraph(f"Edge {a!r}-{b!r} has a negative weight {weight!r}")

        edge_id = len(self._edges)
        forward = Arc(source=a, target=b, weight=weight, edge_id=edge_id)
        backward = Arc(source=b, target=a, weight=weight, edge_id=edge_id)
        self._adjacency[a].append(forward)
        self._adjacency[b].append(backward)
        self._edges.append(forward)
        return forward, backward

    # -------------------- Queries -------------------- #

    def has_node(self, node_id: NodeId) -> bool:
        """Check whether a node exists in this graph."""

        return node_id in self._nodes

    def get_node(self, node_id: NodeId) -> Optional[Node]:
        return self._nodes.get(node_id)

    def node_ids(self) -> List[NodeId]:
        """Node ids in insertion order."""

        return list(self._nodes)

    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    def neighbors(self, node_id: NodeId) -> Tuple[Arc, ...]:
        """Return all outgoing arcs of a node, in edge-insertion order.

        Time complexity: O(k) where k is the out-degree of the node.
        Unknown ids have no neighbours.
        """

        return tuple(self._adjacency.get(node_id, ()))

    def arcs(self) -> Iterator[Arc]:
        """Every directed arc, grouped by source node."""

        for outgoing in self._adjacency.values():
            yield from outgoing

    def edges(self) -> List[Arc]:
        """One arc per undirected edge, in the order edges were added."""

        return list(self._edges)

    def arcs_between(self, source: NodeId, target: NodeId) -> List[Arc]:
        """All arcs `source -> target`, one per parallel edge."""

        return [arc for arc in self._adjacency.get(source, ()) if arc.target == target]

    def get_arc(self, source: NodeId, target: NodeId) -> Optional[Arc]:
        """Get the first arc `source -> target`, or None if there is none.

        With parallel edges this is the one added first, not necessarily the
        lightest; use `arcs_between` to see all of them.
        """

        for arc in self._adjacency.get(source, ()):
            if arc.target == target:
                return arc
        return None
