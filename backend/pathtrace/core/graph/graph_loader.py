"""Building `Graph` objects: the fixed sample topology and the database view.

The engine itself only sees a `Graph`. This module is the bridge between that
in-memory model and where topologies come from:
- `build_sample_graph()` returns the seven-node demo network.
- `build_graph_from_db(db)` converts the `graph_nodes` / `graph_edges`
  tables into a `Graph` with **one database read** per table.
- `seed_sample_graph(db)` stores the demo network if the tables are empty.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from pathtrace.db.models import GraphEdge, GraphNode
from .graph_model import Graph, NodeId


logger = logging.getLogger(__name__)


# (id, x, y)
SAMPLE_NODES: List[Tuple[NodeId, int, int]] = [
    ("A", 120, 80),
    ("B", 280, 60),
    ("C", 440, 80),
    ("D", 200, 220),
    ("E", 360, 220),
    ("F", 80, 340),
    ("G", 440, 340),
]

# (a, b, weight); undirected
SAMPLE_EDGES: List[Tuple[NodeId, NodeId, float]] = [
    ("A", "B", 4),
    ("A", "D", 2),
    ("B", "C", 3),
    ("B", "D", 5),
    ("C", "E", 7),
    ("D", "E", 2),
    ("D", "F", 6),
    ("E", "G", 1),
    ("F", "G", 8),
    ("B", "E", 4),
]


def build_sample_graph() -> Graph:
    """The seven-node demo network A..G."""

    graph = Graph()
    for node_id, x, y in SAMPLE_NODES:
        graph.add_node(node_id, x, y)
    for a, b, weight in SAMPLE_EDGES:
        graph.add_edge(a, b, weight)
    return graph


def build_graph_from_db(db: Session) -> Graph:
    """Build a Graph from the stored topology.

    Steps:
    1. Load all nodes ordered by `position` so iteration order is stable.
    2. Load all edges ordered by id, i.e. the order they were stored in,
       which becomes the adjacency (relaxation) order.
    3. Feed both through `Graph.add_node` / `Graph.add_edge`, so a bad row
       (duplicate id, unknown endpoint, negative weight) raises
       `InvalidGraph` exactly like a bad in-memory build would.
    """

    graph = Graph()

    nodes = db.query(GraphNode).order_by(GraphNode.position, GraphNode.id).all()
    for node in nodes:
        graph.add_node(node.id, node.x, node.y)

    edges = db.query(GraphEdge).order_by(GraphEdge.id).all()
    for edge in edges:
        graph.add_edge(edge.node_a, edge.node_b, edge.weight)

    logger.debug("loaded graph from database: %r", graph)
    return graph


def seed_sample_graph(db: Session) -> bool:
    """Store the sample topology if no nodes exist yet.

    Returns True if rows were written, False if the tables were already
    populated.
    """

    if db.query(GraphNode).first() is not None:
        return False

    for position, (node_id, x, y) in enumerate(SAMPLE_NODES):
        db.add(GraphNode(id=node_id, x=x, y=y, position=position))
    # nodes first so the edge foreign keys resolve
    db.flush()
    for a, b, weight in SAMPLE_EDGES:
        db.add(GraphEdge(node_a=a, node_b=b, weight=float(weight)))
    db.commit()

    logger.info("seeded sample graph: %d nodes, %d edges", len(SAMPLE_NODES), len(SAMPLE_EDGES))
    return True
