"""Dijkstra shortest paths with a full decision trace.

`compute(graph, source_id)` runs the classic label-setting algorithm and
returns an immutable `DijkstraResult` holding distances, predecessors and the
trace.

High-level algorithm:
1. Initialize all distances to infinity, except the source which is 0.
2. Push the source into a min-heap (priority queue) keyed by distance.
3. Repeatedly pop the node with the smallest tentative distance.
   - If we have already finalized this node, skip the stale heap entry.
   - For each outgoing arc, try to relax the distance to the neighbour.
4. Stop when the heap is empty.

`heapq` has no decrease-key, so an improved node is simply pushed again and
older entries for it are discarded when popped. Heap entries carry an
insertion sequence number: nodes with equal distance are extracted in the
order they were pushed, which keeps the trace identical from run to run.

Complexity: O((V + E) log V) with the binary heap.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import math
from typing import Dict, List, Optional, Set, Tuple

from .errors import SourceNotFound
from .graph_model import Arc, Graph, NodeId
from .result import DijkstraResult
from .trace import TraceRecorder


logger = logging.getLogger(__name__)


def compute(graph: Graph, source_id: NodeId) -> DijkstraResult:
    """Run Dijkstra from `source_id` over `graph`.

    Parameters
    ----------
    graph:
        Graph with non-negative weights. It is only read.
    source_id:
        Node to start from.

    Returns
    -------
    DijkstraResult
        Distances for every node (unreached ones at +inf), predecessor links,
        and the trace of every extraction and relaxation.

    Raises
    ------
    SourceNotFound
        If `source_id` is not a node of `graph`. Nothing is computed.
    """

    if not graph.has_node(source_id):
        raise SourceNotFound(source_id)

    trace = TraceRecorder()

    dist: Dict[NodeId, float] = {node_id: math.inf for node_id in graph.node_ids()}
    prev: Dict[NodeId, Optional[NodeId]] = {node_id: None for node_id in graph.node_ids()}
    # arc that produced each predecessor assignment; tells parallel edges apart
    prev_arc: Dict[NodeId, Arc] = {}
    dist[source_id] = 0.0
    trace.init(source_id)

    # Min-heap of (distance_from_source, push_sequence, node_id).
    counter = itertools.count()
    heap: List[Tuple[float, int, NodeId]] = [(0.0, next(counter), source_id)]

    # Nodes whose shortest distance is final.
    visited: Set[NodeId] = set()

    while heap:
        d_u, _seq, u = heapq.heappop(heap)

        if u in visited:
            # Stale entry: u was already extracted with a shorter distance.
            continue
        visited.add(u)
        trace.extract(u, d_u)

        for arc in graph.neighbors(u):
            v = arc.target
            alt = d_u + arc.weight
            # Log the attempt before the comparison, even when it does not help.
            trace.relax_attempt(u, v, arc.weight, alt, dist[v])

            if alt < dist[v]:
                dist[v] = alt
                prev[v] = u
                prev_arc[v] = arc
                heapq.heappush(heap, (alt, next(counter), v))
                trace.relax_update(v, alt, u)

    result = DijkstraResult(
        source=source_id,
        distances=dist,
        predecessors=prev,
        predecessor_arcs=prev_arc,
        trace_entries=trace.freeze(),
    )
    logger.debug(
        "dijkstra from %s: reached %d/%d nodes, %d trace entries",
        source_id,
        len(visited),
        len(graph),
        len(result.trace_entries),
    )
    return result
