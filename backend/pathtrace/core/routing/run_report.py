"""Turn one Dijkstra result into the report an operator reads.

The report is a plain snapshot: source, target, distance, path, the distance
of every node, and the detailed trace. It is what the API returns and what
the run archive stores, so both see exactly the same text.

Nothing here re-runs the algorithm or touches the result; it only reads.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from pathtrace.core.graph.errors import TargetNotFound
from pathtrace.core.graph.graph_model import Graph, NodeId
from pathtrace.core.graph.result import DijkstraResult
from pathtrace.core.graph.trace import format_distance


PATH_DELIMITER = "->"


@dataclass(frozen=True)
class RunReport:
    source: NodeId
    target: NodeId
    distance: float
    path: Tuple[NodeId, ...]
    total_distance: float
    node_distances: Tuple[Tuple[NodeId, float], ...]
    trace: Tuple[str, ...]
    run_at: datetime
    details: str = field(repr=False)

    @property
    def path_text(self) -> str:
        """Path as stored in the archive, e.g. ``A->D->E->G``."""
        return PATH_DELIMITER.join(self.path)

    @property
    def reachable(self) -> bool:
        return not math.isinf(self.distance)


def _render_details(
    source: NodeId,
    target: NodeId,
    distance: float,
    path: List[NodeId],
    node_distances: List[Tuple[NodeId, float]],
    trace: Tuple[str, ...],
    run_at: datetime,
) -> str:
    lines = [
        f"Run at: {run_at.isoformat()}",
        f"Source: {source}",
        f"Target: {target}",
        f"Distance to target: {format_distance(distance)}",
        f"Path: {' -> '.join(path)}",
        "",
        "Node distances:",
    ]
    lines.extend(f" {node_id} : {format_distance(d)}" for node_id, d in node_distances)
    lines.append("")
    lines.append("Detailed relax operations:")
    lines.extend(trace)
    return "\n".join(lines) + "\n"


def build_run_report(
    graph: Graph,
    result: DijkstraResult,
    target: NodeId,
    run_at: Optional[datetime] = None,
) -> RunReport:
    """Snapshot `result` for `target` into a `RunReport`.

    Raises `TargetNotFound` if `target` is not a node of `graph`; an unknown
    target would otherwise look like an unreachable one.
    """

    if not graph.has_node(target):
        raise TargetNotFound(target)

    run_at = run_at or datetime.now(timezone.utc)
    path = result.get_path(target)
    distance = result.get_distance(target)
    total_distance = result.path_weight(graph, target)
    node_distances = [(node_id, result.get_distance(node_id)) for node_id in graph.node_ids()]
    trace = result.get_trace()

    return RunReport(
        source=result.source,
        target=target,
        distance=distance,
        path=tuple(path),
        total_distance=total_distance,
        node_distances=tuple(node_distances),
        trace=trace,
        run_at=run_at,
        details=_render_details(result.source, target, distance, path, node_distances, trace, run_at),
    )
