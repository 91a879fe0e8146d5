"""Dijkstra run endpoints.

This router connects an operator's choice of source/target to the core:
- `POST /dijkstra/run` computes and returns distances, path, trace and the
  highlight view, without storing anything.
- `POST /dijkstra/runs` computes the same report and appends it to the
  run archive.
- `GET /dijkstra/runs` lists archived runs, newest first.
"""

import math
from datetime import datetime
from typing import Callable, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pathtrace.core.graph.dijkstra import compute
from pathtrace.core.graph.errors import SourceNotFound, TargetNotFound
from pathtrace.core.graph.graph_model import Graph
from pathtrace.core.render.highlight import HighlightView, build_highlight
from pathtrace.core.routing.run_archive import RunArchive
from pathtrace.core.routing.run_report import build_run_report
from pathtrace.routers.graph import get_graph, get_session_factory

router = APIRouter()


def get_archive(
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> RunArchive:
    return RunArchive(session_factory)


def _finite(value: float) -> Optional[float]:
    # JSON has no infinity; unreached distances go out as null
    return None if math.isinf(value) else value


# -------------------- Schemas -------------------- #

class RunRequest(BaseModel):
    source: str = Field(..., description="Node to start Dijkstra from")
    target: str = Field(..., description="Node whose path is reported and highlighted")


class HighlightNodeOut(BaseModel):
    id: str
    x: int
    y: int
    highlighted: bool


class HighlightEdgeOut(BaseModel):
    a: str
    b: str
    weight: float
    on_path: bool


class HighlightOut(BaseModel):
    nodes: List[HighlightNodeOut]
    edges: List[HighlightEdgeOut]


class RunResponse(BaseModel):
    source: str
    target: str
    distance: Optional[float]
    path: List[str]
    total_distance: Optional[float]
    distances: Dict[str, Optional[float]]
    predecessors: Dict[str, Optional[str]]
    trace: List[str]
    highlight: HighlightOut
    details: str


class ArchivedRunOut(BaseModel):
    id: int
    source_node: str
    target_node: str
    path: str
    distance: Optional[float]
    details: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# -------------------- Helpers -------------------- #

def _run(graph: Graph, payload: RunRequest):
    try:
        result = compute(graph, payload.source)
        report = build_run_report(graph, result, payload.target)
        highlight = build_highlight(graph, result, payload.target)
    except (SourceNotFound, TargetNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    return result, report, highlight


def _highlight_out(view: HighlightView) -> HighlightOut:
    return HighlightOut(
        nodes=[HighlightNodeOut(id=n.id, x=n.x, y=n.y, highlighted=n.highlighted) for n in view.nodes],
        edges=[HighlightEdgeOut(a=e.a, b=e.b, weight=e.weight, on_path=e.on_path) for e in view.edges],
    )


# -------------------- Endpoints -------------------- #

@router.post("/run", response_model=RunResponse)
def run_dijkstra(payload: RunRequest, graph: Graph = Depends(get_graph)):
    result, report, highlight = _run(graph, payload)
    return RunResponse(
        source=report.source,
        target=report.target,
        distance=_finite(report.distance),
        path=list(report.path),
        total_distance=_finite(report.total_distance),
        distances={node_id: _finite(d) for node_id, d in report.node_distances},
        predecessors=dict(result.predecessors),
        trace=list(report.trace),
        highlight=_highlight_out(highlight),
        details=report.details,
    )


@router.post("/runs", response_model=ArchivedRunOut)
def save_run(
    payload: RunRequest,
    graph: Graph = Depends(get_graph),
    archive: RunArchive = Depends(get_archive),
):
    """Compute a run and append it to the archive.

    The run is computed first; an archive failure is reported as 500 with
    the database error text and leaves nothing half-written.
    """
    _result, report, _highlight = _run(graph, payload)
    try:
        return archive.save(report)
    except SQLAlchemyError as e:
        raise HTTPException(status_code=500, detail=f"Error saving run to database: {e}")


@router.get("/runs", response_model=List[ArchivedRunOut])
def list_runs(
    limit: Optional[int] = Query(None, ge=1, description="Return at most this many runs"),
    archive: RunArchive = Depends(get_archive),
):
    return archive.list_runs(limit=limit)
