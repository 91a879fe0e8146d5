"""Graph endpoints and the shared DB dependencies.

Exposes the stored topology so the frontend can draw it before any run.
"""

from typing import Callable, Generator, List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from pathtrace.core.graph.errors import InvalidGraph
from pathtrace.core.graph.graph_loader import build_graph_from_db
from pathtrace.core.graph.graph_model import Graph
from pathtrace.db.database import SessionLocal

router = APIRouter()


def get_session_factory() -> Callable[[], Session]:
    return SessionLocal


# Dependency to get a DB session per request
def get_db(
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


def get_graph(db: Session = Depends(get_db)) -> Graph:
    try:
        return build_graph_from_db(db)
    except InvalidGraph as e:
        raise HTTPException(status_code=500, detail=f"Stored graph is invalid: {e}")


# -------------------- Schemas -------------------- #

class GraphNodeOut(BaseModel):
    id: str
    x: int
    y: int


class GraphEdgeOut(BaseModel):
    a: str
    b: str
    weight: float


class GraphOut(BaseModel):
    nodes: List[GraphNodeOut]
    edges: List[GraphEdgeOut]


# -------------------- Endpoints -------------------- #

@router.get("", response_model=GraphOut)
def read_graph(graph: Graph = Depends(get_graph)):
    return GraphOut(
        nodes=[GraphNodeOut(id=n.id, x=n.x, y=n.y) for n in graph.nodes()],
        edges=[GraphEdgeOut(a=e.source, b=e.target, weight=e.weight) for e in graph.edges()],
    )
