from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship
from .database import Base
from datetime import datetime


class GraphNode(Base):
    __tablename__ = "graph_nodes"
    id = Column(String(50), primary_key=True, index=True)
    x = Column(Integer, nullable=False, default=0)  # display coordinates only
    y = Column(Integer, nullable=False, default=0)
    position = Column(Integer, nullable=False, default=0)  # insertion order for display/iteration

    edges_a = relationship("GraphEdge", back_populates="node_a_rel", foreign_keys="GraphEdge.node_a")
    edges_b = relationship("GraphEdge", back_populates="node_b_rel", foreign_keys="GraphEdge.node_b")


class GraphEdge(Base):
    # one row per undirected edge; the graph model expands it into two arcs
    __tablename__ = "graph_edges"
    id = Column(Integer, primary_key=True, index=True)
    node_a = Column(String(50), ForeignKey("graph_nodes.id"), nullable=False)
    node_b = Column(String(50), ForeignKey("graph_nodes.id"), nullable=False)
    weight = Column(Float, nullable=False)

    node_a_rel = relationship("GraphNode", foreign_keys=[node_a], back_populates="edges_a")
    node_b_rel = relationship("GraphNode", foreign_keys=[node_b], back_populates="edges_b")


class DijkstraRun(Base):
    # append-only archive of saved runs
    __tablename__ = "dijkstra_log"
    id = Column(Integer, primary_key=True, index=True)
    source_node = Column(String(50), nullable=False)
    target_node = Column(String(50), nullable=False)
    path = Column(String(500), nullable=False, default="")  # e.g. "A->D->E->G"
    distance = Column(Float, nullable=True)  # None when the target is unreachable
    details = Column(Text, nullable=False, default="")  # full report incl. trace
    created_at = Column(DateTime, default=datetime.utcnow)
