"""Structured trace of the decisions Dijkstra makes while it runs.

Entries are kept as small frozen dataclasses (one per kind of decision) and
are only turned into display strings by `format()`. Tests can therefore check
the trace by structure, while the UI and the run archive still get readable
lines such as::

    Init: set distance(A)=0 and others=INF
    Extract min: A (dist=0.0)
    Relax edge A->B (weight=4.0): alt=4.0, dist(B)=INF
      Updated: dist(B)=4.0, prev(B)=A

Every line is self-contained: it names the nodes and numbers it talks about,
so no line needs its neighbours to be understood.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple, Union

from .graph_model import NodeId


def format_distance(value: float) -> str:
    """Render a distance with one decimal; infinity is shown as INF."""

    if math.isinf(value):
        return "INF"
    return f"{value:.1f}"


@dataclass(frozen=True)
class InitEntry:
    source: NodeId

    def format(self) -> str:
        return f"Init: set distance({self.source})=0 and others=INF"


@dataclass(frozen=True)
class ExtractEntry:
    node: NodeId
    distance: float

    def format(self) -> str:
        return f"Extract min: {self.node} (dist={format_distance(self.distance)})"


@dataclass(frozen=True)
class RelaxAttemptEntry:
    source: NodeId
    target: NodeId
    weight: float
    alt: float
    current: float  # distance[target] before the comparison

    @property
    def improves(self) -> bool:
        return self.alt < self.current

    def format(self) -> str:
        return (
            f"Relax edge {self.source}->{self.target} "
            f"(weight={format_distance(self.weight)}): "
            f"alt={format_distance(self.alt)}, "
            f"dist({self.target})={format_distance(self.current)}"
        )


@dataclass(frozen=True)
class RelaxUpdateEntry:
    node: NodeId
    distance: float
    predecessor: NodeId

    def format(self) -> str:
        return (
            f"  Updated: dist({self.node})={format_distance(self.distance)}, "
            f"prev({self.node})={self.predecessor}"
        )


TraceEntry = Union[InitEntry, ExtractEntry, RelaxAttemptEntry, RelaxUpdateEntry]


class TraceRecorder:
    """Append-only buffer the engine writes to while it runs.

    `freeze()` hands back an immutable tuple; after that the recorder
    refuses further appends.
    """

    def __init__(self) -> None:
        self._entries: List[TraceEntry] = []
        self._frozen = False

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: TraceEntry) -> None:
        if self._frozen:
            raise RuntimeError("trace is frozen; entries can no longer be added")
        self._entries.append(entry)

    def init(self, source: NodeId) -> None:
        self.append(InitEntry(source))

    def extract(self, node: NodeId, distance: float) -> None:
        self.append(ExtractEntry(node, distance))

    def relax_attempt(
        self, source: NodeId, target: NodeId, weight: float, alt: float, current: float
    ) -> None:
        self.append(RelaxAttemptEntry(source, target, weight, alt, current))

    def relax_update(self, node: NodeId, distance: float, predecessor: NodeId) -> None:
        self.append(RelaxUpdateEntry(node, distance, predecessor))

    def freeze(self) -> Tuple[TraceEntry, ...]:
        self._frozen = True
        return tuple(self._entries)


def format_trace(entries: Tuple[TraceEntry, ...]) -> Tuple[str, ...]:
    return tuple(entry.format() for entry in entries)
