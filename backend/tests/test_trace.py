import math

import pytest

from pathtrace.core.graph.trace import (
    ExtractEntry,
    InitEntry,
    RelaxAttemptEntry,
    RelaxUpdateEntry,
    TraceRecorder,
    format_distance,
    format_trace,
)


def test_format_distance():
    assert format_distance(0) == "0.0"
    assert format_distance(4) == "4.0"
    assert format_distance(2.25) == "2.2"
    assert format_distance(math.inf) == "INF"


def test_entry_formats():
    assert InitEntry("A").format() == "Init: set distance(A)=0 and others=INF"
    assert ExtractEntry("D", 2.0).format() == "Extract min: D (dist=2.0)"
    assert (
        RelaxAttemptEntry("D", "E", 2.0, 4.0, math.inf).format()
        == "Relax edge D->E (weight=2.0): alt=4.0, dist(E)=INF"
    )
    assert RelaxUpdateEntry("E", 4.0, "D").format() == "  Updated: dist(E)=4.0, prev(E)=D"


def test_relax_attempt_improves():
    assert RelaxAttemptEntry("A", "B", 1.0, 1.0, math.inf).improves
    assert not RelaxAttemptEntry("A", "B", 1.0, 3.0, 3.0).improves


def test_recorder_keeps_order_and_freezes():
    recorder = TraceRecorder()
    recorder.init("A")
    recorder.extract("A", 0.0)
    recorder.relax_attempt("A", "B", 1.0, 1.0, math.inf)
    recorder.relax_update("B", 1.0, "A")

    entries = recorder.freeze()
    assert entries == (
        InitEntry("A"),
        ExtractEntry("A", 0.0),
        RelaxAttemptEntry("A", "B", 1.0, 1.0, math.inf),
        RelaxUpdateEntry("B", 1.0, "A"),
    )
    with pytest.raises(RuntimeError):
        recorder.extract("B", 1.0)
    assert len(recorder) == 4


def test_format_trace():
    lines = format_trace((InitEntry("X"), ExtractEntry("X", 0.0)))
    assert lines == ("Init: set distance(X)=0 and others=INF", "Extract min: X (dist=0.0)")
