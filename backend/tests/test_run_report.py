import math
from datetime import datetime

import pytest

from pathtrace.core.graph.dijkstra import compute
from pathtrace.core.graph.errors import TargetNotFound
from pathtrace.core.graph.graph_model import Graph
from pathtrace.core.routing.run_report import build_run_report

RUN_AT = datetime(2024, 1, 2, 3, 4, 5)


def test_report_for_reachable_target(sample_graph):
    result = compute(sample_graph, "A")
    report = build_run_report(sample_graph, result, "G", run_at=RUN_AT)

    assert report.source == "A"
    assert report.target == "G"
    assert report.distance == 5
    assert report.total_distance == 5
    assert report.path == ("A", "D", "E", "G")
    assert report.path_text == "A->D->E->G"
    assert report.reachable
    assert report.trace == result.get_trace()
    assert [node_id for node_id, _ in report.node_distances] == list("ABCDEFG")


def test_report_details_layout(sample_graph):
    result = compute(sample_graph, "A")
    report = build_run_report(sample_graph, result, "G", run_at=RUN_AT)
    lines = report.details.splitlines()

    assert lines[:7] == [
        "Run at: 2024-01-02T03:04:05",
        "Source: A",
        "Target: G",
        "Distance to target: 5.0",
        "Path: A -> D -> E -> G",
        "",
        "Node distances:",
    ]
    assert lines[7:14] == [
        " A : 0.0",
        " B : 4.0",
        " C : 7.0",
        " D : 2.0",
        " E : 4.0",
        " F : 8.0",
        " G : 5.0",
    ]
    assert lines[14:16] == ["", "Detailed relax operations:"]
    assert lines[16:] == list(result.get_trace())


def test_report_for_unreachable_target(disconnected_graph):
    result = compute(disconnected_graph, "A")
    report = build_run_report(disconnected_graph, result, "H", run_at=RUN_AT)

    assert report.path == ()
    assert report.path_text == ""
    assert math.isinf(report.distance)
    assert math.isinf(report.total_distance)
    assert not report.reachable
    assert "Distance to target: INF" in report.details


def test_report_for_source_as_target(sample_graph):
    result = compute(sample_graph, "B")
    report = build_run_report(sample_graph, result, "B", run_at=RUN_AT)
    assert report.path == ("B",)
    assert report.total_distance == 0.0


def test_report_unknown_target(sample_graph):
    result = compute(sample_graph, "A")
    with pytest.raises(TargetNotFound):
        build_run_report(sample_graph, result, "Z")


def test_report_defaults_run_at(sample_graph):
    result = compute(sample_graph, "A")
    report = build_run_report(sample_graph, result, "C")
    assert isinstance(report.run_at, datetime)
    assert report.run_at.tzinfo is not None


def test_report_total_matches_distance_with_parallel_edges():
    g = Graph()
    g.add_node("A")
    g.add_node("B")
    g.add_edge("A", "B", 5)
    g.add_edge("A", "B", 1)

    report = build_run_report(g, compute(g, "A"), "B", run_at=RUN_AT)
    assert report.distance == 1.0
    assert report.total_distance == 1.0
