"""Tests for the coordinate-driven layouts: mindmap and flowchart."""
from __future__ import annotations

import pytest

from src.diagram import DescriptionError, parse_description
from src.layout import layout_flowchart, layout_mindmap, shape_for
from src.layout.flow import SHAPE_SIZES
from src.layout.radial import CENTER_RADIUS, NODE_RADIUS


def test_mindmap_keeps_author_coordinates(mindmap_data) -> None:
    layout = layout_mindmap(parse_description(mindmap_data))
    center = layout["center"]
    assert (center.cx, center.cy) == (400, 300)
    assert center.width == 2 * CENTER_RADIUS
    assert layout["n1"].width == 2 * NODE_RADIUS
    assert (layout["n3"].cx, layout["n3"].cy) == (400, 500)


def test_mindmap_edges_run_center_to_center(mindmap_data) -> None:
    layout = layout_mindmap(parse_description(mindmap_data))
    edge = layout.edges[0]
    assert (edge.source, edge.target) == ("center", "n1")
    assert edge.points == ((400, 300), (200, 150))


def test_mindmap_canvas_grows_for_far_nodes(mindmap_data) -> None:
    mindmap_data["nodes"][1]["x"] = 1000
    layout = layout_mindmap(parse_description(mindmap_data))
    assert layout.width == 1000 + NODE_RADIUS + 20
    assert layout.height == 600


def test_mindmap_dangling_connection(mindmap_data) -> None:
    mindmap_data["connections"].append({"from": "center", "to": "ghost"})
    with pytest.raises(DescriptionError) as info:
        layout_mindmap(parse_description(mindmap_data))
    assert info.value.field == "connections[3].to"


@pytest.mark.parametrize(
    "kind, shape",
    [("start", "ellipse"), ("end", "ellipse"), ("decision", "diamond"), ("process", "rounded-rect")],
)
def test_shape_for_kind(kind: str, shape: str) -> None:
    assert shape_for(kind) == shape


def test_flowchart_sizes_by_shape(flowchart_data) -> None:
    layout = layout_flowchart(parse_description(flowchart_data))
    start, check = layout["start"], layout["check"]
    assert (start.width, start.height) == SHAPE_SIZES["ellipse"]
    assert (check.width, check.height) == SHAPE_SIZES["diamond"]
    assert (check.cx, check.cy) == (400, 200)


def test_flowchart_connector_joins_facing_midpoints(flowchart_data) -> None:
    layout = layout_flowchart(parse_description(flowchart_data))
    first = layout.edges[0]
    assert first.points == (layout["start"].bottom_mid, layout["check"].top_mid)


def test_flowchart_upward_and_sideways_connectors(flowchart_data) -> None:
    flowchart_data["nodes"].append({"id": "retry", "text": "Retry", "type": "process", "x": 650, "y": 350})
    flowchart_data["connections"] += [{"from": "end", "to": "work"}, {"from": "work", "to": "retry"}]
    layout = layout_flowchart(parse_description(flowchart_data))
    up, side = layout.edges[-2], layout.edges[-1]
    assert up.points == (layout["end"].top_mid, layout["work"].bottom_mid)
    assert side.points == (layout["work"].right_mid, layout["retry"].left_mid)


def test_flowchart_edge_label_at_midpoint(flowchart_data) -> None:
    layout = layout_flowchart(parse_description(flowchart_data))
    labeled = layout.edges[1]
    assert labeled.label == "yes"
    assert labeled.label_at == (400, 275)
    assert layout.edges[0].label_at is None


def test_flowchart_dangling_connection(flowchart_data) -> None:
    flowchart_data["connections"][0]["from"] = "nowhere"
    with pytest.raises(DescriptionError) as info:
        layout_flowchart(parse_description(flowchart_data))
    assert info.value.field == "connections[0].from"


def test_flowchart_duplicate_ids(flowchart_data) -> None:
    flowchart_data["nodes"][3]["id"] = "start"
    flowchart_data["connections"] = []
    with pytest.raises(DescriptionError) as info:
        layout_flowchart(parse_description(flowchart_data))
    assert info.value.field == "nodes[3].id"
