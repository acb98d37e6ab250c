"""Tests for the comparison grid and radar geometry."""
from __future__ import annotations

import logging
import math

import pytest

from src.diagram import ComparisonDiagram, ComparisonItem, DescriptionError, Feature, parse_description
from src.layout import axis_angle, compute_radar, layout_comparison
from src.layout.comparison import RADAR_CENTER, RADAR_RADIUS, card_height


def _item(item_id: str, scores: list[float], names: list[str] | None = None) -> ComparisonItem:
    names = names or [f"f{k}" for k in range(len(scores))]
    return ComparisonItem(
        id=item_id,
        title=item_id.upper(),
        features=tuple(Feature(name=n, value="", score=s) for n, s in zip(names, scores)),
    )


def test_axis_angles_start_up_and_go_clockwise() -> None:
    assert axis_angle(0, 3) == pytest.approx(-math.pi / 2)
    assert axis_angle(1, 3) == pytest.approx(math.pi / 6)
    assert axis_angle(2, 3) == pytest.approx(5 * math.pi / 6)


def test_score_maps_to_distance_from_center() -> None:
    radar = compute_radar([_item("a", [10, 0, 5]), _item("b", [0, 10, 10])])
    cx, cy = RADAR_CENTER
    top, origin, half = radar.polygons["a"]
    assert top == pytest.approx((cx, cy - RADAR_RADIUS))
    assert origin == pytest.approx((cx, cy))
    assert math.dist(half, RADAR_CENTER) == pytest.approx(RADAR_RADIUS / 2)
    assert radar.polygons["b"][1] == pytest.approx(radar.axis_end(1))


def test_radar_rings_and_labels() -> None:
    radar = compute_radar([_item("a", [1, 2, 3, 4])])
    assert radar.axes == ["f0", "f1", "f2", "f3"]
    assert radar.rings == pytest.approx([24, 48, 72, 96, 120])
    label_x, label_y = radar.label_points[0]
    assert label_x == pytest.approx(RADAR_CENTER[0])
    assert label_y < RADAR_CENTER[1] - RADAR_RADIUS


def test_radar_mismatch_aligns_by_index_and_warns(caplog) -> None:
    a = _item("a", [5, 5, 5], ["Battery", "Camera", "Price"])
    b = _item("b", [10, 10], ["Battery", "Screen"])
    with caplog.at_level(logging.WARNING, logger="src.layout.comparison"):
        radar = compute_radar([a, b])
    assert "mismatch" in caplog.text
    assert radar.axes == ["Battery", "Camera", "Price"]
    assert radar.polygons["b"][1] == pytest.approx(radar.axis_end(1))
    assert radar.polygons["b"][2] == pytest.approx(RADAR_CENTER)


def test_radar_needs_features() -> None:
    assert compute_radar([]) is None
    assert compute_radar([_item("a", [])]) is None


def test_two_items_get_side_by_side_cards_and_radar(comparison_data) -> None:
    layout = layout_comparison(parse_description(comparison_data), width=800)
    assert layout.columns == 2
    assert layout.column_width == pytest.approx(365)
    a, b = layout["a"], layout["b"]
    assert a.y == b.y
    assert a.right < b.x
    assert a.height == card_height(3)
    assert layout.radar is not None
    radar_box = layout["radar"]
    assert radar_box.y > a.bottom
    assert layout.height > radar_box.bottom


def test_narrow_canvas_stacks_cards(comparison_data) -> None:
    layout = layout_comparison(parse_description(comparison_data), width=400)
    assert layout.columns == 1
    assert layout["b"].y > layout["a"].bottom


def test_radar_only_for_exactly_two_items() -> None:
    three = ComparisonDiagram(items=(_item("a", [1]), _item("b", [2]), _item("c", [3])))
    layout = layout_comparison(three, width=1200)
    assert layout.radar is None
    assert "radar" not in layout.placements
    assert layout.columns == 3


def test_row_shares_tallest_card_height() -> None:
    d = ComparisonDiagram(items=(_item("a", [1]), _item("b", [1, 2, 3])))
    layout = layout_comparison(d, width=800)
    assert layout["a"].height == layout["b"].height == card_height(3)


def test_duplicate_item_ids_rejected() -> None:
    d = ComparisonDiagram(items=(_item("a", [1]), _item("a", [2])))
    with pytest.raises(DescriptionError) as info:
        layout_comparison(d)
    assert info.value.field == "items[1].id"
