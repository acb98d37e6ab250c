"""Tests for the per-variant renderers and the dispatch table."""
from __future__ import annotations

import pytest

from src.config import Palette
from src.diagram import DescriptionError, parse_description
from src.layout import layout_mindmap
from src.renderers import render_diagram
from src.renderers.comparison import overall_score
from src.renderers.flowchart import ARROW_MARKER
from src.renderers.hierarchy import level_color, split_label
from src.renderers.infographic import percent
from src.renderers.preview import PREVIEW_HEADING
from src.renderers.timeline import render_timeline
from src.scene import Box, Container, Path, Polygon, Svg, Text, composition


def _render(data: dict, width: float = 800) -> Container:
    container = Container(width=width)
    render_diagram(parse_description(data), container, Palette(), width)
    return container


def _texts(root) -> list[str]:
    return [t.text for t in root.find_all(Text)]


def test_mindmap_single_vector_drawing(mindmap_data) -> None:
    container = _render(mindmap_data)
    assert len(container.children) == 1
    svg = container.children[0]
    assert isinstance(svg, Svg) and svg.has_class("mindmap")
    assert svg.background == "#f5f5f5"
    counts = composition(container)
    assert counts["circle"] == 4
    assert counts["line"] == 3
    assert {"Plan", "Scope", "Budget", "Team"} <= set(_texts(container))


def test_flowchart_shapes_and_arrow_marker(flowchart_data) -> None:
    container = _render(flowchart_data)
    svg = container.children[0]
    assert ARROW_MARKER in svg.markers
    counts = composition(container)
    assert counts["ellipse"] == 2
    assert counts["polygon"] == 1
    assert counts["rect"] == 1
    assert counts["line"] == 3
    assert "yes" in _texts(container)


def test_render_is_idempotent(flowchart_data, timeline_data) -> None:
    for data in (flowchart_data, timeline_data):
        container = Container(width=800)
        diagram = parse_description(data)
        render_diagram(diagram, container)
        first = composition(container)
        render_diagram(diagram, container)
        assert composition(container) == first
        assert len(container.children) == 1


def test_timeline_cards_animate_in_sequence(timeline_data) -> None:
    container = _render(timeline_data)
    root = container.children[0]
    assert root.has_class("timeline-container")
    cards = [el for el in root.walk() if el.has_class("timeline-card")]
    assert len(cards) == 4
    delays = [card.transient["animation"].delay for card in cards]
    assert delays == pytest.approx([0.0, 0.2, 0.4, 0.6])
    assert [c.has_class("right") for c in cards] == [True, False, True, False]
    assert "hover" in cards[0].transient


def test_comparison_cards_and_radar(comparison_data) -> None:
    container = _render(comparison_data)
    root = container.children[0]
    assert root.has_class("comparison-container")
    items = [el for el in root.walk() if el.has_class("comparison-item")]
    assert len(items) == 2
    radar = [svg for svg in root.find_all(Svg) if svg.has_class("radar-chart")]
    assert len(radar) == 1
    assert len(radar[0].find_all(Polygon)) == 2
    texts = _texts(root)
    assert "8/10" in texts
    assert "7.7/10" in texts


def test_comparison_without_radar_for_three_items(comparison_data) -> None:
    third = dict(comparison_data["items"][0], id="c", title="Phone C")
    comparison_data["items"].append(third)
    container = _render(comparison_data, width=1200)
    assert not [el for el in container.walk() if el.has_class("radar-section")]


def test_overall_score() -> None:
    diagram = parse_description(
        {"type": "comparison", "items": [{"id": "x", "title": "X", "features": []}]}
    )
    assert overall_score(diagram.items[0]) == 0.0


def test_hierarchy_drawing(hierarchy_data) -> None:
    container = _render(hierarchy_data)
    root = container.children[0]
    assert root.has_class("hierarchy-container")
    assert len(root.find_all(Path)) == 2
    texts = _texts(root)
    assert texts.count("L1") == 2
    assert "L0" in texts
    assert "Org chart" in texts


def test_hierarchy_helpers() -> None:
    palette = Palette()
    assert level_color(0, palette, "#000000") == "#000000"
    assert level_color(1, palette) == level_color(1, palette, "#000000")
    assert level_color(len(palette.hierarchy_levels), palette) == palette.hierarchy_levels[0]
    assert split_label("Engineering") == "Engineer\ning"
    assert split_label("CEO") == "CEO"


def test_infographic_sections(infographic_data) -> None:
    container = _render(infographic_data)
    root = container.children[0]
    assert root.has_class("infographic-container")
    sections = [el for el in root.children if el.has_class("section")]
    assert [s.classes[1] for s in sections] == ["header", "stats", "chart", "text"]
    assert sections[0].background == "#2c3e50"
    texts = _texts(root)
    assert "12 M" in texts and "61" in texts
    assert "80%" in texts


def test_chart_fill_is_clamped() -> None:
    assert percent(140) == 100.0
    assert percent(-5) == 0.0
    assert percent(45) == 45.0


def test_unknown_type_renders_preview() -> None:
    container = Container(width=800)
    diagram = parse_description({"type": "venn", "circles": [1, 2]})
    assert render_diagram(diagram, container) is None
    box = container.children[0]
    assert isinstance(box, Box) and box.has_class("default-render")
    texts = _texts(box)
    assert texts[0] == PREVIEW_HEADING
    assert '"type": "venn"' in texts[1]


def test_wrong_variant_is_description_error(mindmap_data) -> None:
    diagram = parse_description(mindmap_data)
    with pytest.raises(DescriptionError) as info:
        render_timeline(diagram, layout_mindmap(diagram), Container())
    assert info.value.field == "type"


def test_unregistered_type_rejected() -> None:
    with pytest.raises(TypeError):
        render_diagram(object(), Container())  # type: ignore[arg-type]
