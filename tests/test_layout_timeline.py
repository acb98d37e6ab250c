"""Tests for the alternating timeline layout."""
from __future__ import annotations

import pytest

from src.diagram import DescriptionError, TimelineDiagram, TimelineEvent, parse_description
from src.layout import layout_timeline, side_for
from src.layout.timeline import CARD_GAP, CARD_MAX_WIDTH, LEFT, RIGHT, ROW_GAP, WRAPPER_MIN_HEIGHT


def test_sides_alternate_starting_right(timeline_data) -> None:
    layout = layout_timeline(parse_description(timeline_data))
    assert [layout.sides[e] for e in ("e1", "e2", "e3", "e4")] == [RIGHT, LEFT, RIGHT, LEFT]
    assert [side_for(i) for i in range(4)] == [RIGHT, LEFT, RIGHT, LEFT]


def test_cards_sit_on_their_side_of_the_spine(timeline_data) -> None:
    layout = layout_timeline(parse_description(timeline_data), width=800)
    spine_x = layout.spine[0]
    assert spine_x == 400
    assert layout["e1"].x == spine_x + CARD_GAP
    assert layout["e2"].right == pytest.approx(spine_x - CARD_GAP)
    assert layout["e1"].width == pytest.approx(min(CARD_MAX_WIDTH, 760 * 0.45 - CARD_GAP))


def test_rows_strictly_increase(timeline_data) -> None:
    layout = layout_timeline(parse_description(timeline_data))
    cards = [layout[e] for e in ("e1", "e2", "e3", "e4")]
    for upper, lower in zip(cards, cards[1:]):
        assert lower.y == upper.bottom + ROW_GAP
        assert lower.y > upper.y


def test_dots_centered_on_spine_at_card_middle(timeline_data) -> None:
    layout = layout_timeline(parse_description(timeline_data))
    spine_x = layout.spine[0]
    for event_id in ("e1", "e2"):
        dot, card = layout[f"{event_id}/dot"], layout[event_id]
        assert dot.cx == spine_x
        assert dot.cy == card.cy
    right_edge = next(e for e in layout.edges if e.target == "e1")
    left_edge = next(e for e in layout.edges if e.target == "e2")
    assert right_edge.points[-1] == layout["e1"].left_mid
    assert left_edge.points[-1] == layout["e2"].right_mid


def test_empty_description_has_no_lines(timeline_data) -> None:
    layout = layout_timeline(parse_description(timeline_data))
    assert layout.description_lines["e3"] == []
    assert layout.description_lines["e1"]


def test_wrapper_and_spine_contain_all_cards(timeline_data) -> None:
    layout = layout_timeline(parse_description(timeline_data))
    wrapper = layout["wrapper"]
    assert wrapper.height >= WRAPPER_MIN_HEIGHT
    assert layout["e4"].bottom < wrapper.bottom
    _, top, bottom = layout.spine
    assert wrapper.y < top < bottom < wrapper.bottom
    assert layout.height > wrapper.bottom


def test_narrow_canvas_shrinks_cards(timeline_data) -> None:
    wide = layout_timeline(parse_description(timeline_data), width=1200)
    layout = layout_timeline(parse_description(timeline_data), width=400)
    assert wide["e1"].width == CARD_MAX_WIDTH
    assert layout["e1"].width < CARD_MAX_WIDTH
    assert layout["e2"].x >= 0


def test_empty_timeline_keeps_minimum_wrapper() -> None:
    layout = layout_timeline(TimelineDiagram(events=()))
    assert layout["wrapper"].height == WRAPPER_MIN_HEIGHT
    assert layout.edges == []


def test_duplicate_event_ids_rejected() -> None:
    d = TimelineDiagram(events=(TimelineEvent("x", "2020", "A"), TimelineEvent("x", "2021", "B")))
    with pytest.raises(DescriptionError) as info:
        layout_timeline(d)
    assert info.value.field == "events[1].id"
