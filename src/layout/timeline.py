"""
Timeline layout: a centre spine with event cards alternating sides. Event i goes to the
right column when i is even and the left column when odd; rows stack downward so each
card sits strictly below the previous one.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from ..diagram.errors import DescriptionError
from ..diagram.schema import TimelineDiagram
from .geometry import EdgeRoute, LayoutResult, Placement, wrap_text

PADDING = 20
TITLE_HEIGHT = 54
WRAPPER_PADDING = 40
WRAPPER_MIN_HEIGHT = 400
SPINE_INSET = 20
COLUMN_RATIO = 0.45
CARD_GAP = 40
CARD_MAX_WIDTH = 320
CARD_PADDING = 20
CARD_MIN_HEIGHT = 120
ROW_GAP = 60
DATE_HEIGHT = 28
TITLE_SIZE = 18
DESCRIPTION_SIZE = 14
DOT_SIZE = 28

RIGHT = "right"
LEFT = "left"


def side_for(index: int) -> str:
    return RIGHT if index % 2 == 0 else LEFT


@dataclass
class TimelineLayout(LayoutResult):
    sides: dict[str, str] = field(default_factory=dict)
    spine: tuple[float, float, float] = (0.0, 0.0, 0.0)
    title_lines: dict[str, list[str]] = field(default_factory=dict)
    description_lines: dict[str, list[str]] = field(default_factory=dict)


def _card_height(title_lines: int, description_lines: int) -> float:
    body = (
        DATE_HEIGHT
        + 12
        + title_lines * TITLE_SIZE * 1.3
        + 10
        + description_lines * DESCRIPTION_SIZE * 1.6
    )
    return max(CARD_MIN_HEIGHT, 2 * CARD_PADDING + body)


def layout_timeline(diagram: TimelineDiagram, width: float = 800) -> TimelineLayout:
    inner = width - 2 * PADDING
    spine_x = width / 2
    card_width = min(CARD_MAX_WIDTH, inner * COLUMN_RATIO - CARD_GAP)
    text_width = card_width - 2 * CARD_PADDING
    wrapper_top = PADDING + TITLE_HEIGHT

    result = TimelineLayout(width=width, height=0.0)
    result.placements["title"] = Placement(PADDING, PADDING, inner, TITLE_HEIGHT)

    row_top = wrapper_top + WRAPPER_PADDING
    for i, event in enumerate(diagram.events):
        if event.id in result.sides:
            raise DescriptionError(f"events[{i}].id", f"duplicate event id {event.id!r}")
        side = side_for(i)
        title_lines = wrap_text(event.title, text_width, TITLE_SIZE)
        description_lines = wrap_text(event.description, text_width, DESCRIPTION_SIZE) if event.description else []
        height = _card_height(len(title_lines), len(description_lines))
        x = spine_x + CARD_GAP if side == RIGHT else spine_x - CARD_GAP - card_width
        card = Placement(x, row_top, card_width, height)
        dot = Placement.centered(spine_x, card.cy, DOT_SIZE, DOT_SIZE)

        result.sides[event.id] = side
        result.title_lines[event.id] = title_lines
        result.description_lines[event.id] = description_lines
        result.placements[event.id] = card
        result.placements[f"{event.id}/dot"] = dot
        attach = card.left_mid if side == RIGHT else card.right_mid
        result.edges.append(EdgeRoute(f"{event.id}/dot", event.id, ((spine_x, card.cy), attach)))
        row_top = card.bottom + ROW_GAP

    rows_bottom = row_top - ROW_GAP if diagram.events else row_top
    wrapper_height = max(WRAPPER_MIN_HEIGHT, rows_bottom + WRAPPER_PADDING - wrapper_top)
    result.spine = (spine_x, wrapper_top + SPINE_INSET, wrapper_top + wrapper_height - SPINE_INSET)
    result.placements["wrapper"] = Placement(PADDING, wrapper_top, inner, wrapper_height)
    result.height = wrapper_top + wrapper_height + PADDING
    return result
