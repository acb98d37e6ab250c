"""
Timeline renderer: box layout with a centre spine, numbered dots and alternating event
cards. Cards slide in one after another and lift on hover; that state is transient only.
"""
from __future__ import annotations

from ..config import Palette
from ..diagram.schema import TimelineDiagram, TimelineEvent
from ..layout.timeline import (
    CARD_PADDING,
    DATE_HEIGHT,
    DESCRIPTION_SIZE,
    TITLE_SIZE,
    TimelineLayout,
)
from ..scene.elements import Box, Element, Text
from .base import animate_entry, pill, require, resolve_colors, root_box, title_text

CONTAINER_CLASS = "timeline-container"
SPINE_WIDTH = 4
CAP_SIZE = 12
CONNECTOR_WIDTH = 2


def _card(
    event: TimelineEvent, index: int, layout: TimelineLayout, heading: str, muted: str, event_color: str
) -> Box:
    p = layout[event.id]
    side = layout.sides[event.id]
    card = Box(
        x=p.x,
        y=p.y,
        width=p.width,
        height=p.height,
        background="#ffffff",
        border_color=event_color,
        border_width=2,
        radius=12,
        classes=["timeline-card", side],
        attrs={"data-id": event.id},
    )
    animate_entry(card, "slideInUp", index, 0.2)
    card.append(pill(event.date, CARD_PADDING, CARD_PADDING, event_color, height=DATE_HEIGHT))

    title_y = CARD_PADDING + DATE_HEIGHT + 12
    card.append(
        Text(
            x=CARD_PADDING,
            y=title_y,
            text="\n".join(layout.title_lines[event.id]),
            size=TITLE_SIZE,
            weight="bold",
            color=heading,
            baseline="hanging",
            line_height=1.3,
        )
    )
    description = layout.description_lines[event.id]
    if description:
        card.append(
            Text(
                x=CARD_PADDING,
                y=title_y + len(layout.title_lines[event.id]) * TITLE_SIZE * 1.3 + 10,
                text="\n".join(description),
                size=DESCRIPTION_SIZE,
                color=muted,
                baseline="hanging",
                line_height=1.6,
            )
        )
    return card


def _dot(number: int, key: str, layout: TimelineLayout, color: str) -> Box:
    p = layout[key]
    dot = Box(
        x=p.x,
        y=p.y,
        width=p.width,
        height=p.height,
        background=color,
        border_color="#ffffff",
        border_width=4,
        radius=p.width / 2,
        classes=["timeline-dot"],
    )
    dot.transient["transition"] = "transform 0.3s ease"
    dot.transient["hover"] = {"transform": "scale(1.2)"}
    dot.append(
        Text(
            x=p.width / 2,
            y=p.height / 2,
            text=str(number),
            size=10,
            weight="bold",
            color="#ffffff",
            anchor="middle",
            baseline="middle",
        )
    )
    return dot


def render_timeline(
    diagram: TimelineDiagram, layout: TimelineLayout, container: Element, palette: Palette | None = None
) -> Element:
    require(diagram, TimelineDiagram)
    palette = palette or Palette()
    colors = resolve_colors(diagram.style, palette)
    heading = diagram.style.text or palette.heading

    root = root_box(container, CONTAINER_CLASS, layout.width, layout.height)
    title = layout["title"]
    root.append(title_text(diagram.title, title.cx, title.y, palette.heading))

    wrapper = layout["wrapper"]
    root.append(Box(x=wrapper.x, y=wrapper.y, width=wrapper.width, height=wrapper.height, classes=["timeline-wrapper"]))

    spine_x, top, bottom = layout.spine
    root.append(
        Box(
            x=spine_x - SPINE_WIDTH / 2,
            y=top,
            width=SPINE_WIDTH,
            height=bottom - top,
            background=colors.line,
            radius=SPINE_WIDTH / 2,
            classes=["timeline-spine"],
        )
    )
    for cap_y, color in ((top - CAP_SIZE / 2, colors.line), (bottom - CAP_SIZE / 2, colors.event)):
        root.append(
            Box(
                x=spine_x - CAP_SIZE / 2,
                y=cap_y,
                width=CAP_SIZE,
                height=CAP_SIZE,
                background=color,
                border_color="#ffffff",
                border_width=3,
                radius=CAP_SIZE / 2,
                classes=["timeline-cap"],
            )
        )

    for edge in layout.edges:
        (x1, y), (x2, _) = edge.points
        root.append(
            Box(
                x=min(x1, x2),
                y=y - CONNECTOR_WIDTH / 2,
                width=abs(x2 - x1),
                height=CONNECTOR_WIDTH,
                background=colors.event,
                classes=["timeline-connector"],
            )
        )
    for index, event in enumerate(diagram.events):
        root.append(_card(event, index, layout, heading, palette.muted, colors.event))
        root.append(_dot(index + 1, f"{event.id}/dot", layout, colors.event))
    return root
