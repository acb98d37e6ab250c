"""
Shared renderer helpers: colour resolution against the palette, variant checks,
and the small element builders every renderer uses.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ..config import Palette
from ..diagram.errors import DescriptionError
from ..diagram.schema import DiagramStyle
from ..scene.elements import Animation, Box, Element, Text

TITLE_SIZE = 24
HOVER_TRANSITION = "transform 0.3s ease, box-shadow 0.3s ease"
HOVER_LIFT = "translateY(-5px)"


@dataclass(frozen=True)
class Colors:
    """A description's style record with unset roles filled from the palette."""

    background: str
    node: str
    text: str
    line: str
    primary: str
    secondary: str
    accent: str
    event: str
    node_colors: Mapping[str, str] = field(default_factory=dict)


def resolve_colors(style: DiagramStyle, palette: Palette) -> Colors:
    return Colors(
        background=style.background or palette.background,
        node=style.node or palette.node,
        text=style.text or palette.text,
        line=style.line or palette.line,
        primary=style.primary or palette.primary,
        secondary=style.secondary or palette.secondary,
        accent=style.accent or palette.accent,
        event=style.event or palette.event,
        node_colors={**palette.flow_nodes, **style.node_colors},
    )


def require(diagram: Any, kind: type) -> None:
    """Renderers only accept their own variant; anything else is a tag/payload mismatch."""
    if not isinstance(diagram, kind):
        found = getattr(diagram, "type", type(diagram).__name__)
        raise DescriptionError("type", f"{kind.__name__} renderer cannot draw a {found!r} description")


def title_text(text: str, cx: float, y: float, color: str, size: float = TITLE_SIZE) -> Text:
    return Text(
        x=cx,
        y=y,
        text=text,
        size=size,
        weight="bold",
        color=color,
        anchor="middle",
        baseline="hanging",
        classes=["title"],
    )


def root_box(container: Element, css_class: str, width: float, height: float, background: str | None = "#ffffff") -> Box:
    """Clear `container` and give it a single root box carrying the diagram marker class."""
    container.clear()
    return container.append(Box(classes=[css_class], width=width, height=height, background=background, radius=12))


def animate_entry(el: Element, name: str, index: int, stagger: float, duration: float = 0.6) -> None:
    """Staggered entry animation plus hover lift; both live in transient state only."""
    el.transient["animation"] = Animation(name, duration, delay=index * stagger)
    el.transient["transition"] = HOVER_TRANSITION
    el.transient["hover"] = {"transform": HOVER_LIFT}


def pill(text: str, x: float, y: float, background: str, *, size: float = 12, height: float = 28) -> Box:
    """Rounded label chip sized to its text."""
    width = Text(text=text, size=size).block_width() + 24
    box = Box(x=x, y=y, width=width, height=height, background=background, radius=height / 2)
    box.append(Text(x=12, y=height / 2, text=text, size=size, weight="bold", color="#ffffff", baseline="middle"))
    return box
