"""Raw data preview for descriptions whose type tag has no dedicated renderer."""
from __future__ import annotations

import json

from ..config import Palette
from ..diagram.schema import UnknownDiagram
from ..scene.elements import Box, Element, Text
from .base import require

PREVIEW_HEADING = "Data preview"
PADDING = 20
DUMP_SIZE = 12
DUMP_LINE_HEIGHT = 1.4


def preview_text(diagram: UnknownDiagram) -> str:
    return json.dumps(dict(diagram.raw), indent=2, ensure_ascii=False, default=str)


def render_preview(diagram: UnknownDiagram, container: Element, palette: Palette | None = None, width: float = 800) -> Box:
    require(diagram, UnknownDiagram)
    palette = palette or Palette()
    dump = Text(
        x=PADDING,
        y=PADDING + 34,
        text=preview_text(diagram),
        size=DUMP_SIZE,
        color=palette.text,
        baseline="hanging",
        line_height=DUMP_LINE_HEIGHT,
        classes=["pre"],
    )
    container.clear()
    box = container.append(
        Box(
            width=width,
            height=dump.y + dump.block_height() + PADDING,
            background=palette.secondary,
            radius=8,
            classes=["default-render"],
        )
    )
    box.append(Text(x=PADDING, y=PADDING, text=PREVIEW_HEADING, size=18, weight="bold", color=palette.heading,
                    baseline="hanging"))
    box.append(dump)
    return box
