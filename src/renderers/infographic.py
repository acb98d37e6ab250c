"""Infographic renderer: stacked header, stats, chart and text sections inside one box."""
from __future__ import annotations

from ..config import Palette
from ..diagram.schema import (
    ChartSection,
    HeaderSection,
    InfographicDiagram,
    StatsSection,
    TextSection,
)
from ..layout.geometry import Placement
from ..layout.infographic import TEXT_LINE_HEIGHT, TEXT_SIZE, InfographicLayout
from ..scene.elements import Box, Element, Text
from .base import Colors, require, resolve_colors, root_box, title_text

CONTAINER_CLASS = "infographic-container"
BAR_HEIGHT = 24


def percent(value: float) -> float:
    return min(100.0, max(0.0, value))


def _box(p: Placement, origin: Placement | None = None, **style) -> Box:
    q = p.relative_to(origin) if origin is not None else p
    return Box(x=q.x, y=q.y, width=q.width, height=q.height, **style)


def _header(section: HeaderSection, p: Placement, colors: Colors) -> Box:
    box = _box(p, background=section.background or colors.primary, classes=["section", "header"])
    box.append(
        Text(x=p.width / 2, y=p.height / 2, text=section.content, size=24, weight="bold",
             color=section.color or "#ffffff", anchor="middle", baseline="middle")
    )
    return box


def _stats(section: StatsSection, key: str, layout: InfographicLayout, colors: Colors, palette: Palette) -> Box:
    p = layout[key]
    box = _box(p, classes=["section", "stats"])
    for k, item in enumerate(section.items):
        cell = layout[f"{key}.items[{k}]"]
        stat = box.append(_box(cell, p, background="#ffffff", radius=8, classes=["stat"]))
        value = f"{item.value} {item.unit}".strip()
        stat.append(Text(x=cell.width / 2, y=20, text=value, size=32, weight="bold", color=colors.primary,
                         anchor="middle", baseline="hanging"))
        stat.append(Text(x=cell.width / 2, y=68, text=item.label, size=14, color=palette.muted,
                         anchor="middle", baseline="hanging"))
    return box


def _chart(section: ChartSection, key: str, layout: InfographicLayout, colors: Colors, palette: Palette) -> Box:
    p = layout[key]
    box = _box(p, classes=["section", "chart", section.chart_type])
    for k, datum in enumerate(section.data):
        cell = layout[f"{key}.data[{k}]"]
        row = box.append(_box(cell, p, classes=["chart-row"]))
        row.append(Text(x=0, y=0, text=datum.label, size=14, weight="bold", color=colors.text, baseline="hanging"))
        row.append(Text(x=cell.width, y=0, text=f"{datum.value:g}%", size=14, color=colors.text,
                        anchor="end", baseline="hanging"))
        track = row.append(Box(y=cell.height - BAR_HEIGHT, width=cell.width, height=BAR_HEIGHT,
                               background=palette.track, radius=BAR_HEIGHT / 2))
        fill = track.append(Box(width=cell.width * percent(datum.value) / 100, height=BAR_HEIGHT,
                                background=colors.primary, radius=BAR_HEIGHT / 2))
        fill.transient["transition"] = "width 0.8s ease"
    return box


def _text(section: TextSection, key: str, layout: InfographicLayout, colors: Colors) -> Box:
    p = layout[key]
    box = _box(p, background="#ffffff", radius=8, classes=["section", "text"])
    box.append(Text(x=20, y=20, text="\n".join(layout.text_lines[key]), size=TEXT_SIZE, color=colors.text,
                    baseline="hanging", line_height=TEXT_LINE_HEIGHT))
    return box


def render_infographic(
    diagram: InfographicDiagram, layout: InfographicLayout, container: Element, palette: Palette | None = None
) -> Element:
    require(diagram, InfographicDiagram)
    palette = palette or Palette()
    colors = resolve_colors(diagram.style, palette)

    root = root_box(container, CONTAINER_CLASS, layout.width, layout.height, background=colors.secondary)
    if diagram.title:
        title = layout["title"]
        root.append(title_text(diagram.title, title.cx, title.y, palette.heading))
    for i, section in enumerate(diagram.sections):
        key = f"sections[{i}]"
        if isinstance(section, HeaderSection):
            root.append(_header(section, layout[key], colors))
        elif isinstance(section, StatsSection):
            root.append(_stats(section, key, layout, colors, palette))
        elif isinstance(section, ChartSection):
            root.append(_chart(section, key, layout, colors, palette))
        elif isinstance(section, TextSection):
            root.append(_text(section, key, layout, colors))
    return root
