"""
Comparison renderer: one card per item (header, scored feature rows, overall score) in a
grid, and for exactly two items a radar chart drawn as an inline vector drawing.
"""
from __future__ import annotations

from ..config import Palette
from ..diagram.schema import ComparisonDiagram, ComparisonItem, Feature
from ..layout.comparison import (
    CARD_PADDING,
    FEATURE_GAP,
    FEATURE_ROW,
    HEADER_HEIGHT,
    RADAR_HEADING,
    RADAR_SECTION_PADDING,
    RADAR_VIEW,
    ComparisonLayout,
    RadarChart,
)
from ..layout.geometry import Placement
from ..scene.elements import Box, Circle, Element, Line, Polygon, Svg, Text
from .base import animate_entry, require, root_box, title_text

CONTAINER_CLASS = "comparison-container"
SCORE_BAR = 60
RADAR_TITLE = "Feature radar"


def item_colors(diagram: ComparisonDiagram, palette: Palette) -> tuple[str, str]:
    first, second = palette.comparison[0], palette.comparison[1]
    return diagram.style.primary or first, diagram.style.secondary or second


def overall_score(item: ComparisonItem) -> float:
    if not item.features:
        return 0.0
    return sum(f.score for f in item.features) / len(item.features)


def _feature_row(feature: Feature, y: float, width: float, color: str, palette: Palette) -> Box:
    row = Box(
        x=CARD_PADDING,
        y=y,
        width=width,
        height=FEATURE_ROW,
        background=palette.secondary,
        radius=8,
        classes=["feature-row"],
    )
    row.append(Box(width=4, height=FEATURE_ROW, background=color))
    mid = FEATURE_ROW / 2
    row.append(Text(x=16, y=mid, text=feature.name, size=14, weight="bold", color=palette.text, baseline="middle"))
    row.append(Text(x=width * 0.38, y=mid, text=feature.value, size=13, color=palette.muted, baseline="middle"))

    bar_x = width - 12 - 40 - SCORE_BAR
    track = row.append(
        Box(x=bar_x, y=mid - 4, width=SCORE_BAR, height=8, background=palette.track, radius=4, classes=["score-bar"])
    )
    fill = track.append(Box(width=SCORE_BAR * feature.score / 10, height=8, background=color, radius=4))
    fill.transient["transition"] = "width 0.8s ease"
    row.append(
        Text(x=width - 12, y=mid, text=f"{feature.score:g}/10", size=12, weight="bold", color=color,
             anchor="end", baseline="middle")
    )
    return row


def _card(item: ComparisonItem, index: int, p: Placement, color: str, palette: Palette) -> Box:
    card = Box(
        x=p.x,
        y=p.y,
        width=p.width,
        height=p.height,
        background="#ffffff",
        border_color=color,
        border_width=3,
        radius=12,
        classes=["comparison-item"],
        attrs={"data-id": item.id},
    )
    animate_entry(card, "slideInUp", index, 0.3)
    header = card.append(Box(width=p.width, height=HEADER_HEIGHT, background=color, radius=9))
    header.append(
        Text(x=p.width / 2, y=HEADER_HEIGHT / 2, text=item.title, size=20, weight="bold", color="#ffffff",
             anchor="middle", baseline="middle")
    )

    inner = p.width - 2 * CARD_PADDING
    y = HEADER_HEIGHT + CARD_PADDING
    for feature in item.features:
        card.append(_feature_row(feature, y, inner, color, palette))
        y += FEATURE_ROW + FEATURE_GAP

    overall = card.append(
        Box(x=CARD_PADDING, y=y - FEATURE_GAP + 20 if item.features else y, width=inner, height=60,
            background=color, radius=8, classes=["overall-score"])
    )
    overall.append(Text(x=inner / 2, y=10, text="Overall", size=14, weight="bold", color="#ffffff",
                        anchor="middle", baseline="hanging"))
    overall.append(Text(x=inner / 2, y=28, text=f"{overall_score(item):.1f}/10", size=24, weight="bold",
                        color="#ffffff", anchor="middle", baseline="hanging"))
    return card


def radar_drawing(radar: RadarChart, items: tuple[ComparisonItem, ...], colors: tuple[str, str], palette: Palette) -> Svg:
    """Grid rings, axes with labels, then one translucent polygon and point markers per item."""
    view_w, view_h = RADAR_VIEW
    svg = Svg(width=view_w, height=view_h, view_box=(0, 0, view_w, view_h), classes=["radar-chart"])
    cx, cy = radar.center
    for ring in radar.rings:
        svg.append(Circle(x=cx, y=cy, r=ring, stroke=palette.grid, stroke_width=1))
    for k, name in enumerate(radar.axes):
        ex, ey = radar.axis_end(k)
        svg.append(Line(x=cx, y=cy, x2=ex, y2=ey, stroke=palette.grid, stroke_width=1))
        lx, ly = radar.label_points[k]
        svg.append(Text(x=lx, y=ly, text=name, size=12, color=palette.text, anchor="middle", baseline="middle"))
    for index, item in enumerate(items):
        points = radar.polygons.get(item.id)
        if not points:
            continue
        color = colors[index % len(colors)]
        svg.append(Polygon(points=tuple(points), fill=color, fill_opacity=0.3, stroke=color, stroke_width=2))
        for px, py in points:
            svg.append(Circle(x=px, y=py, r=4, fill=color))
    return svg


def _radar_section(
    layout: ComparisonLayout, items: tuple[ComparisonItem, ...], colors: tuple[str, str], palette: Palette
) -> Box:
    p = layout["radar"]
    section = Box(x=p.x, y=p.y, width=p.width, height=p.height, background=palette.secondary, radius=12,
                  classes=["radar-section"])
    section.append(title_text(RADAR_TITLE, p.width / 2, RADAR_SECTION_PADDING, palette.heading, size=18))
    svg = radar_drawing(layout.radar, items, colors, palette)
    svg.x = (p.width - svg.width) / 2
    svg.y = RADAR_SECTION_PADDING + RADAR_HEADING
    section.append(svg)

    legend_y = svg.y + svg.height + 10
    entries = [(item.title, colors[i % len(colors)]) for i, item in enumerate(items)]
    widths = [20 + 8 + Text(text=title, size=14).block_width() for title, _ in entries]
    x = (p.width - (sum(widths) + 30 * (len(widths) - 1))) / 2
    for (title, color), w in zip(entries, widths):
        section.append(Box(x=x, y=legend_y, width=20, height=20, background=color, radius=3))
        section.append(Text(x=x + 28, y=legend_y + 10, text=title, size=14, weight="bold", color=palette.text,
                            baseline="middle"))
        x += w + 30
    return section


def render_comparison(
    diagram: ComparisonDiagram, layout: ComparisonLayout, container: Element, palette: Palette | None = None
) -> Element:
    require(diagram, ComparisonDiagram)
    palette = palette or Palette()
    colors = item_colors(diagram, palette)

    root = root_box(container, CONTAINER_CLASS, layout.width, layout.height)
    title = layout["title"]
    root.append(title_text(diagram.title, title.cx, title.y, palette.heading))
    for index, item in enumerate(diagram.items):
        root.append(_card(item, index, layout[item.id], colors[index % len(colors)], palette))
    if layout.radar is not None:
        root.append(_radar_section(layout, diagram.items, colors, palette))
    return root
