"""Mindmap renderer: one vector drawing with straight centre-to-centre links and circular nodes."""
from __future__ import annotations

from ..config import Palette
from ..diagram.schema import MindmapDiagram, MindmapNode
from ..layout.geometry import LayoutResult
from ..scene.elements import Circle, Element, Group, Line, Svg, Text
from .base import Colors, require, resolve_colors


def _node(node: MindmapNode, layout: LayoutResult, colors: Colors, is_center: bool) -> Group:
    p = layout[node.id]
    g = Group(classes=["mindmap-node", "center" if is_center else f"level-{node.level}"], attrs={"data-id": node.id})
    g.append(Circle(x=p.cx, y=p.cy, r=p.width / 2, fill=colors.node, stroke="#ffffff", stroke_width=2))
    g.append(
        Text(
            x=p.cx,
            y=p.cy + 5,
            text=node.label,
            size=14 if is_center else 12,
            weight="bold",
            color="#ffffff",
            anchor="middle",
        )
    )
    return g


def render_mindmap(diagram: MindmapDiagram, layout: LayoutResult, container: Element, palette: Palette | None = None) -> Svg:
    require(diagram, MindmapDiagram)
    colors = resolve_colors(diagram.style, palette or Palette())
    container.clear()
    svg = container.append(
        Svg(
            width=layout.width,
            height=layout.height,
            view_box=(0, 0, layout.width, layout.height),
            background=colors.background,
            classes=["mindmap"],
        )
    )
    for edge in layout.edges:
        (x1, y1), (x2, y2) = edge.points
        svg.append(Line(x=x1, y=y1, x2=x2, y2=y2, stroke=colors.line, stroke_width=2))
    svg.append(_node(diagram.center, layout, colors, True))
    for node in diagram.nodes:
        svg.append(_node(node, layout, colors, False))
    return svg
