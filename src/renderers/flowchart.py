"""Flowchart renderer: kind-specific shapes and arrowed connectors in one vector drawing."""
from __future__ import annotations

from ..config import Palette
from ..diagram.schema import FlowchartDiagram, FlowNode
from ..layout.flow import shape_for
from ..layout.geometry import LayoutResult
from ..scene.elements import Element, Ellipse, Group, Line, Polygon, Rect, Shape, Svg, Text
from .base import Colors, require, resolve_colors

ARROW_MARKER = "arrowhead"


def _shape(node: FlowNode, layout: LayoutResult, fill: str) -> Shape:
    p = layout[node.id]
    shape = shape_for(node.kind)
    if shape == "ellipse":
        el: Shape = Ellipse(x=p.cx, y=p.cy, rx=p.width / 2, ry=p.height / 2)
    elif shape == "diamond":
        el = Polygon(
            points=(
                (p.x, p.cy),
                (p.cx, p.y),
                (p.right, p.cy),
                (p.cx, p.bottom),
            )
        )
    else:
        el = Rect(x=p.x, y=p.y, width=p.width, height=p.height, rx=8)
    el.fill = fill
    el.stroke = "#ffffff"
    el.stroke_width = 2
    return el


def _node(node: FlowNode, layout: LayoutResult, colors: Colors) -> Group:
    p = layout[node.id]
    g = Group(classes=["flow-node", node.kind], attrs={"data-id": node.id})
    g.append(_shape(node, layout, colors.node_colors.get(node.kind, colors.primary)))
    g.append(Text(x=p.cx, y=p.cy + 5, text=node.label, size=14, weight="bold", color="#ffffff", anchor="middle"))
    return g


def render_flowchart(
    diagram: FlowchartDiagram, layout: LayoutResult, container: Element, palette: Palette | None = None
) -> Svg:
    require(diagram, FlowchartDiagram)
    palette = palette or Palette()
    colors = resolve_colors(diagram.style, palette)
    container.clear()
    svg = container.append(
        Svg(
            width=layout.width,
            height=layout.height,
            view_box=(0, 0, layout.width, layout.height),
            background=diagram.style.background or palette.export_background,
            markers={ARROW_MARKER: colors.line},
            classes=["flowchart"],
        )
    )
    for edge in layout.edges:
        (x1, y1), (x2, y2) = edge.points
        svg.append(Line(x=x1, y=y1, x2=x2, y2=y2, stroke=colors.line, stroke_width=2, marker_end=ARROW_MARKER))
        if edge.label and edge.label_at:
            lx, ly = edge.label_at
            svg.append(Text(x=lx, y=ly, text=edge.label, size=12, color=colors.text, anchor="middle"))
    for node in diagram.nodes:
        svg.append(_node(node, layout, colors))
    return svg
