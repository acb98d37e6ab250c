"""
Hierarchy renderer: a titled box holding one vector drawing of level-coloured nodes
joined by S-curve connectors. Nodes fade in level by level.
"""
from __future__ import annotations

from ..config import Palette
from ..diagram.schema import HierarchyDiagram, HierarchyNode
from ..layout.geometry import LayoutResult
from ..layout.hierarchy import BOTTOM_MARGIN
from ..scene.elements import Animation, Circle, Element, Group, Path, Rect, Svg, Text
from .base import require, root_box, title_text

CONTAINER_CLASS = "hierarchy-container"
ARROW_MARKER = "hierarchy-arrow"
PADDING = 20
TITLE_BLOCK = 54
LABEL_WRAP = 8


def level_color(level: int, palette: Palette, node_color: str | None = None) -> str:
    colors = (node_color or palette.hierarchy_levels[0],) + tuple(palette.hierarchy_levels[1:])
    return colors[level % len(colors)]


def split_label(label: str) -> str:
    """Labels longer than eight characters break onto a second line after the eighth."""
    if len(label) <= LABEL_WRAP:
        return label
    return label[:LABEL_WRAP] + "\n" + label[LABEL_WRAP:]


def _node(node: HierarchyNode, layout: LayoutResult, color: str) -> Group:
    p = layout[node.id]
    g = Group(x=p.x, y=p.y, classes=["hierarchy-node", f"level-{node.level}"], attrs={"data-id": node.id})
    g.transient["animation"] = Animation("hierarchyFadeIn", 0.6, delay=node.level * 0.2)
    g.append(Rect(width=p.width, height=p.height, rx=8, fill=color, stroke="#ffffff", stroke_width=2))
    g.append(
        Text(
            x=p.width / 2,
            y=p.height / 2,
            text=split_label(node.label),
            size=14,
            weight="bold",
            color="#ffffff",
            anchor="middle",
            baseline="middle",
        )
    )
    badge_x, badge_y = p.width - 15, 15
    g.append(Circle(x=badge_x, y=badge_y, r=12, fill="#ffffff", stroke=color, stroke_width=2))
    g.append(
        Text(
            x=badge_x,
            y=badge_y,
            text=f"L{node.level}",
            size=10,
            weight="bold",
            color=color,
            anchor="middle",
            baseline="middle",
        )
    )
    return g


def render_hierarchy(
    diagram: HierarchyDiagram, layout: LayoutResult, container: Element, palette: Palette | None = None
) -> Element:
    require(diagram, HierarchyDiagram)
    palette = palette or Palette()
    line = diagram.style.line or palette.line
    drawing_height = layout.height + BOTTOM_MARGIN
    root = root_box(
        container,
        CONTAINER_CLASS,
        layout.width + 2 * PADDING,
        TITLE_BLOCK + drawing_height + 2 * PADDING,
    )
    root.append(title_text(diagram.title, root.width / 2, PADDING, palette.heading))

    svg = root.append(
        Svg(
            x=PADDING,
            y=PADDING + TITLE_BLOCK,
            width=layout.width,
            height=drawing_height,
            view_box=(0, 0, layout.width, drawing_height),
            markers={ARROW_MARKER: line},
        )
    )
    for edge in layout.edges:
        start, c1, c2, end = edge.points
        svg.append(
            Path(
                segments=(("M", *start), ("C", *c1, *c2, *end)),
                stroke=line,
                stroke_width=2,
                marker_end=ARROW_MARKER,
            )
        )
    for node in diagram.nodes:
        svg.append(_node(node, layout, level_color(node.level, palette, diagram.style.node)))
    return root
