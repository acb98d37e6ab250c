"""
Flowchart layout: nodes sit at author-supplied centres; each node kind gets a shape
and size, and connectors join the facing edge midpoints of the two shapes.
"""
from __future__ import annotations

from ..diagram.errors import DescriptionError
from ..diagram.schema import FlowchartDiagram
from .geometry import EdgeRoute, LayoutResult, Placement

CANVAS_WIDTH = 800
CANVAS_HEIGHT = 700
MARGIN = 20

SHAPES = {
    "start": "ellipse",
    "end": "ellipse",
    "decision": "diamond",
    "process": "rounded-rect",
}

SHAPE_SIZES = {
    "ellipse": (120, 60),
    "diamond": (100, 50),
    "rounded-rect": (120, 50),
}


def shape_for(kind: str) -> str:
    return SHAPES.get(kind, "rounded-rect")


def _facing_midpoints(src: Placement, dst: Placement) -> tuple[tuple[float, float], tuple[float, float]]:
    """Bottom->top when the target is lower, top->bottom when higher, else side to side."""
    if dst.y >= src.bottom:
        return src.bottom_mid, dst.top_mid
    if dst.bottom <= src.y:
        return src.top_mid, dst.bottom_mid
    if dst.cx >= src.cx:
        return src.right_mid, dst.left_mid
    return src.left_mid, dst.right_mid


def layout_flowchart(diagram: FlowchartDiagram) -> LayoutResult:
    placements: dict[str, Placement] = {}
    for i, node in enumerate(diagram.nodes):
        if node.id in placements:
            raise DescriptionError(f"nodes[{i}].id", f"duplicate node id {node.id!r}")
        w, h = SHAPE_SIZES[shape_for(node.kind)]
        placements[node.id] = Placement.centered(node.x, node.y, w, h)

    edges = []
    for i, conn in enumerate(diagram.connections):
        for key, node_id in (("from", conn.source), ("to", conn.target)):
            if node_id not in placements:
                raise DescriptionError(f"connections[{i}].{key}", f"unknown node id {node_id!r}")
        src, dst = placements[conn.source], placements[conn.target]
        start, end = _facing_midpoints(src, dst)
        label_at = ((src.cx + dst.cx) / 2, (src.cy + dst.cy) / 2) if conn.label else None
        edges.append(EdgeRoute(conn.source, conn.target, (start, end), label=conn.label, label_at=label_at))

    width = max([CANVAS_WIDTH] + [p.right + MARGIN for p in placements.values()])
    height = max([CANVAS_HEIGHT] + [p.bottom + MARGIN for p in placements.values()])
    return LayoutResult(width=width, height=height, placements=placements, edges=edges)
