"""
Mindmap layout: the centre node and its children keep their author-supplied
coordinates; connectors run centre to centre.
"""
from __future__ import annotations

from ..diagram.errors import DescriptionError
from ..diagram.schema import MindmapDiagram, MindmapNode
from .geometry import EdgeRoute, LayoutResult, Placement

CENTER_RADIUS = 50
NODE_RADIUS = 30
CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600
MARGIN = 20


def layout_mindmap(diagram: MindmapDiagram) -> LayoutResult:
    placements: dict[str, Placement] = {}

    def place(node: MindmapNode, radius: float, path: str) -> None:
        if node.id in placements:
            raise DescriptionError(f"{path}.id", f"duplicate node id {node.id!r}")
        placements[node.id] = Placement.centered(node.x, node.y, radius * 2, radius * 2)

    place(diagram.center, CENTER_RADIUS, "centerNode")
    for i, node in enumerate(diagram.nodes):
        place(node, NODE_RADIUS, f"nodes[{i}]")

    edges = []
    for i, conn in enumerate(diagram.connections):
        for key, node_id in (("from", conn.source), ("to", conn.target)):
            if node_id not in placements:
                raise DescriptionError(f"connections[{i}].{key}", f"unknown node id {node_id!r}")
        src, dst = placements[conn.source], placements[conn.target]
        edges.append(EdgeRoute(conn.source, conn.target, ((src.cx, src.cy), (dst.cx, dst.cy))))

    width = max([CANVAS_WIDTH] + [p.right + MARGIN for p in placements.values()])
    height = max([CANVAS_HEIGHT] + [p.bottom + MARGIN for p in placements.values()])
    return LayoutResult(width=width, height=height, placements=placements, edges=edges)
