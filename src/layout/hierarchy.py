"""
Hierarchy layout: nodes are grouped into rows by level, each row keeps input order and
is centred within the widest row; parent/child links become vertical S-curves from the
parent's bottom midpoint to the child's top midpoint.
"""
from __future__ import annotations

from ..diagram.errors import DescriptionError
from ..diagram.schema import HierarchyDiagram
from .geometry import EdgeRoute, LayoutResult, Placement

NODE_WIDTH = 160
NODE_HEIGHT = 80
LEVEL_HEIGHT = 120
NODE_SPACING = 40
TOP_MARGIN = 60
SIDE_MARGIN = 20
BOTTOM_MARGIN = 40


def row_width(count: int) -> float:
    return count * (NODE_WIDTH + NODE_SPACING) - NODE_SPACING


def s_curve(src: Placement, dst: Placement) -> tuple[tuple[float, float], ...]:
    """Cubic control points: start, (start x, mid y), (end x, mid y), end."""
    sx, sy = src.bottom_mid
    ex, ey = dst.top_mid
    mid_y = (sy + ey) / 2
    return (sx, sy), (sx, mid_y), (ex, mid_y), (ex, ey)


def _links(diagram: HierarchyDiagram, known: set[str]) -> list[tuple[str, str, str]]:
    """(source, target, field path) from explicit connections, then parent and children ids."""
    links: list[tuple[str, str, str]] = []
    for i, conn in enumerate(diagram.connections):
        links.append((conn.source, conn.target, f"connections[{i}]"))
    for i, node in enumerate(diagram.nodes):
        if node.parent is not None:
            links.append((node.parent, node.id, f"nodes[{i}].parent"))
        for k, child in enumerate(node.children):
            links.append((node.id, child, f"nodes[{i}].children[{k}]"))
    seen: set[tuple[str, str]] = set()
    out = []
    for source, target, path in links:
        for node_id in (source, target):
            if node_id not in known:
                raise DescriptionError(path, f"unknown node id {node_id!r}")
        if (source, target) in seen:
            continue
        seen.add((source, target))
        out.append((source, target, path))
    return out


def layout_hierarchy(diagram: HierarchyDiagram) -> LayoutResult:
    if not diagram.nodes:
        raise DescriptionError("nodes", "hierarchy needs at least one node")

    levels: dict[int, list[str]] = {}
    seen: set[str] = set()
    for i, node in enumerate(diagram.nodes):
        if node.level < 0:
            raise DescriptionError(f"nodes[{i}].level", "level must be >= 0")
        if node.id in seen:
            raise DescriptionError(f"nodes[{i}].id", f"duplicate node id {node.id!r}")
        seen.add(node.id)
        levels.setdefault(node.level, []).append(node.id)

    max_width = max(row_width(len(ids)) for ids in levels.values())
    placements: dict[str, Placement] = {}
    for level in sorted(levels):
        ids = levels[level]
        offset = SIDE_MARGIN + (max_width - row_width(len(ids))) / 2
        y = level * LEVEL_HEIGHT + TOP_MARGIN
        for index, node_id in enumerate(ids):
            cx = offset + NODE_WIDTH / 2 + index * (NODE_WIDTH + NODE_SPACING)
            placements[node_id] = Placement.centered(cx, y, NODE_WIDTH, NODE_HEIGHT)

    edges = [
        EdgeRoute(src, dst, s_curve(placements[src], placements[dst]), curve=True)
        for src, dst, _ in _links(diagram, set(placements))
    ]
    max_level = max(levels)
    return LayoutResult(
        width=max_width + 2 * SIDE_MARGIN,
        height=max_level * LEVEL_HEIGHT + NODE_HEIGHT + BOTTOM_MARGIN,
        placements=placements,
        edges=edges,
    )
