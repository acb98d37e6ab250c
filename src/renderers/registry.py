"""
Dispatch table from diagram variant to (layout, renderer). Box layouts also take the
canvas width; UnknownDiagram has no layout and goes to the raw data preview.
"""
from __future__ import annotations

from typing import Any, Callable, NamedTuple

from ..config import Palette
from ..diagram.schema import (
    ComparisonDiagram,
    Diagram,
    FlowchartDiagram,
    HierarchyDiagram,
    InfographicDiagram,
    MindmapDiagram,
    TimelineDiagram,
    UnknownDiagram,
)
from ..layout import (
    LayoutResult,
    layout_comparison,
    layout_flowchart,
    layout_hierarchy,
    layout_infographic,
    layout_mindmap,
    layout_timeline,
)
from ..scene.elements import Element
from .comparison import render_comparison
from .flowchart import render_flowchart
from .hierarchy import render_hierarchy
from .infographic import render_infographic
from .mindmap import render_mindmap
from .preview import render_preview
from .timeline import render_timeline


class RenderPlan(NamedTuple):
    layout: Callable[..., LayoutResult]
    render: Callable[..., Any]
    sized: bool = False


RENDERERS: dict[type, RenderPlan] = {
    MindmapDiagram: RenderPlan(layout_mindmap, render_mindmap),
    FlowchartDiagram: RenderPlan(layout_flowchart, render_flowchart),
    TimelineDiagram: RenderPlan(layout_timeline, render_timeline, sized=True),
    ComparisonDiagram: RenderPlan(layout_comparison, render_comparison, sized=True),
    HierarchyDiagram: RenderPlan(layout_hierarchy, render_hierarchy),
    InfographicDiagram: RenderPlan(layout_infographic, render_infographic, sized=True),
}


def compute_layout(diagram: Diagram, width: float = 800) -> LayoutResult | None:
    plan = RENDERERS.get(type(diagram))
    if plan is None:
        return None
    return plan.layout(diagram, width) if plan.sized else plan.layout(diagram)


def render_diagram(
    diagram: Diagram,
    container: Element,
    palette: Palette | None = None,
    width: float = 800,
) -> LayoutResult | None:
    """Lay out and render `diagram` into `container`; returns the layout used (None for previews)."""
    plan = RENDERERS.get(type(diagram))
    if plan is None:
        if not isinstance(diagram, UnknownDiagram):
            raise TypeError(f"no renderer for {type(diagram).__name__}")
        render_preview(diagram, container, palette, width)
        return None
    layout = compute_layout(diagram, width)
    plan.render(diagram, layout, container, palette)
    return layout
