"""Renderers: one per diagram type, emitting scene elements into a container."""
from .base import Colors, resolve_colors
from .mindmap import render_mindmap
from .flowchart import render_flowchart
from .timeline import render_timeline
from .comparison import render_comparison, overall_score, radar_drawing
from .hierarchy import render_hierarchy, split_label, level_color
from .infographic import render_infographic
from .preview import render_preview, preview_text
from .registry import RENDERERS, RenderPlan, compute_layout, render_diagram

__all__ = [
    "Colors",
    "resolve_colors",
    "render_mindmap",
    "render_flowchart",
    "render_timeline",
    "render_comparison",
    "overall_score",
    "radar_drawing",
    "render_hierarchy",
    "split_label",
    "level_color",
    "render_infographic",
    "render_preview",
    "preview_text",
    "RENDERERS",
    "RenderPlan",
    "compute_layout",
    "render_diagram",
]
