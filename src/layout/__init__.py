"""Layout: diagram description -> placements and connector routes (pure, deterministic)."""
from .geometry import Placement, EdgeRoute, LayoutResult, grid_columns, wrap_text
from .radial import layout_mindmap
from .flow import layout_flowchart, shape_for
from .hierarchy import layout_hierarchy, s_curve
from .timeline import TimelineLayout, layout_timeline, side_for
from .comparison import ComparisonLayout, RadarChart, axis_angle, compute_radar, layout_comparison
from .infographic import InfographicLayout, layout_infographic

__all__ = [
    "Placement",
    "EdgeRoute",
    "LayoutResult",
    "grid_columns",
    "wrap_text",
    "layout_mindmap",
    "layout_flowchart",
    "shape_for",
    "layout_hierarchy",
    "s_curve",
    "TimelineLayout",
    "layout_timeline",
    "side_for",
    "ComparisonLayout",
    "RadarChart",
    "axis_angle",
    "compute_radar",
    "layout_comparison",
    "InfographicLayout",
    "layout_infographic",
]
