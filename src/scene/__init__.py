"""Scene: element tree primitives, in-memory document, SVG and HTML serialization."""
from .elements import (
    Animation,
    Element,
    Group,
    Shape,
    Rect,
    Circle,
    Ellipse,
    Line,
    Polygon,
    Path,
    Text,
    Svg,
    Box,
    Container,
    ScrollArea,
    composition,
    estimate_text_width,
)
from .document import DEFAULT_CONTAINER_ID, Document, build_page
from .svg import to_svg_markup
from .html_preview import render_scene_html

__all__ = [
    "Animation",
    "Element",
    "Group",
    "Shape",
    "Rect",
    "Circle",
    "Ellipse",
    "Line",
    "Polygon",
    "Path",
    "Text",
    "Svg",
    "Box",
    "Container",
    "ScrollArea",
    "composition",
    "estimate_text_width",
    "DEFAULT_CONTAINER_ID",
    "Document",
    "build_page",
    "to_svg_markup",
    "render_scene_html",
]
