"""
Serialize an Svg element (and its shapes/text) to SVG markup.
"""
from __future__ import annotations

import html

from .elements import (
    Circle,
    Element,
    Ellipse,
    Group,
    Line,
    Path,
    Polygon,
    Rect,
    Shape,
    Svg,
    Text,
    fmt_number,
)

SVG_NS = "http://www.w3.org/2000/svg"

_BASELINES = {"middle": "middle", "hanging": "hanging"}


def _esc(s: str) -> str:
    return html.escape(str(s), quote=True)


def _paint_attrs(shape: Shape) -> str:
    parts = [f'fill="{_esc(shape.fill or "none")}"']
    if shape.fill_opacity != 1.0:
        parts.append(f'fill-opacity="{fmt_number(shape.fill_opacity)}"')
    if shape.stroke:
        parts.append(f'stroke="{_esc(shape.stroke)}" stroke-width="{fmt_number(shape.stroke_width)}"')
    if shape.opacity != 1.0:
        parts.append(f'opacity="{fmt_number(shape.opacity)}"')
    return " ".join(parts)


def _marker_attr(marker: str | None) -> str:
    return f' marker-end="url(#{_esc(marker)})"' if marker else ""


def _class_attr(el: Element) -> str:
    return f' class="{_esc(" ".join(el.classes))}"' if el.classes else ""


def _render_text(t: Text) -> str:
    anchor = f' text-anchor="{t.anchor}"' if t.anchor != "start" else ""
    baseline = _BASELINES.get(t.baseline)
    baseline_attr = f' dominant-baseline="{baseline}"' if baseline else ""
    head = (
        f'<text x="{fmt_number(t.x)}" y="{fmt_number(t.y)}"{anchor}{baseline_attr} '
        f'font-family="Arial, sans-serif" font-size="{fmt_number(t.size)}" '
        f'font-weight="{t.weight}" fill="{_esc(t.color)}"{_class_attr(t)}>'
    )
    lines = t.lines
    if len(lines) == 1:
        return f"{head}{_esc(lines[0])}</text>"
    # first line shifted up so the block stays centred on y
    first_dy = -(len(lines) - 1) * t.line_height / 2 if t.baseline == "middle" else 0.0
    spans = []
    for i, line in enumerate(lines):
        dy = first_dy if i == 0 else t.line_height
        spans.append(f'<tspan x="{fmt_number(t.x)}" dy="{fmt_number(dy)}em">{_esc(line)}</tspan>')
    return head + "".join(spans) + "</text>"


def _render_node(el: Element) -> str:
    if isinstance(el, Rect):
        rx = f' rx="{fmt_number(el.rx)}"' if el.rx else ""
        return (
            f'<rect x="{fmt_number(el.x)}" y="{fmt_number(el.y)}" width="{fmt_number(el.width)}" '
            f'height="{fmt_number(el.height)}"{rx} {_paint_attrs(el)}{_class_attr(el)}/>'
        )
    if isinstance(el, Circle):
        return f'<circle cx="{fmt_number(el.x)}" cy="{fmt_number(el.y)}" r="{fmt_number(el.r)}" {_paint_attrs(el)}{_class_attr(el)}/>'
    if isinstance(el, Ellipse):
        return (
            f'<ellipse cx="{fmt_number(el.x)}" cy="{fmt_number(el.y)}" rx="{fmt_number(el.rx)}" ry="{fmt_number(el.ry)}" '
            f'{_paint_attrs(el)}{_class_attr(el)}/>'
        )
    if isinstance(el, Line):
        return (
            f'<line x1="{fmt_number(el.x)}" y1="{fmt_number(el.y)}" x2="{fmt_number(el.x2)}" y2="{fmt_number(el.y2)}" '
            f'{_paint_attrs(el)}{_marker_attr(el.marker_end)}{_class_attr(el)}/>'
        )
    if isinstance(el, Polygon):
        pts = " ".join(f"{fmt_number(el.x + px)},{fmt_number(el.y + py)}" for px, py in el.points)
        return f'<polygon points="{pts}" {_paint_attrs(el)}{_class_attr(el)}/>'
    if isinstance(el, Path):
        return f'<path d="{el.d}" {_paint_attrs(el)}{_marker_attr(el.marker_end)}{_class_attr(el)}/>'
    if isinstance(el, Text):
        return _render_text(el)
    if isinstance(el, Svg):
        return to_svg_markup(el, standalone=False)
    if isinstance(el, Group):
        transform = f' transform="translate({fmt_number(el.x)} {fmt_number(el.y)})"' if (el.x or el.y) else ""
        inner = "".join(_render_node(c) for c in el.children)
        return f"<g{transform}{_class_attr(el)}>{inner}</g>"
    raise TypeError(f"{type(el).__name__} cannot be placed inside an SVG drawing")


def _render_defs(markers: dict[str, str]) -> str:
    if not markers:
        return ""
    defs = "".join(
        f'<marker id="{_esc(mid)}" markerWidth="10" markerHeight="7" refX="9" refY="3.5" orient="auto">'
        f'<polygon points="0 0, 10 3.5, 0 7" fill="{_esc(color)}"/></marker>'
        for mid, color in markers.items()
    )
    return f"<defs>{defs}</defs>"


def to_svg_markup(svg: Svg, *, standalone: bool = True) -> str:
    """SVG text for `svg`; standalone adds the XML declaration and ignores the element's placement."""
    view_box = svg.view_box or (0, 0, svg.width, svg.height)
    vb = " ".join(fmt_number(v) for v in view_box)
    placement = "" if standalone else f' x="{fmt_number(svg.x)}" y="{fmt_number(svg.y)}"'
    style = f' style="background-color: {_esc(svg.background)}"' if svg.background else ""
    body = "".join(_render_node(c) for c in svg.children)
    markup = (
        f'<svg xmlns="{SVG_NS}"{placement} width="{fmt_number(svg.width)}" height="{fmt_number(svg.height)}" '
        f'viewBox="{vb}"{style}{_class_attr(svg)}>{_render_defs(svg.markers)}{body}</svg>'
    )
    if standalone:
        return '<?xml version="1.0" encoding="UTF-8"?>\n' + markup + "\n"
    return markup
