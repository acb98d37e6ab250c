"""
Write a rendered container to a standalone HTML page: boxes and text as absolutely
positioned divs, vector drawings inline.
"""
from __future__ import annotations

import html
from pathlib import Path

from .elements import Box, Element, Svg, Text, fmt_number
from .svg import to_svg_markup

_TEXT_SHIFT = {"start": "0", "middle": "-50%", "end": "-100%"}
_BASELINE_SHIFT = {"alphabetic": "-80%", "middle": "-50%", "hanging": "0"}


def _esc(s: str) -> str:
    return html.escape(str(s))


def _px(v: float) -> str:
    return f"{fmt_number(v)}px"


def _render_box(box: Box, left: float, top: float) -> str:
    style = [
        f"left:{_px(left)}",
        f"top:{_px(top)}",
        f"width:{_px(box.width)}",
        f"height:{_px(box.height)}",
    ]
    if box.background:
        style.append(f"background:{box.background}")
    if box.border_width and box.border_color:
        style.append(f"border:{_px(box.border_width)} solid {box.border_color}")
    if box.radius:
        style.append(f"border-radius:{_px(box.radius)}")
    cls = " ".join(["box", *box.classes])
    return f'<div class="{_esc(cls)}" style="{";".join(style)}"></div>'


def _render_text(t: Text, left: float, top: float) -> str:
    shift = f"translate({_TEXT_SHIFT.get(t.anchor, '0')}, {_BASELINE_SHIFT.get(t.baseline, '0')})"
    style = (
        f"left:{_px(left)};top:{_px(top)};font-size:{_px(t.size)};font-weight:{t.weight};"
        f"color:{t.color};line-height:{t.line_height};transform:{shift};text-align:{_align(t.anchor)}"
    )
    body = "<br>".join(_esc(line) for line in t.lines)
    return f'<div class="text" style="{style}">{body}</div>'


def _align(anchor: str) -> str:
    return {"middle": "center", "end": "right"}.get(anchor, "left")


def _collect(el: Element, ox: float, oy: float, out: list[str]) -> None:
    for child in el.children:
        left, top = ox + child.x, oy + child.y
        if isinstance(child, Svg):
            svg = to_svg_markup(child, standalone=False)
            out.append(f'<div class="vector" style="left:{_px(left)};top:{_px(top)}">{svg}</div>')
            continue
        if isinstance(child, Box):
            out.append(_render_box(child, left, top))
        elif isinstance(child, Text):
            out.append(_render_text(child, left, top))
        _collect(child, left, top, out)


def render_scene_html(container: Element, out_path: Path | str, *, title: str = "Visualization") -> Path:
    """Write the scene below `container` as an HTML page; returns the path."""
    out_path = Path(out_path)
    parts: list[str] = []
    _collect(container, 0.0, 0.0, parts)
    width, height = container.extent()

    html_content = f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8"/>
<meta name="viewport" content="width=device-width, initial-scale=1"/>
<title>{_esc(title)}</title>
<style>
  :root {{ font-family: Arial, sans-serif; color: #222; }}
  .scene {{ position: relative; margin: 0 auto; width: {_px(width)}; height: {_px(height)}; }}
  .scene > div {{ position: absolute; box-sizing: border-box; }}
  .text {{ white-space: nowrap; }}
  .vector svg {{ display: block; }}
</style>
</head>
<body>
<div class="scene">
{chr(10).join(parts)}
</div>
</body>
</html>
"""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(html_content, encoding="utf-8")
    return out_path
