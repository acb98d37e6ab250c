"""
Paint a scene subtree onto a Pillow RGBA surface at a linear scale.
Boxes become rounded rectangles, vector drawings are mapped through their view box,
Bezier paths are flattened to polylines, and arrowhead markers are drawn as small
triangles at line ends. With `elapsed` set, entry animations are evaluated at that
moment; without it every element is painted in its resting state.
"""
from __future__ import annotations

import io
import math
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping

from ..scene.elements import (
    Animation,
    Box,
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
)
from .loader import RasterBackend

FONT_CANDIDATES = [
    "/System/Library/Fonts/PingFang.ttc",
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    "/usr/share/fonts/truetype/noto/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
]
BOLD_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/noto/NotoSansCJK-Bold.ttc",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
]

# Arrowhead in marker units (stroke widths): tip at (1, 0) relative to the line end.
_ARROW = ((-9.0, -3.5), (1.0, 0.0), (-9.0, 3.5))
# Alphabetic baseline sits roughly this far below the top of the em box.
_ASCENT = 0.8
_CURVE_STEPS = 16


@dataclass(frozen=True)
class _Frame:
    """Scene-unit transform: a point (x, y) maps to (tx + x * sx, ty + y * sy)."""

    tx: float = 0.0
    ty: float = 0.0
    sx: float = 1.0
    sy: float = 1.0
    opacity: float = 1.0
    markers: Mapping[str, str] = field(default_factory=dict)

    def shifted(self, dx: float, dy: float) -> "_Frame":
        return replace(self, tx=self.tx + dx * self.sx, ty=self.ty + dy * self.sy)


def flatten_path(segments, steps: int = _CURVE_STEPS) -> list[list[tuple[float, float]]]:
    """Subpaths as point lists; cubic segments are sampled `steps` times."""
    subpaths: list[list[tuple[float, float]]] = []
    current: list[tuple[float, float]] = []
    for seg in segments:
        op = seg[0]
        if op == "M":
            if len(current) > 1:
                subpaths.append(current)
            current = [(seg[1], seg[2])]
        elif op == "L":
            current.append((seg[1], seg[2]))
        elif op == "C":
            x0, y0 = current[-1] if current else (seg[5], seg[6])
            x1, y1, x2, y2, x3, y3 = seg[1:7]
            for i in range(1, steps + 1):
                t = i / steps
                u = 1 - t
                current.append(
                    (
                        u ** 3 * x0 + 3 * u * u * t * x1 + 3 * u * t * t * x2 + t ** 3 * x3,
                        u ** 3 * y0 + 3 * u * u * t * y1 + 3 * u * t * t * y2 + t ** 3 * y3,
                    )
                )
        else:
            raise ValueError(f"unsupported path segment {op!r}")
    if len(current) > 1:
        subpaths.append(current)
    return subpaths


def encode_png(image: Any) -> bytes:
    buf = io.BytesIO()
    image.save(buf, "PNG")
    return buf.getvalue()


class ScenePainter:
    def __init__(
        self,
        backend: RasterBackend,
        *,
        scale: float = 2.0,
        font_path: str | None = None,
        elapsed: float | None = None,
    ) -> None:
        self.backend = backend
        self.scale = scale
        self.font_path = font_path
        self.elapsed = elapsed
        self._fonts: dict[tuple[int, bool], Any] = {}

    # --- public ------------------------------------------------------------------

    def paint(
        self,
        root: Element,
        width: float,
        height: float,
        *,
        background: str = "#ffffff",
        offset: tuple[float, float] = (0.0, 0.0),
    ) -> Any:
        """RGB image of `root` drawn at the origin (its own x/y ignored), `width` x `height` scene units."""
        size = (max(1, math.ceil(width * self.scale)), max(1, math.ceil(height * self.scale)))
        image = self.backend.Image.new("RGBA", size, self._rgba(background) or (255, 255, 255, 255))
        self._paint(root, _Frame(tx=-offset[0], ty=-offset[1]), image, origin=True)
        return image.convert("RGB")

    # --- colour / font helpers --------------------------------------------------

    def _rgba(self, color: str | None, alpha: float = 1.0) -> tuple[int, int, int, int] | None:
        if not color or color == "none" or color == "transparent":
            return None
        rgb = self.backend.ImageColor.getrgb(color)
        base = rgb[3] if len(rgb) == 4 else 255
        return rgb[0], rgb[1], rgb[2], int(round(base * max(0.0, min(1.0, alpha))))

    def _font(self, size_px: float, bold: bool) -> Any:
        key = (max(1, int(round(size_px))), bold)
        if key in self._fonts:
            return self._fonts[key]
        ImageFont = self.backend.ImageFont
        paths = ([self.font_path] if self.font_path else []) + (BOLD_FONT_CANDIDATES if bold else []) + FONT_CANDIDATES
        font = None
        for try_path in paths:
            try:
                font = ImageFont.truetype(try_path, key[0])
                break
            except (OSError, IOError):
                continue
        if font is None:
            font = ImageFont.load_default()
        self._fonts[key] = font
        return font

    def _px(self, frame: _Frame, x: float, y: float) -> tuple[float, float]:
        return (frame.tx + x * frame.sx) * self.scale, (frame.ty + y * frame.sy) * self.scale

    def _len(self, frame: _Frame, value: float) -> float:
        return value * (frame.sx + frame.sy) / 2 * self.scale

    def _draw(self, image: Any, opacity: float, translucent: bool, fn: Callable[[Any], None]) -> None:
        """Run `fn` on a draw handle; translucent paint goes through a layer so it blends."""
        Image, ImageDraw = self.backend.Image, self.backend.ImageDraw
        if opacity >= 1.0 and not translucent:
            fn(ImageDraw.Draw(image))
            return
        layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
        fn(ImageDraw.Draw(layer))
        if opacity < 1.0:
            alpha = layer.getchannel("A").point(lambda a: int(a * opacity))
            layer.putalpha(alpha)
        image.alpha_composite(layer)

    # --- traversal ----------------------------------------------------------------

    def _animated(self, el: Element, frame: _Frame) -> _Frame:
        anim = el.transient.get("animation")
        if self.elapsed is None or not isinstance(anim, Animation):
            return frame
        opacity, dx, dy = anim.state_at(self.elapsed)
        return replace(frame.shifted(dx, dy), opacity=frame.opacity * opacity)

    def _paint(self, el: Element, frame: _Frame, image: Any, *, origin: bool = False) -> None:
        frame = self._animated(el, frame)
        if frame.opacity <= 0:
            return
        if isinstance(el, Svg):
            inner = frame if origin else frame.shifted(el.x, el.y)
            self._rect(image, inner, 0, 0, el.width, el.height, 0, self._rgba(el.background), None, 0)
            vx, vy, _, _ = el.view_box or (0, 0, el.width, el.height)
            ksx, ksy = el.scale
            inner = replace(inner, sx=inner.sx * ksx, sy=inner.sy * ksy, markers=el.markers)
            inner = replace(inner, tx=inner.tx - vx * inner.sx, ty=inner.ty - vy * inner.sy)
            self._children(el, inner, image)
        elif isinstance(el, Box):
            inner = frame if origin else frame.shifted(el.x, el.y)
            outline = self._rgba(el.border_color) if el.border_width else None
            self._rect(image, inner, 0, 0, el.width, el.height, el.radius, self._rgba(el.background), outline,
                       el.border_width)
            self._children(el, inner, image)
        elif isinstance(el, Shape):
            self._shape(el, frame, image)
        elif isinstance(el, Text):
            self._text(el, frame, image)
        else:
            inner = frame if origin or not isinstance(el, Group) else frame.shifted(el.x, el.y)
            self._children(el, inner, image)

    def _children(self, el: Element, frame: _Frame, image: Any) -> None:
        for child in el.children:
            self._paint(child, frame, image)

    # --- primitives -------------------------------------------------------------

    def _rect(self, image, frame, x, y, w, h, radius, fill, outline, border) -> None:
        if w <= 0 or h <= 0 or (fill is None and outline is None):
            return
        x0, y0 = self._px(frame, x, y)
        x1, y1 = self._px(frame, x + w, y + h)
        r = min(self._len(frame, radius), (x1 - x0) / 2, (y1 - y0) / 2)
        width = max(1, int(round(self._len(frame, border)))) if outline else 0
        translucent = any(c is not None and c[3] < 255 for c in (fill, outline))
        self._draw(
            image,
            frame.opacity,
            translucent,
            lambda d: d.rounded_rectangle([x0, y0, x1, y1], radius=r, fill=fill, outline=outline, width=width),
        )

    def _shape(self, el: Shape, frame: _Frame, image: Any) -> None:
        opacity = frame.opacity * el.opacity
        fill = self._rgba(el.fill, el.fill_opacity)
        stroke = self._rgba(el.stroke)
        width = max(1, int(round(self._len(frame, el.stroke_width))))
        translucent = any(c is not None and c[3] < 255 for c in (fill, stroke))

        if isinstance(el, Rect):
            outline = stroke if el.stroke else None
            self._rect(image, replace(frame, opacity=opacity), el.x, el.y, el.width, el.height, el.rx, fill,
                       outline, el.stroke_width)
            return
        if isinstance(el, (Circle, Ellipse)):
            rx, ry = (el.r, el.r) if isinstance(el, Circle) else (el.rx, el.ry)
            x0, y0 = self._px(frame, el.x - rx, el.y - ry)
            x1, y1 = self._px(frame, el.x + rx, el.y + ry)
            if x1 <= x0 or y1 <= y0:
                return
            self._draw(image, opacity, translucent,
                       lambda d: d.ellipse([x0, y0, x1, y1], fill=fill, outline=stroke, width=width if stroke else 0))
            return
        if isinstance(el, Polygon):
            pts = [self._px(frame, el.x + px, el.y + py) for px, py in el.points]
            if len(pts) < 3:
                return

            def draw_polygon(d) -> None:
                if fill is not None:
                    d.polygon(pts, fill=fill)
                if stroke is not None:
                    d.line(pts + [pts[0]], fill=stroke, width=width, joint="curve")

            self._draw(image, opacity, translucent, draw_polygon)
            return
        if isinstance(el, Line):
            self._polyline(image, frame, opacity, [(el.x, el.y), (el.x2, el.y2)], None, stroke, width,
                           el.stroke_width, el.marker_end, translucent)
            return
        if isinstance(el, Path):
            for points in flatten_path(el.segments):
                self._polyline(image, frame, opacity, points, fill, stroke, width, el.stroke_width, el.marker_end,
                               translucent)

    def _polyline(self, image, frame, opacity, points, fill, stroke, width, stroke_width, marker, translucent) -> None:
        pts = [self._px(frame, x, y) for x, y in points]
        head = self._arrowhead(frame, points, stroke_width, marker)

        def draw_line(d) -> None:
            if fill is not None and len(pts) > 2:
                d.polygon(pts, fill=fill)
            if stroke is not None:
                d.line(pts, fill=stroke, width=width, joint="curve")
            if head is not None:
                d.polygon(head[0], fill=head[1])

        self._draw(image, opacity, translucent, draw_line)

    def _arrowhead(self, frame, points, stroke_width, marker):
        if not marker or len(points) < 2:
            return None
        color = self._rgba(frame.markers.get(marker))
        if color is None:
            return None
        (x0, y0), (x1, y1) = points[-2], points[-1]
        angle = math.atan2(y1 - y0, x1 - x0)
        cos, sin = math.cos(angle), math.sin(angle)
        tri = []
        for mx, my in _ARROW:
            mx, my = mx * stroke_width, my * stroke_width
            tri.append(self._px(frame, x1 + mx * cos - my * sin, y1 + mx * sin + my * cos))
        return tri, color

    def _text(self, el: Text, frame: _Frame, image: Any) -> None:
        color = self._rgba(el.color)
        if color is None or not el.text:
            return
        size_px = el.size * frame.sy * self.scale
        font = self._font(size_px, el.weight == "bold")
        line_px = size_px * el.line_height
        block_px = line_px * len(el.lines)
        x, y = self._px(frame, el.x, el.y)
        if el.baseline == "hanging":
            top = y
        elif el.baseline == "middle":
            top = y - block_px / 2
        else:
            top = y - size_px * _ASCENT - (line_px - size_px) / 2

        def draw_text(d) -> None:
            for i, line in enumerate(el.lines):
                if not line:
                    continue
                left, upper, right, lower = d.textbbox((0, 0), line, font=font)
                w = right - left
                if el.anchor == "middle":
                    lx = x - w / 2
                elif el.anchor == "end":
                    lx = x - w
                else:
                    lx = x
                ly = top + i * line_px + (line_px - (lower - upper)) / 2
                d.text((lx - left, ly - upper), line, fill=color, font=font)

        self._draw(image, frame.opacity, color[3] < 255, draw_text)
