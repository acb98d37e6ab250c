"""
Scene primitives: a small element tree (boxes, vector drawings, shapes, text) that every
renderer emits into and every export strategy reads.

Positions are relative to the parent element's origin; children of an Svg live in its
view-box coordinates. Presentation state that only exists while the scene is live
(entry animations, hover lift, transitions) is kept in `transient`, never in the
geometric fields, so it can be stripped from a clone without touching layout.
"""
from __future__ import annotations

import copy
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Iterator, TypeVar

E = TypeVar("E", bound="Element")

# Characters wider than this code point count as full-width when estimating text extent.
_WIDE_CODEPOINT = 0x2E80


@dataclass(frozen=True)
class Animation:
    """Entry animation from a faded/offset state to the element's resting state."""

    name: str
    duration: float
    delay: float = 0.0
    from_opacity: float = 0.0
    from_offset: tuple[float, float] = (0.0, 20.0)

    def state_at(self, elapsed: float) -> tuple[float, float, float]:
        """(opacity, dx, dy) at `elapsed` seconds after the scene was built."""
        if elapsed >= self.delay + self.duration:
            progress = 1.0
        elif self.duration <= 0:
            progress = 0.0
        else:
            progress = min(1.0, max(0.0, (elapsed - self.delay) / self.duration))
        opacity = self.from_opacity + (1.0 - self.from_opacity) * progress
        dx, dy = self.from_offset
        return opacity, dx * (1.0 - progress), dy * (1.0 - progress)


def estimate_text_width(text: str, size: float) -> float:
    """Rough advance width; full-width glyphs count double."""
    units = sum(1.0 if ord(ch) >= _WIDE_CODEPOINT else 0.6 for ch in text)
    return units * size


@dataclass(eq=False, kw_only=True)
class Element:
    tag: ClassVar[str] = "g"

    x: float = 0.0
    y: float = 0.0
    classes: list[str] = field(default_factory=list)
    attrs: dict[str, str] = field(default_factory=dict)
    transient: dict[str, Any] = field(default_factory=dict)
    children: list["Element"] = field(default_factory=list)
    parent: "Element | None" = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    @property
    def element_id(self) -> str | None:
        return self.attrs.get("id")

    def append(self, child: E) -> E:
        child.parent = self
        self.children.append(child)
        return child

    def insert(self, index: int, child: E) -> E:
        child.parent = self
        self.children.insert(index, child)
        return child

    def remove(self, child: "Element") -> None:
        self.children.remove(child)
        child.parent = None

    def clear(self) -> None:
        for child in self.children:
            child.parent = None
        self.children = []

    def walk(self) -> Iterator["Element"]:
        """Pre-order traversal including self."""
        yield self
        for child in self.children:
            yield from child.walk()

    def descendants(self) -> Iterator["Element"]:
        for child in self.children:
            yield from child.walk()

    def find_all(self, kind: type[E]) -> list[E]:
        return [el for el in self.descendants() if isinstance(el, kind)]

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def query(self, predicate: Callable[["Element"], bool]) -> "Element | None":
        for el in self.descendants():
            if predicate(el):
                return el
        return None

    def ancestors(self) -> Iterator["Element"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def clone(self: E) -> E:
        """Deep copy of this subtree, detached from any parent."""
        dup = copy.copy(self)
        dup.parent = None
        dup.classes = list(self.classes)
        dup.attrs = dict(self.attrs)
        dup.transient = dict(self.transient)
        dup.children = []
        for child in self.children:
            dup.append(child.clone())
        return dup

    def strip_transient(self) -> None:
        """Drop transform/animation/transition state across the subtree."""
        for el in self.walk():
            el.transient.clear()

    def extent(self) -> tuple[float, float]:
        """Right/bottom edge of this element's content, in its own coordinate space."""
        right, bottom = 0.0, 0.0
        for child in self.children:
            cw, ch = child.outer_extent()
            right, bottom = max(right, cw), max(bottom, ch)
        return right, bottom

    def outer_extent(self) -> tuple[float, float]:
        """Right/bottom edge in the parent's coordinate space."""
        w, h = self.extent()
        return self.x + w, self.y + h


@dataclass(eq=False, kw_only=True)
class Group(Element):
    tag: ClassVar[str] = "g"


@dataclass(eq=False, kw_only=True)
class Shape(Element):
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float = 1.0
    fill_opacity: float = 1.0
    opacity: float = 1.0


@dataclass(eq=False, kw_only=True)
class Rect(Shape):
    tag: ClassVar[str] = "rect"

    width: float = 0.0
    height: float = 0.0
    rx: float = 0.0

    def extent(self) -> tuple[float, float]:
        return self.width, self.height


@dataclass(eq=False, kw_only=True)
class Circle(Shape):
    """x, y is the centre."""

    tag: ClassVar[str] = "circle"

    r: float = 0.0

    def outer_extent(self) -> tuple[float, float]:
        return self.x + self.r, self.y + self.r


@dataclass(eq=False, kw_only=True)
class Ellipse(Shape):
    """x, y is the centre."""

    tag: ClassVar[str] = "ellipse"

    rx: float = 0.0
    ry: float = 0.0

    def outer_extent(self) -> tuple[float, float]:
        return self.x + self.rx, self.y + self.ry


@dataclass(eq=False, kw_only=True)
class Line(Shape):
    """From (x, y) to (x2, y2); marker_end names an arrowhead marker on the enclosing Svg."""

    tag: ClassVar[str] = "line"

    x2: float = 0.0
    y2: float = 0.0
    marker_end: str | None = None

    def outer_extent(self) -> tuple[float, float]:
        return max(self.x, self.x2), max(self.y, self.y2)


@dataclass(eq=False, kw_only=True)
class Polygon(Shape):
    tag: ClassVar[str] = "polygon"

    points: tuple[tuple[float, float], ...] = ()

    def outer_extent(self) -> tuple[float, float]:
        if not self.points:
            return self.x, self.y
        return (
            self.x + max(p[0] for p in self.points),
            self.y + max(p[1] for p in self.points),
        )


@dataclass(eq=False, kw_only=True)
class Path(Shape):
    """
    Segments are ("M", x, y), ("L", x, y) or ("C", x1, y1, x2, y2, x, y) in absolute
    coordinates of the parent space.
    """

    tag: ClassVar[str] = "path"

    segments: tuple[tuple[Any, ...], ...] = ()
    marker_end: str | None = None

    @property
    def d(self) -> str:
        parts = []
        for seg in self.segments:
            op, *coords = seg
            parts.append(op + " " + " ".join(fmt_number(c) for c in coords))
        return " ".join(parts)

    def outer_extent(self) -> tuple[float, float]:
        xs = [c for seg in self.segments for c in seg[1::2]]
        ys = [c for seg in self.segments for c in seg[2::2]]
        if not xs:
            return self.x, self.y
        return max(xs), max(ys)


@dataclass(eq=False, kw_only=True)
class Text(Element):
    """
    Text anchored at (x, y). `anchor` is start|middle|end; `baseline` is alphabetic|middle|hanging.
    Embedded newlines become stacked lines spaced `line_height` em apart.
    """

    tag: ClassVar[str] = "text"

    text: str = ""
    size: float = 14.0
    weight: str = "normal"
    color: str = "#333333"
    anchor: str = "start"
    baseline: str = "alphabetic"
    line_height: float = 1.2

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")

    def block_height(self) -> float:
        return self.size * self.line_height * len(self.lines)

    def block_width(self) -> float:
        return max((estimate_text_width(line, self.size) for line in self.lines), default=0.0)

    def outer_extent(self) -> tuple[float, float]:
        width = self.block_width()
        if self.anchor == "middle":
            right = self.x + width / 2
        elif self.anchor == "end":
            right = self.x
        else:
            right = self.x + width
        if self.baseline == "hanging":
            bottom = self.y + self.block_height()
        elif self.baseline == "middle":
            bottom = self.y + self.block_height() / 2
        else:
            bottom = self.y + self.block_height() - self.size
        return right, bottom


@dataclass(eq=False, kw_only=True)
class Svg(Element):
    """
    A vector drawing placed at (x, y) with a pixel size; children use view-box coordinates.
    `markers` maps arrowhead marker ids to their fill colour.
    """

    tag: ClassVar[str] = "svg"

    width: float = 800.0
    height: float = 600.0
    view_box: tuple[float, float, float, float] | None = None
    background: str | None = None
    markers: dict[str, str] = field(default_factory=dict)

    def clone(self) -> "Svg":
        dup = super().clone()
        dup.markers = dict(self.markers)
        return dup

    @property
    def scale(self) -> tuple[float, float]:
        if not self.view_box:
            return 1.0, 1.0
        _, _, vw, vh = self.view_box
        return (self.width / vw if vw else 1.0, self.height / vh if vh else 1.0)

    def extent(self) -> tuple[float, float]:
        return self.width, self.height


@dataclass(eq=False, kw_only=True)
class Box(Element):
    """A styled rectangular block (the box-layout counterpart of an HTML div)."""

    tag: ClassVar[str] = "div"

    width: float = 0.0
    height: float = 0.0
    background: str | None = None
    border_color: str | None = None
    border_width: float = 0.0
    radius: float = 0.0

    def extent(self) -> tuple[float, float]:
        w, h = super().extent()
        return max(self.width, w), max(self.height, h)


@dataclass(eq=False, kw_only=True)
class Container(Box):
    """Render target owned by the Visualizer; `rendered_at` stamps the current scene."""

    rendered_at: float | None = None

    def scroll_size(self) -> tuple[float, float]:
        """Content extent regardless of the declared box size."""
        return Element.extent(self)

    def content_size(self) -> tuple[float, float]:
        """True content box: max of scroll and layout dimensions."""
        sw, sh = self.scroll_size()
        return max(sw, self.width), max(sh, self.height)


@dataclass(eq=False, kw_only=True)
class ScrollArea(Box):
    """
    Scrolling/clipping ancestor of a container. With overflow other than "visible", the
    visible region is `clip_height` tall starting at `scroll_top`.
    """

    overflow: str = "auto"
    style_height: float | None = None
    max_height: float | None = None
    scroll_top: float = 0.0

    def clip_height(self) -> float | None:
        if self.overflow == "visible":
            return None
        limits = [h for h in (self.style_height, self.max_height) if h is not None]
        return min(limits) if limits else None


def composition(root: Element) -> Counter[str]:
    """Count of primitive tags below `root`."""
    return Counter(el.tag for el in root.descendants())


def fmt_number(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")
