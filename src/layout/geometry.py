"""
Layout result types shared by every diagram layout, plus the responsive grid and
text-wrapping helpers the box layouts use.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from ..scene.elements import estimate_text_width


@dataclass(frozen=True)
class Placement:
    """Axis-aligned box; x, y is the top-left corner in container coordinates."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def centered(cls, cx: float, cy: float, width: float, height: float) -> "Placement":
        return cls(cx - width / 2, cy - height / 2, width, height)

    @property
    def cx(self) -> float:
        return self.x + self.width / 2

    @property
    def cy(self) -> float:
        return self.y + self.height / 2

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def top_mid(self) -> tuple[float, float]:
        return self.cx, self.y

    @property
    def bottom_mid(self) -> tuple[float, float]:
        return self.cx, self.bottom

    @property
    def left_mid(self) -> tuple[float, float]:
        return self.x, self.cy

    @property
    def right_mid(self) -> tuple[float, float]:
        return self.right, self.cy

    def overlaps_horizontally(self, other: "Placement") -> bool:
        return self.x < other.right and other.x < self.right

    def relative_to(self, origin: "Placement") -> "Placement":
        return Placement(self.x - origin.x, self.y - origin.y, self.width, self.height)


@dataclass(frozen=True)
class EdgeRoute:
    """
    Connector between two placed items. With `curve`, points are the four control
    points of a cubic Bezier; otherwise a polyline.
    """

    source: str
    target: str
    points: tuple[tuple[float, float], ...]
    curve: bool = False
    label: str = ""
    label_at: tuple[float, float] | None = None


@dataclass
class LayoutResult:
    width: float
    height: float
    placements: dict[str, Placement] = field(default_factory=dict)
    edges: list[EdgeRoute] = field(default_factory=list)

    def __getitem__(self, key: str) -> Placement:
        return self.placements[key]


def grid_columns(available: float, min_column: float, gap: float, count: int) -> tuple[int, float]:
    """
    Auto-fit grid: as many `min_column`-wide tracks as fit, collapsed to `count` items;
    returns (columns, column_width) with tracks stretched to fill `available`.
    """
    fit = max(1, int((available + gap) // (min_column + gap)))
    columns = max(1, min(fit, count)) if count else 1
    width = (available - (columns - 1) * gap) / columns
    return columns, width


def wrap_text(text: str, max_width: float, size: float) -> list[str]:
    """Greedy wrap on spaces; long unbroken runs (CJK text) break per character."""
    lines: list[str] = []
    for paragraph in text.split("\n"):
        current = ""
        for token in _tokens(paragraph):
            candidate = current + token
            if current and estimate_text_width(candidate.rstrip(), size) > max_width:
                lines.append(current.rstrip())
                current = token.lstrip()
            else:
                current = candidate
        lines.append(current.rstrip())
    return lines or [""]


def _tokens(text: str) -> list[str]:
    out: list[str] = []
    word = ""
    for ch in text:
        if ch == " ":
            out.append(word + " ")
            word = ""
        elif ord(ch) >= 0x2E80:
            if word:
                out.append(word)
                word = ""
            out.append(ch)
        else:
            word += ch
    if word:
        out.append(word)
    return out
