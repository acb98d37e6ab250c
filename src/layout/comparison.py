"""
Comparison layout: item cards in an auto-fit grid, plus a radar chart when exactly two
items are compared. Radar axes come from the first item's features; axis k of n sits at
angle k * 2pi/n - pi/2 (feature 0 straight up, then clockwise) and a score s lies at
distance s/10 * radius from the centre.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from ..diagram.errors import DescriptionError
from ..diagram.schema import ComparisonDiagram, ComparisonItem
from .geometry import LayoutResult, Placement, grid_columns

logger = logging.getLogger(__name__)

PADDING = 20
TITLE_HEIGHT = 54
MIN_COLUMN = 350
GAP = 30
CARD_PADDING = 25
HEADER_HEIGHT = 50
FEATURE_ROW = 44
FEATURE_GAP = 15
OVERALL_HEIGHT = 80

RADAR_VIEW = (500, 400)
RADAR_CENTER = (250.0, 200.0)
RADAR_RADIUS = 120.0
RADAR_RINGS = 5
RADAR_LABEL_OFFSET = 20
RADAR_SECTION_PADDING = 30
RADAR_HEADING = 40
RADAR_LEGEND = 40
MAX_SCORE = 10


@dataclass
class RadarChart:
    center: tuple[float, float]
    radius: float
    axes: list[str]
    angles: list[float]
    rings: list[float]
    label_points: list[tuple[float, float]]
    polygons: dict[str, list[tuple[float, float]]] = field(default_factory=dict)

    def axis_end(self, k: int) -> tuple[float, float]:
        return _polar(self.center, self.angles[k], self.radius)


@dataclass
class ComparisonLayout(LayoutResult):
    columns: int = 1
    column_width: float = 0.0
    radar: RadarChart | None = None


def axis_angle(k: int, n: int) -> float:
    return k * (2 * math.pi / n) - math.pi / 2


def _polar(center: tuple[float, float], angle: float, distance: float) -> tuple[float, float]:
    return center[0] + math.cos(angle) * distance, center[1] + math.sin(angle) * distance


def compute_radar(
    items: tuple[ComparisonItem, ...] | list[ComparisonItem],
    *,
    center: tuple[float, float] = RADAR_CENTER,
    radius: float = RADAR_RADIUS,
) -> RadarChart | None:
    """
    Radar geometry for `items` on the first item's axes. Other items are aligned by
    feature index: a missing score plots at the centre, extra features are dropped.
    Returns None when the first item has no features.
    """
    if not items or not items[0].features:
        return None
    axes = [f.name for f in items[0].features]
    n = len(axes)
    angles = [axis_angle(k, n) for k in range(n)]
    chart = RadarChart(
        center=center,
        radius=radius,
        axes=axes,
        angles=angles,
        rings=[radius * (r + 1) / RADAR_RINGS for r in range(RADAR_RINGS)],
        label_points=[_polar(center, a, radius + RADAR_LABEL_OFFSET) for a in angles],
    )
    for item in items:
        names = [f.name for f in item.features]
        if names != axes:
            logger.warning(
                "Radar axes mismatch for %r: expected %s, got %s; aligning by index",
                item.id, axes, names,
            )
        points = []
        for k, angle in enumerate(angles):
            score = item.features[k].score if k < len(item.features) else 0.0
            points.append(_polar(center, angle, score / MAX_SCORE * radius))
        chart.polygons[item.id] = points
    return chart


def card_height(feature_count: int) -> float:
    features = feature_count * FEATURE_ROW + max(0, feature_count - 1) * FEATURE_GAP
    return HEADER_HEIGHT + 2 * CARD_PADDING + features + OVERALL_HEIGHT


def layout_comparison(diagram: ComparisonDiagram, width: float = 800) -> ComparisonLayout:
    available = width - 2 * PADDING
    columns, column_width = grid_columns(available, MIN_COLUMN, GAP, len(diagram.items))
    result = ComparisonLayout(width=width, height=0.0, columns=columns, column_width=column_width)
    result.placements["title"] = Placement(PADDING, PADDING, available, TITLE_HEIGHT)

    top = PADDING + TITLE_HEIGHT
    for row_start in range(0, len(diagram.items), columns):
        row = diagram.items[row_start:row_start + columns]
        height = max(card_height(len(item.features)) for item in row)
        for col, item in enumerate(row):
            if item.id in result.placements:
                raise DescriptionError(f"items[{row_start + col}].id", f"duplicate item id {item.id!r}")
            x = PADDING + col * (column_width + GAP)
            result.placements[item.id] = Placement(x, top, column_width, height)
        top += height + GAP

    if len(diagram.items) == 2:
        result.radar = compute_radar(diagram.items)
    if result.radar is not None:
        section_height = 2 * RADAR_SECTION_PADDING + RADAR_HEADING + RADAR_VIEW[1] + RADAR_LEGEND
        result.placements["radar"] = Placement(PADDING, top, available, section_height)
        top += section_height + GAP

    result.height = top - GAP + PADDING if diagram.items else top + PADDING
    return result
