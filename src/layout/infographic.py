"""
Infographic layout: sections stack top to bottom in input order; stats and chart
sections sub-lay their items into an auto-fit grid inside the section box.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from ..diagram.errors import DescriptionError
from ..diagram.schema import (
    ChartSection,
    HeaderSection,
    InfographicDiagram,
    StatsSection,
    TextSection,
)
from .geometry import LayoutResult, Placement, grid_columns, wrap_text

PADDING = 20
TITLE_HEIGHT = 54
SECTION_GAP = 20
SECTION_PADDING = 20
HEADER_HEIGHT = 70

STAT_MIN_COLUMN = 200
STAT_GAP = 20
STAT_HEIGHT = 100

CHART_MIN_COLUMN = 250
CHART_GAP = 20
CHART_ROW = 48

TEXT_SIZE = 16
TEXT_LINE_HEIGHT = 1.6


@dataclass
class InfographicLayout(LayoutResult):
    text_lines: dict[str, list[str]] = field(default_factory=dict)


def _grid(
    result: InfographicLayout,
    key: str,
    box: Placement,
    count: int,
    min_column: float,
    gap: float,
    row_height: float,
) -> float:
    """Place `count` cells under `key` in `box`; returns the grid's height."""
    if not count:
        return 0.0
    columns, width = grid_columns(box.width, min_column, gap, count)
    for k in range(count):
        row, col = divmod(k, columns)
        result.placements[f"{key}[{k}]"] = Placement(
            box.x + col * (width + gap), box.y + row * (row_height + gap), width, row_height
        )
    rows = -(-count // columns)
    return rows * row_height + (rows - 1) * gap


def layout_infographic(diagram: InfographicDiagram, width: float = 800) -> InfographicLayout:
    available = width - 2 * PADDING
    inner = available - 2 * SECTION_PADDING
    result = InfographicLayout(width=width, height=0.0)
    top = PADDING
    if diagram.title:
        result.placements["title"] = Placement(PADDING, PADDING, available, TITLE_HEIGHT)
        top += TITLE_HEIGHT

    for i, section in enumerate(diagram.sections):
        key = f"sections[{i}]"
        content = Placement(PADDING + SECTION_PADDING, top + SECTION_PADDING, inner, 0)
        if isinstance(section, HeaderSection):
            height = HEADER_HEIGHT
        elif isinstance(section, StatsSection):
            grid = _grid(result, f"{key}.items", content, len(section.items), STAT_MIN_COLUMN, STAT_GAP, STAT_HEIGHT)
            height = grid + 2 * SECTION_PADDING
        elif isinstance(section, ChartSection):
            grid = _grid(result, f"{key}.data", content, len(section.data), CHART_MIN_COLUMN, CHART_GAP, CHART_ROW)
            height = grid + 2 * SECTION_PADDING
        elif isinstance(section, TextSection):
            lines = wrap_text(section.content, inner, TEXT_SIZE)
            result.text_lines[key] = lines
            height = len(lines) * TEXT_SIZE * TEXT_LINE_HEIGHT + 2 * SECTION_PADDING
        else:
            raise DescriptionError(f"{key}.type", f"unsupported section {section!r}")
        result.placements[key] = Placement(PADDING, top, available, height)
        top += height + SECTION_GAP

    result.height = (top - SECTION_GAP if diagram.sections else top) + PADDING
    return result
