"""Tests for export strategy selection and the vector/direct/clone exporters."""
from __future__ import annotations

import asyncio
import io
from unittest.mock import patch

import pytest
from PIL import Image, ImageColor

from src.diagram import ExportError, RasterizationUnavailable
from src.export import (
    CLONE,
    DIRECT,
    VECTOR,
    animations_finish,
    choose_strategy,
    export_clone,
    export_direct,
    export_filename,
    export_vector,
    export_with,
    smart_export,
    unclipped,
    visible_region,
)
from src.export import strategies
from src.export.strategies import STAGING_CLASS
from src.scene import Box, Container, ScrollArea, Svg, build_page
from src.visualizer import Visualizer

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def _rendered(data: dict, config, viewport_height: float | None = 600) -> Visualizer:
    viz = Visualizer(document=build_page(viewport_height=viewport_height), config=config)
    asyncio.run(viz.render(data))
    return viz


def _size(png: bytes) -> tuple[int, int]:
    with Image.open(io.BytesIO(png)) as img:
        return img.size


def _image(png: bytes) -> Image.Image:
    with Image.open(io.BytesIO(png)) as img:
        return img.convert("RGB")


def _origin(el, container) -> tuple[float, float]:
    """Position of `el` in the exported image, which puts `container` at the origin."""
    x = y = 0.0
    while el is not container:
        x, y = x + el.x, y + el.y
        el = el.parent
    return x, y


def _classed(container, name: str) -> list:
    return [el for el in container.walk() if el.has_class(name)]


def _date_pill_colors(image, container, scale: float = 1.0) -> list[tuple]:
    """Colour just inside the left cap of each timeline card's date chip, next to the card's border colour."""
    found = []
    for card in _classed(container, "timeline-card"):
        chip = card.children[0]
        x, y = _origin(chip, container)
        found.append((image.getpixel((int((x + 6) * scale), int((y + chip.height / 2) * scale))),
                      ImageColor.getrgb(card.border_color)))
    return found


def test_choose_strategy_by_content(
    fast_config, mindmap_data, flowchart_data, hierarchy_data, timeline_data, comparison_data, infographic_data
) -> None:
    for data in (mindmap_data, flowchart_data, hierarchy_data):
        assert choose_strategy(_rendered(data, fast_config).container) == VECTOR
    for data in (timeline_data, comparison_data, infographic_data):
        assert choose_strategy(_rendered(data, fast_config).container) == DIRECT


def test_choose_strategy_needs_exactly_one_drawing() -> None:
    container = Container()
    assert choose_strategy(container) == DIRECT
    container.append(Svg())
    assert choose_strategy(container) == VECTOR
    container.append(Svg())
    assert choose_strategy(container) == DIRECT


def test_unclipped_restores_even_on_error() -> None:
    area = ScrollArea(overflow="auto", style_height=300, max_height=500, scroll_top=120)
    with pytest.raises(RuntimeError):
        with unclipped(area):
            assert area.overflow == "visible"
            assert area.clip_height() is None
            assert area.scroll_top == 0.0
            raise RuntimeError("boom")
    assert (area.overflow, area.style_height, area.max_height, area.scroll_top) == ("auto", 300, 500, 120)


def test_visible_region_respects_clipping() -> None:
    area = ScrollArea(style_height=200, scroll_top=50)
    container = area.append(Container(width=400))
    container.append(Box(width=400, height=900))
    assert visible_region(container) == (400, 200, 50)
    with unclipped(area):
        assert visible_region(container) == (400, 900, 0.0)


def test_export_direct_captures_full_content(fast_config, timeline_data) -> None:
    viz = _rendered(timeline_data, fast_config, viewport_height=300)
    area = viz.container.parent
    png = asyncio.run(export_direct(viz.container, fast_config))
    assert png.startswith(PNG_MAGIC)
    width, height = _size(png)
    assert width == 800
    assert height == pytest.approx(viz.container.content_size()[1], abs=1)
    assert height > 300
    assert area.clip_height() == 300
    pills = _date_pill_colors(_image(png), viz.container)
    assert len(pills) == 4
    for painted, expected in pills:
        assert painted == expected


def test_export_direct_scales(fast_config, infographic_data) -> None:
    import dataclasses

    config = dataclasses.replace(fast_config, export_scale=2.0)
    viz = _rendered(infographic_data, config)
    image = _image(asyncio.run(export_direct(viz.container, config)))
    assert image.width == 1600
    (header,) = _classed(viz.container, "header")
    x, y = _origin(header, viz.container)
    assert image.getpixel((int((x + 6) * 2), int((y + header.height / 2) * 2))) == (44, 62, 80)


def test_animations_finish_with_last_card(fast_config, timeline_data, comparison_data) -> None:
    assert animations_finish(_rendered(timeline_data, fast_config).container) == pytest.approx(3 * 0.2 + 0.6)
    assert animations_finish(_rendered(comparison_data, fast_config).container) == pytest.approx(0.3 + 0.6)
    assert animations_finish(Container()) == 0.0


def test_export_direct_waits_for_entry_animations(fast_config, timeline_data, monkeypatch) -> None:
    viz = _rendered(timeline_data, fast_config)
    waits = []
    real_sleep = asyncio.sleep

    async def record(delay, *args):
        waits.append(delay)
        await real_sleep(delay)

    monkeypatch.setattr(strategies.asyncio, "sleep", record)
    asyncio.run(export_direct(viz.container, fast_config))
    assert waits and waits[0] > 1.0


def test_export_clone_stages_and_cleans_up(fast_config, comparison_data) -> None:
    viz = _rendered(comparison_data, fast_config)
    body = viz.document.body
    before = len(body.children)
    png = asyncio.run(export_clone(viz.container, fast_config))
    assert png.startswith(PNG_MAGIC)
    assert len(body.children) == before
    assert not [el for el in body.walk() if el.has_class(STAGING_CLASS)]
    card = next(el for el in viz.container.walk() if el.has_class("comparison-item"))
    assert "animation" in card.transient
    assert viz.document.get_element_by_id(viz.container_id) is viz.container


def test_export_clone_requires_attached_container(fast_config) -> None:
    with pytest.raises(ExportError) as info:
        asyncio.run(export_clone(Container(), fast_config))
    assert info.value.strategy == CLONE


def test_export_vector_without_drawing(fast_config, timeline_data) -> None:
    viz = _rendered(timeline_data, fast_config)
    with pytest.raises(ExportError) as info:
        asyncio.run(export_vector(viz.container, fast_config))
    assert info.value.strategy == VECTOR


def test_export_vector_png(fast_config, mindmap_data, cairo_available) -> None:
    viz = _rendered(mindmap_data, fast_config)
    png = asyncio.run(export_vector(viz.container, fast_config))
    assert png.startswith(PNG_MAGIC)
    assert _size(png) == (800, 600)
    svg = viz.container.children[0]
    assert svg.children[0].tag == "line"


def test_smart_export_falls_back_to_direct(fast_config, mindmap_data) -> None:
    viz = _rendered(mindmap_data, fast_config)
    with patch("src.export.strategies.load_svg_rasterizer", side_effect=RasterizationUnavailable("no cairo")) as loader:
        result = asyncio.run(smart_export(viz.container, fast_config))
    loader.assert_called_once()
    assert result.strategy == DIRECT
    assert result.png.startswith(PNG_MAGIC)


def test_smart_export_box_layout_goes_direct(fast_config, timeline_data, monkeypatch) -> None:
    def fail(*args, **kwargs):
        raise AssertionError("vector export should not run")

    monkeypatch.setattr(strategies, "export_vector", fail)
    viz = _rendered(timeline_data, fast_config)
    result = asyncio.run(smart_export(viz.container, fast_config))
    assert result.strategy == DIRECT
    pills = _date_pill_colors(_image(result.png), viz.container)
    assert len(pills) == 4
    for painted, expected in pills:
        assert painted == expected


def test_smart_export_comparison_cards_fully_painted(fast_config, comparison_data) -> None:
    viz = _rendered(comparison_data, fast_config)
    result = asyncio.run(smart_export(viz.container, fast_config))
    assert result.strategy == DIRECT
    image = _image(result.png)
    cards = _classed(viz.container, "comparison-item")
    assert len(cards) == 2
    for card in cards:
        (score,) = [el for el in card.children if el.has_class("overall-score")]
        x, y = _origin(score, viz.container)
        assert image.getpixel((int(x + 6), int(y + score.height / 2))) == ImageColor.getrgb(card.border_color)


def test_export_with_named_strategy(fast_config, flowchart_data) -> None:
    viz = _rendered(flowchart_data, fast_config)
    assert asyncio.run(export_with(CLONE, viz.container, fast_config)).startswith(PNG_MAGIC)
    with pytest.raises(ValueError):
        asyncio.run(export_with("screenshot", viz.container, fast_config))


def test_export_filename() -> None:
    from datetime import datetime

    assert export_filename(datetime(2024, 3, 5, 14, 7, 9)) == "visualization-2024-03-05T14-07-09.png"
