"""
Export strategies: rendered container -> PNG bytes.

  vector  clone the container's first vector drawing, add an opaque background,
          serialize to SVG text and rasterize it with CairoSVG.
  direct  lift the scroll/clip styles of the enclosing scroll area, let the scene
          settle and its entry animations finish, measure the true content box and
          paint the live container.
  clone   copy the container into an off-screen staging box, strip transient
          presentation state, settle, paint the copy and remove the staging box.

smart_export() picks vector for a lone drawing without box-layout markers and
falls back to direct when vector fails; everything else goes straight to direct.
"""
from __future__ import annotations

import asyncio
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from ..config import EngineConfig
from ..diagram.errors import ExportError, RasterizationUnavailable
from ..scene.elements import Animation, Box, Container, Element, Rect, ScrollArea, Svg
from ..scene.svg import to_svg_markup
from .loader import load_raster_backend, load_svg_rasterizer
from .painter import ScenePainter, encode_png

logger = logging.getLogger(__name__)

VECTOR = "vector"
DIRECT = "direct"
CLONE = "clone"
STRATEGIES = (VECTOR, DIRECT, CLONE)

BOX_LAYOUT_MARKERS = ("comparison-container", "timeline-container", "infographic-container")
STAGING_OFFSET = -9999
STAGING_PADDING = 20
STAGING_CLASS = "export-staging"


@dataclass(frozen=True)
class ExportResult:
    strategy: str
    png: bytes


def vector_drawings(container: Element) -> list[Svg]:
    return container.find_all(Svg)


def has_box_layout(container: Element) -> bool:
    return any(el.has_class(marker) for el in container.descendants() for marker in BOX_LAYOUT_MARKERS)


def choose_strategy(container: Element) -> str:
    if len(vector_drawings(container)) == 1 and not has_box_layout(container):
        return VECTOR
    return DIRECT


def _scroll_ancestor(container: Element) -> ScrollArea | None:
    for el in container.ancestors():
        if isinstance(el, ScrollArea):
            return el
    return None


@contextmanager
def unclipped(area: ScrollArea | None) -> Iterator[None]:
    """Let `area` show all of its content; the saved styles come back even on error."""
    if area is None:
        yield
        return
    saved = (area.overflow, area.style_height, area.max_height, area.scroll_top)
    area.overflow = "visible"
    area.style_height = None
    area.max_height = None
    area.scroll_top = 0.0
    try:
        yield
    finally:
        area.overflow, area.style_height, area.max_height, area.scroll_top = saved


def visible_region(container: Container) -> tuple[float, float, float]:
    """(width, height, scroll offset) of the container as its clipping ancestors show it."""
    width, height = container.content_size()
    offset = 0.0
    for el in container.ancestors():
        if isinstance(el, ScrollArea):
            clip = el.clip_height()
            if clip is not None:
                height = min(height, clip)
                offset += el.scroll_top
    return width, height, offset


async def export_vector(container: Element, config: EngineConfig | None = None) -> bytes:
    config = config or EngineConfig()
    drawings = vector_drawings(container)
    if not drawings:
        raise ExportError(VECTOR, "no vector drawing found in container")
    source = drawings[0]
    svg = source.clone()
    vx, vy, vw, vh = svg.view_box or (0, 0, svg.width, svg.height)
    svg.insert(0, Rect(x=vx, y=vy, width=vw, height=vh, fill=config.palette.export_background))
    markup = to_svg_markup(svg)
    try:
        svg2png = load_svg_rasterizer()
        await asyncio.sleep(0)
        png = svg2png(bytestring=markup.encode("utf-8"), scale=config.export_scale)
    except RasterizationUnavailable as exc:
        raise ExportError(VECTOR, str(exc)) from exc
    except Exception as exc:
        raise ExportError(VECTOR, f"SVG rasterization failed: {exc}") from exc
    if not png:
        raise ExportError(VECTOR, "SVG rasterization produced no data")
    logger.info("Vector export: %sx%s drawing at %sx", svg.width, svg.height, config.export_scale)
    return png


def animations_finish(root: Element) -> float:
    """Seconds after the scene was built at which its last entry animation is at rest."""
    ends = [0.0]
    for el in root.walk():
        anim = el.transient.get("animation")
        if isinstance(anim, Animation):
            ends.append(anim.delay + anim.duration)
    return max(ends)


async def export_direct(container: Container, config: EngineConfig | None = None) -> bytes:
    config = config or EngineConfig()
    with unclipped(_scroll_ancestor(container)):
        wait = config.settle_seconds
        elapsed = None
        if container.rendered_at is not None:
            finish = animations_finish(container)
            remaining = finish - (time.monotonic() - container.rendered_at)
            if remaining > wait:
                logger.debug("Direct export waiting %.2fs for entry animations", remaining)
                wait = remaining
        await asyncio.sleep(wait)
        if container.rendered_at is not None:
            # the loop may wake a clock tick early; never paint mid-animation
            elapsed = max(time.monotonic() - container.rendered_at, finish)
        width, height, offset = visible_region(container)
        backend = load_raster_backend()
        painter = ScenePainter(backend, scale=config.export_scale, font_path=config.font_path, elapsed=elapsed)
        logger.info("Direct export: %.0fx%.0f at %sx", width, height, config.export_scale)
        try:
            image = painter.paint(container, width, height, background=config.palette.export_background,
                                  offset=(0.0, offset))
            return encode_png(image)
        except Exception as exc:
            raise ExportError(DIRECT, f"rasterization failed: {exc}") from exc


async def export_clone(container: Container, config: EngineConfig | None = None) -> bytes:
    config = config or EngineConfig()
    ancestors = list(container.ancestors())
    if not ancestors:
        raise ExportError(CLONE, "container is not attached to a document")
    root = ancestors[-1]

    dup = container.clone()
    dup.attrs.pop("id", None)
    dup.x = dup.y = STAGING_PADDING
    dup.strip_transient()
    width, height = dup.content_size()
    staging = Box(
        x=STAGING_OFFSET,
        y=STAGING_OFFSET,
        width=width + 2 * STAGING_PADDING,
        height=height + 2 * STAGING_PADDING,
        background=config.palette.export_background,
        classes=[STAGING_CLASS],
    )
    staging.append(dup)
    root.append(staging)
    try:
        await asyncio.sleep(config.clone_settle_seconds)
        backend = load_raster_backend()
        painter = ScenePainter(backend, scale=config.export_scale, font_path=config.font_path)
        logger.info("Clone export: %.0fx%.0f at %sx", staging.width, staging.height, config.export_scale)
        try:
            image = painter.paint(staging, staging.width, staging.height,
                                  background=config.palette.export_background)
            return encode_png(image)
        except Exception as exc:
            raise ExportError(CLONE, f"rasterization failed: {exc}") from exc
    finally:
        root.remove(staging)


_EXPORTERS = {
    VECTOR: export_vector,
    DIRECT: export_direct,
    CLONE: export_clone,
}


async def export_with(strategy: str, container: Container, config: EngineConfig | None = None) -> bytes:
    """Run one named strategy; used for manual retries after smart export fails."""
    if strategy not in _EXPORTERS:
        raise ValueError(f"unknown export strategy {strategy!r}; expected one of {', '.join(STRATEGIES)}")
    return await _EXPORTERS[strategy](container, config)


async def smart_export(container: Container, config: EngineConfig | None = None) -> ExportResult:
    strategy = choose_strategy(container)
    logger.info("Smart export selected %s strategy", strategy)
    if strategy == VECTOR:
        try:
            return ExportResult(VECTOR, await export_vector(container, config))
        except ExportError as exc:
            logger.warning("Vector export failed (%s); falling back to direct", exc)
    return ExportResult(DIRECT, await export_direct(container, config))
