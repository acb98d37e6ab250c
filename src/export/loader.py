"""
Lazy loading of the rasterization libraries. Pillow paints scenes for the direct and
clone strategies; CairoSVG turns serialized SVG into PNG for the vector strategy.
Neither is imported until an export needs it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import ModuleType
from typing import Callable

from ..diagram.errors import RasterizationUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RasterBackend:
    Image: ModuleType
    ImageDraw: ModuleType
    ImageFont: ModuleType
    ImageColor: ModuleType


_backend: RasterBackend | None = None


def load_raster_backend() -> RasterBackend:
    """Pillow modules, imported on first use and kept for the process."""
    global _backend
    if _backend is not None:
        return _backend
    try:
        from PIL import Image, ImageColor, ImageDraw, ImageFont
    except ImportError as exc:
        raise RasterizationUnavailable(f"Pillow could not be loaded: {exc}") from exc
    logger.debug("Loaded Pillow raster backend")
    _backend = RasterBackend(Image=Image, ImageDraw=ImageDraw, ImageFont=ImageFont, ImageColor=ImageColor)
    return _backend


def load_svg_rasterizer() -> Callable[..., bytes]:
    """cairosvg.svg2png; the native cairo library can fail to load with OSError."""
    try:
        import cairosvg
    except (ImportError, OSError) as exc:
        raise RasterizationUnavailable(f"CairoSVG could not be loaded: {exc}") from exc
    return cairosvg.svg2png
