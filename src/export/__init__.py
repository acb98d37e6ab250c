"""Export: rendered container -> PNG via vector, direct or isolated-clone rasterization."""
from .loader import RasterBackend, load_raster_backend, load_svg_rasterizer
from .painter import ScenePainter, encode_png, flatten_path
from .strategies import (
    VECTOR,
    DIRECT,
    CLONE,
    STRATEGIES,
    BOX_LAYOUT_MARKERS,
    ExportResult,
    choose_strategy,
    export_clone,
    export_direct,
    export_vector,
    export_with,
    smart_export,
    unclipped,
    visible_region,
    animations_finish,
)
from .naming import export_filename

__all__ = [
    "RasterBackend",
    "load_raster_backend",
    "load_svg_rasterizer",
    "ScenePainter",
    "encode_png",
    "flatten_path",
    "VECTOR",
    "DIRECT",
    "CLONE",
    "STRATEGIES",
    "BOX_LAYOUT_MARKERS",
    "ExportResult",
    "choose_strategy",
    "export_clone",
    "export_direct",
    "export_vector",
    "export_with",
    "smart_export",
    "unclipped",
    "visible_region",
    "animations_finish",
    "export_filename",
]
