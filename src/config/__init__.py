"""Config: load .env, expose engine delays, export scale, canvas width and palette."""
from .config import (
    EngineConfig,
    Palette,
    load_env,
    get_output_dir,
    get_min_display_seconds,
    get_export_scale,
    get_export_settle_seconds,
    get_clone_settle_seconds,
    get_canvas_width,
    get_font_path,
)

__all__ = [
    "EngineConfig",
    "Palette",
    "load_env",
    "get_output_dir",
    "get_min_display_seconds",
    "get_export_scale",
    "get_export_settle_seconds",
    "get_clone_settle_seconds",
    "get_canvas_width",
    "get_font_path",
]
