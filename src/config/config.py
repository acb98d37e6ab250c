"""
Load .env from project root; expose engine settings (delays, export scale, canvas, palette).
Call load_env() before using in main or other modules.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping


def _project_root() -> Path:
    """Project root (directory containing src/, main.py)."""
    p = Path(__file__).resolve()
    # src/config/config.py -> two levels up
    for _ in range(3):
        p = p.parent
        if (p / "main.py").is_file() or (p / "src").is_dir():
            return p
    return Path.cwd()


def load_env() -> None:
    """Load env vars from project root .env if present."""
    root = _project_root()
    env_file = root / ".env"
    if not env_file.is_file():
        return
    for line in env_file.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, _, v = line.partition("=")
        k, v = k.strip(), v.strip().strip("'\"")
        if k and v:
            os.environ.setdefault(k, v)


def _env_number(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def get_output_dir() -> Path:
    """Where exported images go; default <project_root>/output."""
    load_env()
    out = os.environ.get("OUTPUT_DIR")
    if out:
        return Path(out)
    return _project_root() / "output"


def get_min_display_seconds() -> float:
    """Loading placeholder floor (DIAGRAM_MIN_DISPLAY_MS, default 500ms)."""
    load_env()
    return max(0.0, _env_number("DIAGRAM_MIN_DISPLAY_MS", 500) / 1000.0)


def get_export_scale() -> float:
    """Linear rasterization scale (EXPORT_SCALE, default 2)."""
    load_env()
    scale = _env_number("EXPORT_SCALE", 2)
    if scale <= 0:
        raise ValueError(f"EXPORT_SCALE must be positive, got {scale}")
    return scale


def get_export_settle_seconds() -> float:
    """Settle delay before direct rasterize (EXPORT_SETTLE_MS, default 300ms)."""
    load_env()
    return max(0.0, _env_number("EXPORT_SETTLE_MS", 300) / 1000.0)


def get_clone_settle_seconds() -> float:
    """Settle delay before isolated-clone rasterize (EXPORT_CLONE_SETTLE_MS, default 500ms)."""
    load_env()
    return max(0.0, _env_number("EXPORT_CLONE_SETTLE_MS", 500) / 1000.0)


def get_canvas_width() -> int:
    """Width of the display surface handed to box layouts (CANVAS_WIDTH, default 800)."""
    load_env()
    return int(_env_number("CANVAS_WIDTH", 800))


def get_font_path() -> str | None:
    """Optional TrueType font for rasterized text (DIAGRAM_FONT)."""
    load_env()
    return os.environ.get("DIAGRAM_FONT") or None


def _frozen(mapping: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Palette:
    """Default colour roles; a description's own style record overrides these per field."""

    primary: str = "#4a90e2"
    secondary: str = "#f8f9fa"
    accent: str = "#e74c3c"
    text: str = "#333333"
    background: str = "#f5f5f5"
    line: str = "#666666"
    node: str = "#4a90e2"
    event: str = "#28a745"
    heading: str = "#2c3e50"
    muted: str = "#666666"
    track: str = "#e9ecef"
    grid: str = "#dddddd"
    export_background: str = "#ffffff"
    comparison: tuple[str, ...] = ("#007bff", "#28a745")
    hierarchy_levels: tuple[str, ...] = (
        "#2c3e50",
        "#3498db",
        "#e74c3c",
        "#f39c12",
        "#9b59b6",
        "#1abc9c",
    )
    flow_nodes: Mapping[str, str] = field(
        default_factory=lambda: _frozen(
            {"start": "#28a745", "process": "#007bff", "decision": "#ffc107", "end": "#dc3545"}
        )
    )


@dataclass(frozen=True)
class EngineConfig:
    """Immutable engine settings passed to the Visualizer and export pipeline."""

    palette: Palette = field(default_factory=Palette)
    canvas_width: int = 800
    min_display_seconds: float = 0.5
    export_scale: float = 2.0
    settle_seconds: float = 0.3
    clone_settle_seconds: float = 0.5
    font_path: str | None = None

    @classmethod
    def from_env(cls, palette: Palette | None = None) -> "EngineConfig":
        return cls(
            palette=palette or Palette(),
            canvas_width=get_canvas_width(),
            min_display_seconds=get_min_display_seconds(),
            export_scale=get_export_scale(),
            settle_seconds=get_export_settle_seconds(),
            clone_settle_seconds=get_clone_settle_seconds(),
            font_path=get_font_path(),
        )
