#!/usr/bin/env python3
"""
Root entry: diagram description JSON -> render into an in-memory page -> export PNG.
Supports --strategy (force one export strategy) and --html (also write a scene preview).
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from src.config import EngineConfig, get_output_dir, load_env
from src.diagram import DiagramError, ExportError, RasterizationUnavailable
from src.export import STRATEGIES, export_filename, export_with, smart_export
from src.scene import DEFAULT_CONTAINER_ID, build_page, render_scene_html
from src.visualizer import Visualizer

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def _load_description(path: Path) -> dict:
    """Read a description file; the top level must be a JSON object."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path.name}: expected a JSON object at the top level")
    return data


async def _render_and_export(
    description: dict,
    config: EngineConfig,
    strategy: str,
    container_id: str,
) -> tuple[str, bytes, Visualizer]:
    document = build_page(container_id, width=config.canvas_width)
    visualizer = Visualizer(container_id, document, config)
    container = await visualizer.render(description)
    logger.info("Rendered %s: %s", visualizer.diagram.type, visualizer.composition())
    if strategy == "auto":
        result = await smart_export(container, config)
        return result.strategy, result.png, visualizer
    return strategy, await export_with(strategy, container, config), visualizer


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Render a diagram description (JSON) and export it as a PNG image."
    )
    parser.add_argument("description", type=Path, help="Path to the diagram description JSON file")
    parser.add_argument(
        "--strategy",
        choices=("auto",) + STRATEGIES,
        default="auto",
        help="Export strategy; auto picks vector for lone drawings and direct otherwise",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output directory (default: OUTPUT_DIR or <project>/output)",
    )
    parser.add_argument(
        "--html",
        action="store_true",
        help="Also write a standalone HTML preview of the rendered scene next to the PNG",
    )
    parser.add_argument(
        "--container",
        metavar="ID",
        default=DEFAULT_CONTAINER_ID,
        help="Id of the render container in the page",
    )
    args = parser.parse_args()

    load_env()
    try:
        config = EngineConfig.from_env()
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 1
    out_dir = args.out or get_output_dir()

    if not args.description.is_file():
        logger.error("Description file not found: %s", args.description)
        return 1
    try:
        description = _load_description(args.description)
    except ValueError as e:
        logger.error("Cannot read description: %s", e)
        return 1

    try:
        strategy, png, visualizer = asyncio.run(
            _render_and_export(description, config, args.strategy, args.container)
        )
    except (ExportError, RasterizationUnavailable) as e:
        logger.error("Export failed: %s", e)
        others = [s for s in STRATEGIES if s != args.strategy]
        logger.error("Retry with one of: %s", ", ".join(f"--strategy {s}" for s in others))
        return 1
    except DiagramError as e:
        logger.error("Render failed: %s", e)
        return 1

    out_dir.mkdir(parents=True, exist_ok=True)
    png_path = out_dir / export_filename()
    png_path.write_bytes(png)
    logger.info("Exported with %s strategy: %s (%d bytes)", strategy, png_path, len(png))

    if args.html:
        html_path = render_scene_html(
            visualizer.resolve_container(),
            png_path.with_suffix(".html"),
            title=visualizer.diagram.title or "Visualization",
        )
        logger.info("Scene preview: %s", html_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
