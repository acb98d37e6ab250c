"""
Visualizer: owns one render container and drives a render pass through
Idle -> Loading -> Rendered / Failed. Every render call goes back through Loading,
whatever state the previous call left behind.
"""
from __future__ import annotations

import asyncio
import enum
import logging
import time
from typing import Any, Mapping

from ..config import EngineConfig
from ..diagram.errors import ContainerUnavailable
from ..diagram.schema import Diagram, parse_description
from ..renderers import render_diagram
from ..scene.document import DEFAULT_CONTAINER_ID, Document
from ..scene.elements import Box, Container, Text, composition

logger = logging.getLogger(__name__)

LOADING_TEXT = "Drawing visualization..."


class RenderState(enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    RENDERED = "rendered"
    FAILED = "failed"


class Visualizer:
    def __init__(
        self,
        container_id: str = DEFAULT_CONTAINER_ID,
        document: Document | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.container_id = container_id
        self.document = document if document is not None else Document()
        self.config = config or EngineConfig()
        self.state = RenderState.IDLE
        self.error: Exception | None = None
        self.diagram: Diagram | None = None
        self.container = self._lookup()
        if self.container is None:
            logger.warning("Container %r not found yet; will retry on render", container_id)

    def _lookup(self) -> Container | None:
        el = self.document.get_element_by_id(self.container_id)
        return el if isinstance(el, Container) else None

    def resolve_container(self) -> Container:
        """Re-resolve the container lazily; a miss at render/export time is fatal."""
        if self.container is None or not self.document.contains(self.container):
            self.container = self._lookup()
        if self.container is None:
            raise ContainerUnavailable(f"Container element not found: {self.container_id}")
        return self.container

    def _show_loading(self, container: Container) -> None:
        container.clear()
        container.append(
            Box(classes=["loading-visualization"], width=container.width, height=80)
        ).append(Text(x=container.width / 2, y=40, text=LOADING_TEXT, size=16, color=self.config.palette.muted,
                      anchor="middle", baseline="middle"))

    def _show_error(self, container: Container, exc: Exception) -> None:
        container.clear()
        box = container.append(
            Box(classes=["error-message"], width=container.width, height=60, background="#f8d7da",
                border_color="#f5c6cb", border_width=1, radius=8)
        )
        box.append(Text(x=20, y=30, text=f"Render failed: {exc}", size=14, color="#721c24", baseline="middle"))

    async def render(self, description: Diagram | Mapping[str, Any]) -> Container:
        """
        Show the loading placeholder for at least min_display_seconds, then replace the
        container content with the rendered diagram. Raw mappings are parsed first.
        Errors leave the container showing a message, state FAILED, and propagate.
        """
        container = self.resolve_container()
        self.state = RenderState.LOADING
        self.error = None
        self._show_loading(container)
        await asyncio.sleep(self.config.min_display_seconds)
        container.clear()
        container.rendered_at = None
        try:
            diagram = description if not isinstance(description, Mapping) else parse_description(description)
            logger.info("Rendering %s diagram", diagram.type)
            render_diagram(diagram, container, self.config.palette, self.config.canvas_width)
        except Exception as exc:
            logger.error("Render failed: %s", exc)
            self.state = RenderState.FAILED
            self.error = exc
            self._show_error(container, exc)
            raise
        self.diagram = diagram
        container.rendered_at = time.monotonic()
        self.state = RenderState.RENDERED
        logger.debug("Rendered %s: %s", diagram.type, dict(composition(container)))
        return container

    def clear(self) -> None:
        container = self.resolve_container()
        container.clear()
        container.rendered_at = None
        self.diagram = None
        self.state = RenderState.IDLE

    def composition(self) -> dict[str, int]:
        return dict(composition(self.resolve_container()))
