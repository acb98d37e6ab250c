"""Error taxonomy for rendering and export."""
from __future__ import annotations


class DiagramError(Exception):
    """Base class for engine errors."""


class RenderError(DiagramError):
    """A render pass could not produce a scene."""


class DescriptionError(RenderError):
    """Malformed or tag-mismatched diagram description; `field` names the offending path."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")


class ContainerUnavailable(DiagramError):
    """The render target could not be resolved."""


class RasterizationUnavailable(DiagramError):
    """The raster backend could not be loaded."""


class ExportError(DiagramError):
    """A specific export strategy could not produce an image."""

    def __init__(self, strategy: str, message: str) -> None:
        self.strategy = strategy
        super().__init__(f"{strategy} export failed: {message}")
