"""
In-memory document: a body holding a scroll area that hosts the render container.
Lookup by id lets callers hand the engine a container identifier instead of a reference.
"""
from __future__ import annotations

from .elements import Box, Container, Element, ScrollArea

DEFAULT_CONTAINER_ID = "visualization-container"


class Document:
    def __init__(self, body: Box | None = None) -> None:
        self.body = body if body is not None else Box(attrs={"id": "body"})

    def get_element_by_id(self, element_id: str) -> Element | None:
        for el in self.body.walk():
            if el.element_id == element_id:
                return el
        return None

    def append(self, element: Element) -> Element:
        return self.body.append(element)

    def remove(self, element: Element) -> None:
        if element.parent is self.body:
            self.body.remove(element)

    def contains(self, element: Element) -> bool:
        return any(el is element for el in self.body.walk())


def build_page(
    container_id: str = DEFAULT_CONTAINER_ID,
    *,
    width: float = 800,
    viewport_height: float | None = 600,
) -> Document:
    """Document with body -> scroll area ('output-canvas') -> container."""
    doc = Document()
    viewport = ScrollArea(
        classes=["output-canvas"],
        width=width,
        overflow="auto",
        style_height=viewport_height,
    )
    viewport.append(Container(attrs={"id": container_id}, width=width))
    doc.append(viewport)
    return doc
