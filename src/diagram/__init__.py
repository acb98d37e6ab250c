"""Diagram descriptions: typed variants, parsing, error taxonomy."""
from .errors import (
    DiagramError,
    RenderError,
    DescriptionError,
    ContainerUnavailable,
    RasterizationUnavailable,
    ExportError,
)
from .schema import (
    DIAGRAM_TYPES,
    Connection,
    Diagram,
    DiagramStyle,
    MindmapNode,
    MindmapDiagram,
    FlowNode,
    FlowchartDiagram,
    TimelineEvent,
    TimelineDiagram,
    Feature,
    ComparisonItem,
    ComparisonDiagram,
    HierarchyNode,
    HierarchyDiagram,
    HeaderSection,
    StatItem,
    StatsSection,
    ChartDatum,
    ChartSection,
    TextSection,
    InfographicDiagram,
    UnknownDiagram,
    parse_description,
)

__all__ = [
    "DiagramError",
    "RenderError",
    "DescriptionError",
    "ContainerUnavailable",
    "RasterizationUnavailable",
    "ExportError",
    "DIAGRAM_TYPES",
    "Connection",
    "Diagram",
    "DiagramStyle",
    "MindmapNode",
    "MindmapDiagram",
    "FlowNode",
    "FlowchartDiagram",
    "TimelineEvent",
    "TimelineDiagram",
    "Feature",
    "ComparisonItem",
    "ComparisonDiagram",
    "HierarchyNode",
    "HierarchyDiagram",
    "HeaderSection",
    "StatItem",
    "StatsSection",
    "ChartDatum",
    "ChartSection",
    "TextSection",
    "InfographicDiagram",
    "UnknownDiagram",
    "parse_description",
]
