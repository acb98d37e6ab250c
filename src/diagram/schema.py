"""
Typed diagram descriptions: one frozen dataclass per diagram type plus a degraded
UnknownDiagram for unrecognised tags. parse_description() turns the JSON-like mapping
produced by the text-to-structure step into one of these, raising DescriptionError
with a dotted field path when the payload does not match its tag.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from PIL import ImageColor

from .errors import DescriptionError

MINDMAP = "mindmap"
FLOWCHART = "flowchart"
TIMELINE = "timeline"
COMPARISON = "comparison"
HIERARCHY = "hierarchy"
INFOGRAPHIC = "infographic"

DIAGRAM_TYPES = (MINDMAP, FLOWCHART, TIMELINE, COMPARISON, HIERARCHY, INFOGRAPHIC)
FLOW_KINDS = ("start", "process", "decision", "end")
CHART_KINDS = ("progress", "bar")


@dataclass(frozen=True)
class DiagramStyle:
    """Colour roles from the description; None means 'use the palette default'."""

    background: str | None = None
    node: str | None = None
    text: str | None = None
    line: str | None = None
    primary: str | None = None
    secondary: str | None = None
    accent: str | None = None
    event: str | None = None
    node_colors: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Connection:
    source: str
    target: str
    label: str = ""


@dataclass(frozen=True)
class MindmapNode:
    id: str
    label: str
    x: float
    y: float
    parent: str | None = None
    level: int = 1


@dataclass(frozen=True)
class MindmapDiagram:
    center: MindmapNode
    nodes: tuple[MindmapNode, ...] = ()
    connections: tuple[Connection, ...] = ()
    title: str = ""
    style: DiagramStyle = field(default_factory=DiagramStyle)
    type: str = MINDMAP


@dataclass(frozen=True)
class FlowNode:
    id: str
    label: str
    kind: str
    x: float
    y: float


@dataclass(frozen=True)
class FlowchartDiagram:
    nodes: tuple[FlowNode, ...]
    connections: tuple[Connection, ...] = ()
    title: str = ""
    style: DiagramStyle = field(default_factory=DiagramStyle)
    type: str = FLOWCHART


@dataclass(frozen=True)
class TimelineEvent:
    id: str
    date: str
    title: str
    description: str = ""


@dataclass(frozen=True)
class TimelineDiagram:
    events: tuple[TimelineEvent, ...]
    title: str = ""
    style: DiagramStyle = field(default_factory=DiagramStyle)
    type: str = TIMELINE


@dataclass(frozen=True)
class Feature:
    name: str
    value: str
    score: float


@dataclass(frozen=True)
class ComparisonItem:
    id: str
    title: str
    features: tuple[Feature, ...]


@dataclass(frozen=True)
class ComparisonDiagram:
    items: tuple[ComparisonItem, ...]
    title: str = ""
    style: DiagramStyle = field(default_factory=DiagramStyle)
    type: str = COMPARISON


@dataclass(frozen=True)
class HierarchyNode:
    id: str
    label: str
    level: int = 0
    parent: str | None = None
    children: tuple[str, ...] = ()


@dataclass(frozen=True)
class HierarchyDiagram:
    nodes: tuple[HierarchyNode, ...]
    connections: tuple[Connection, ...] = ()
    title: str = ""
    style: DiagramStyle = field(default_factory=DiagramStyle)
    type: str = HIERARCHY


@dataclass(frozen=True)
class HeaderSection:
    content: str
    background: str | None = None
    color: str | None = None
    type: str = "header"


@dataclass(frozen=True)
class StatItem:
    label: str
    value: str
    unit: str = ""


@dataclass(frozen=True)
class StatsSection:
    items: tuple[StatItem, ...]
    type: str = "stats"


@dataclass(frozen=True)
class ChartDatum:
    label: str
    value: float


@dataclass(frozen=True)
class ChartSection:
    data: tuple[ChartDatum, ...]
    chart_type: str = "progress"
    type: str = "chart"


@dataclass(frozen=True)
class TextSection:
    content: str
    type: str = "text"


Section = Union[HeaderSection, StatsSection, ChartSection, TextSection]


@dataclass(frozen=True)
class InfographicDiagram:
    sections: tuple[Section, ...]
    title: str = ""
    style: DiagramStyle = field(default_factory=DiagramStyle)
    type: str = INFOGRAPHIC


@dataclass(frozen=True)
class UnknownDiagram:
    """Description whose tag is not one of DIAGRAM_TYPES; rendered as a raw data preview."""

    type: str
    raw: Mapping[str, Any]
    title: str = ""


Diagram = Union[
    MindmapDiagram,
    FlowchartDiagram,
    TimelineDiagram,
    ComparisonDiagram,
    HierarchyDiagram,
    InfographicDiagram,
    UnknownDiagram,
]


# --- field readers -----------------------------------------------------------


def _mapping(obj: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(obj, Mapping):
        raise DescriptionError(path, f"expected an object, got {type(obj).__name__}")
    return obj


def _require(data: Mapping[str, Any], key: str, path: str) -> Any:
    if key not in data or data[key] is None:
        raise DescriptionError(_join(path, key), "required field is missing")
    return data[key]


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _text(value: Any, path: str) -> str:
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    raise DescriptionError(path, f"expected text, got {type(value).__name__}")


def _color(value: Any, path: str) -> str:
    """A colour the painter and SVG output both understand: hex, rgb()/hsl() or a CSS name."""
    if not isinstance(value, str):
        raise DescriptionError(path, f"expected a colour string, got {type(value).__name__}")
    if value.strip().lower() not in ("none", "transparent"):
        try:
            ImageColor.getrgb(value)
        except ValueError:
            raise DescriptionError(path, f"not a colour: {value!r}") from None
    return value


def _number(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DescriptionError(path, f"expected a number, got {value!r}")
    return float(value)


def _list(data: Mapping[str, Any], key: str, path: str, *, required: bool = True) -> list[Any]:
    if required:
        value = _require(data, key, path)
    else:
        value = data.get(key) or []
    if not isinstance(value, (list, tuple)):
        raise DescriptionError(_join(path, key), "expected a list")
    return list(value)


def _label(data: Mapping[str, Any], path: str) -> str:
    """Node text is accepted as `label` or `text`."""
    for key in ("label", "text"):
        if data.get(key) is not None:
            return _text(data[key], _join(path, key))
    raise DescriptionError(_join(path, "label"), "required field is missing")


def _optional_id(data: Mapping[str, Any], key: str, path: str) -> str | None:
    value = data.get(key)
    if value is None or value == "":
        return None
    return _text(value, _join(path, key))


def _parse_style(raw: Any) -> DiagramStyle:
    if raw is None:
        return DiagramStyle()
    data = _mapping(raw, "style")
    colors = data.get("nodeColors") or {}
    _mapping(colors, "style.nodeColors")

    def pick(key: str) -> str | None:
        value = data.get(key)
        return _color(value, f"style.{key}") if value else None

    return DiagramStyle(
        background=pick("backgroundColor"),
        node=pick("nodeColor"),
        text=pick("textColor"),
        line=pick("lineColor"),
        primary=pick("primaryColor"),
        secondary=pick("secondaryColor"),
        accent=pick("accentColor"),
        event=pick("eventColor"),
        node_colors={str(k): _color(v, f"style.nodeColors.{k}") for k, v in colors.items()},
    )


def _parse_connections(data: Mapping[str, Any]) -> tuple[Connection, ...]:
    out = []
    for i, raw in enumerate(_list(data, "connections", "", required=False)):
        path = f"connections[{i}]"
        conn = _mapping(raw, path)
        out.append(
            Connection(
                source=_text(_require(conn, "from", path), f"{path}.from"),
                target=_text(_require(conn, "to", path), f"{path}.to"),
                label=_text(conn.get("label") or "", f"{path}.label"),
            )
        )
    return tuple(out)


# --- per-type parsers ----------------------------------------------------------


def _parse_mindmap_node(raw: Any, path: str) -> MindmapNode:
    data = _mapping(raw, path)
    if data.get("x") is None or data.get("y") is None:
        raise DescriptionError(_join(path, "x"), "mindmap nodes need author-supplied coordinates")
    level = data.get("level", 1)
    return MindmapNode(
        id=_text(_require(data, "id", path), _join(path, "id")),
        label=_label(data, path),
        x=_number(data["x"], _join(path, "x")),
        y=_number(data["y"], _join(path, "y")),
        parent=_optional_id(data, "parent", path),
        level=int(_number(level, _join(path, "level"))),
    )


def _parse_mindmap(data: Mapping[str, Any]) -> MindmapDiagram:
    center = _parse_mindmap_node(_require(data, "centerNode", ""), "centerNode")
    nodes = tuple(
        _parse_mindmap_node(raw, f"nodes[{i}]")
        for i, raw in enumerate(_list(data, "nodes", "", required=False))
    )
    return MindmapDiagram(
        center=center,
        nodes=nodes,
        connections=_parse_connections(data),
        title=_text(data.get("title") or "", "title"),
        style=_parse_style(data.get("style")),
    )


def _parse_flowchart(data: Mapping[str, Any]) -> FlowchartDiagram:
    nodes = []
    for i, raw in enumerate(_list(data, "nodes", "")):
        path = f"nodes[{i}]"
        node = _mapping(raw, path)
        kind = _text(node.get("kind") or node.get("type") or "process", _join(path, "kind"))
        if kind not in FLOW_KINDS:
            raise DescriptionError(_join(path, "kind"), f"unknown node kind {kind!r}")
        nodes.append(
            FlowNode(
                id=_text(_require(node, "id", path), _join(path, "id")),
                label=_label(node, path),
                kind=kind,
                x=_number(_require(node, "x", path), _join(path, "x")),
                y=_number(_require(node, "y", path), _join(path, "y")),
            )
        )
    return FlowchartDiagram(
        nodes=tuple(nodes),
        connections=_parse_connections(data),
        title=_text(data.get("title") or "", "title"),
        style=_parse_style(data.get("style")),
    )


def _parse_timeline(data: Mapping[str, Any]) -> TimelineDiagram:
    events = []
    for i, raw in enumerate(_list(data, "events", "")):
        path = f"events[{i}]"
        ev = _mapping(raw, path)
        events.append(
            TimelineEvent(
                id=_text(ev.get("id") if ev.get("id") is not None else i + 1, _join(path, "id")),
                date=_text(_require(ev, "date", path), _join(path, "date")),
                title=_text(_require(ev, "title", path), _join(path, "title")),
                description=_text(ev.get("description") or "", _join(path, "description")),
            )
        )
    return TimelineDiagram(
        events=tuple(events),
        title=_text(data.get("title") or "", "title"),
        style=_parse_style(data.get("style")),
    )


def _parse_comparison(data: Mapping[str, Any]) -> ComparisonDiagram:
    items = []
    for i, raw in enumerate(_list(data, "items", "")):
        path = f"items[{i}]"
        item = _mapping(raw, path)
        features = []
        for k, fraw in enumerate(_list(item, "features", path)):
            fpath = f"{path}.features[{k}]"
            feat = _mapping(fraw, fpath)
            score = _number(feat.get("score", 0) or 0, _join(fpath, "score"))
            if not 0 <= score <= 10:
                raise DescriptionError(_join(fpath, "score"), f"score must be within 0..10, got {score}")
            features.append(
                Feature(
                    name=_text(_require(feat, "name", fpath), _join(fpath, "name")),
                    value=_text(feat.get("value") or "", _join(fpath, "value")),
                    score=score,
                )
            )
        items.append(
            ComparisonItem(
                id=_text(item.get("id") if item.get("id") is not None else f"item{i + 1}", _join(path, "id")),
                title=_text(_require(item, "title", path), _join(path, "title")),
                features=tuple(features),
            )
        )
    return ComparisonDiagram(
        items=tuple(items),
        title=_text(data.get("title") or "", "title"),
        style=_parse_style(data.get("style")),
    )


def _parse_hierarchy(data: Mapping[str, Any]) -> HierarchyDiagram:
    nodes = []
    for i, raw in enumerate(_list(data, "nodes", "")):
        path = f"nodes[{i}]"
        node = _mapping(raw, path)
        level_raw = node.get("level") or 0
        level = _number(level_raw, _join(path, "level"))
        if level < 0 or level != int(level):
            raise DescriptionError(_join(path, "level"), f"level must be an integer >= 0, got {level_raw!r}")
        children = node.get("children") or []
        if not isinstance(children, (list, tuple)):
            raise DescriptionError(_join(path, "children"), "expected a list")
        nodes.append(
            HierarchyNode(
                id=_text(_require(node, "id", path), _join(path, "id")),
                label=_label(node, path),
                level=int(level),
                parent=_optional_id(node, "parent", path),
                children=tuple(_text(c, f"{path}.children[{k}]") for k, c in enumerate(children)),
            )
        )
    return HierarchyDiagram(
        nodes=tuple(nodes),
        connections=_parse_connections(data),
        title=_text(data.get("title") or "", "title"),
        style=_parse_style(data.get("style")),
    )


def _parse_section(raw: Any, path: str) -> Section:
    data = _mapping(raw, path)
    kind = data.get("type")
    if kind == "header":
        spath = _join(path, "style")
        style = _mapping(data.get("style") or {}, spath)
        background, color = style.get("backgroundColor"), style.get("color")
        return HeaderSection(
            content=_text(_require(data, "content", path), _join(path, "content")),
            background=_color(background, _join(spath, "backgroundColor")) if background else None,
            color=_color(color, _join(spath, "color")) if color else None,
        )
    if kind == "stats":
        items = []
        for k, iraw in enumerate(_list(data, "items", path)):
            ipath = f"{path}.items[{k}]"
            item = _mapping(iraw, ipath)
            items.append(
                StatItem(
                    label=_text(_require(item, "label", ipath), _join(ipath, "label")),
                    value=_text(_require(item, "value", ipath), _join(ipath, "value")),
                    unit=_text(item.get("unit") or "", _join(ipath, "unit")),
                )
            )
        return StatsSection(items=tuple(items))
    if kind == "chart":
        chart_type = _text(data.get("chartType") or "progress", _join(path, "chartType"))
        if chart_type not in CHART_KINDS:
            raise DescriptionError(_join(path, "chartType"), f"unsupported chart type {chart_type!r}")
        points = []
        for k, draw in enumerate(_list(data, "data", path)):
            dpath = f"{path}.data[{k}]"
            datum = _mapping(draw, dpath)
            points.append(
                ChartDatum(
                    label=_text(_require(datum, "label", dpath), _join(dpath, "label")),
                    value=_number(_require(datum, "value", dpath), _join(dpath, "value")),
                )
            )
        return ChartSection(data=tuple(points), chart_type=chart_type)
    if kind == "text":
        return TextSection(content=_text(_require(data, "content", path), _join(path, "content")))
    raise DescriptionError(_join(path, "type"), f"unknown section type {kind!r}")


def _parse_infographic(data: Mapping[str, Any]) -> InfographicDiagram:
    sections = tuple(
        _parse_section(raw, f"sections[{i}]") for i, raw in enumerate(_list(data, "sections", ""))
    )
    return InfographicDiagram(
        sections=sections,
        title=_text(data.get("title") or "", "title"),
        style=_parse_style(data.get("style")),
    )


_PARSERS = {
    MINDMAP: _parse_mindmap,
    FLOWCHART: _parse_flowchart,
    TIMELINE: _parse_timeline,
    COMPARISON: _parse_comparison,
    HIERARCHY: _parse_hierarchy,
    INFOGRAPHIC: _parse_infographic,
}


def parse_description(raw: Mapping[str, Any]) -> Diagram:
    """
    Build a typed Diagram from a JSON-like mapping.
    An unrecognised `type` yields UnknownDiagram; a known tag with a mismatched payload raises DescriptionError.
    """
    data = _mapping(raw, "description")
    tag = data.get("type")
    parser = _PARSERS.get(tag) if isinstance(tag, str) else None
    if parser is None:
        return UnknownDiagram(type=str(tag), raw=dict(data), title=str(data.get("title") or ""))
    return parser(data)
