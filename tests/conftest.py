"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import pytest

from src.config import EngineConfig

ENGINE_ENV = (
    "DIAGRAM_MIN_DISPLAY_MS",
    "EXPORT_SCALE",
    "EXPORT_SETTLE_MS",
    "EXPORT_CLONE_SETTLE_MS",
    "CANVAS_WIDTH",
    "DIAGRAM_FONT",
    "OUTPUT_DIR",
)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """Avoid picking up engine settings from the caller's environment."""
    for key in ENGINE_ENV:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def fast_config() -> EngineConfig:
    """No loading floor or settle delays; 1x export keeps images small."""
    return EngineConfig(
        min_display_seconds=0.0,
        export_scale=1.0,
        settle_seconds=0.0,
        clone_settle_seconds=0.0,
    )


@pytest.fixture
def cairo_available() -> None:
    """Skip when CairoSVG or the native cairo library cannot be loaded."""
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError) as e:
        pytest.skip(f"cairosvg unavailable: {e}")


@pytest.fixture
def mindmap_data() -> dict:
    return {
        "type": "mindmap",
        "title": "Project plan",
        "centerNode": {"id": "center", "text": "Plan", "x": 400, "y": 300},
        "nodes": [
            {"id": "n1", "text": "Scope", "x": 200, "y": 150, "parent": "center", "level": 1},
            {"id": "n2", "text": "Budget", "x": 600, "y": 150, "parent": "center", "level": 1},
            {"id": "n3", "text": "Team", "x": 400, "y": 500, "parent": "center", "level": 1},
        ],
        "connections": [
            {"from": "center", "to": "n1"},
            {"from": "center", "to": "n2"},
            {"from": "center", "to": "n3"},
        ],
        "style": {"backgroundColor": "#f5f5f5", "nodeColor": "#4a90e2", "lineColor": "#666666"},
    }


@pytest.fixture
def flowchart_data() -> dict:
    return {
        "type": "flowchart",
        "title": "Approval",
        "nodes": [
            {"id": "start", "text": "Start", "type": "start", "x": 400, "y": 50},
            {"id": "check", "text": "Valid?", "type": "decision", "x": 400, "y": 200},
            {"id": "work", "text": "Process", "type": "process", "x": 400, "y": 350},
            {"id": "end", "text": "End", "type": "end", "x": 400, "y": 500},
        ],
        "connections": [
            {"from": "start", "to": "check"},
            {"from": "check", "to": "work", "label": "yes"},
            {"from": "work", "to": "end"},
        ],
    }


@pytest.fixture
def timeline_data() -> dict:
    return {
        "type": "timeline",
        "title": "History",
        "events": [
            {"id": "e1", "date": "2019", "title": "Founded", "description": "Company starts in a garage."},
            {"id": "e2", "date": "2020", "title": "First product", "description": "Launch of version one."},
            {"id": "e3", "date": "2021", "title": "Series A", "description": ""},
            {"id": "e4", "date": "2023", "title": "Expansion", "description": "Offices open in three countries."},
        ],
    }


@pytest.fixture
def comparison_data() -> dict:
    return {
        "type": "comparison",
        "title": "Phones",
        "items": [
            {
                "id": "a",
                "title": "Phone A",
                "features": [
                    {"name": "Battery", "value": "5000mAh", "score": 8},
                    {"name": "Camera", "value": "50MP", "score": 6},
                    {"name": "Price", "value": "$499", "score": 9},
                ],
            },
            {
                "id": "b",
                "title": "Phone B",
                "features": [
                    {"name": "Battery", "value": "4000mAh", "score": 7},
                    {"name": "Camera", "value": "108MP", "score": 9},
                    {"name": "Price", "value": "$899", "score": 5},
                ],
            },
        ],
    }


@pytest.fixture
def hierarchy_data() -> dict:
    return {
        "type": "hierarchy",
        "title": "Org chart",
        "nodes": [
            {"id": "ceo", "text": "CEO", "level": 0, "children": ["cto", "cfo"]},
            {"id": "cto", "text": "CTO", "level": 1, "parent": "ceo"},
            {"id": "cfo", "text": "CFO", "level": 1, "parent": "ceo"},
        ],
        "connections": [{"from": "ceo", "to": "cto"}, {"from": "ceo", "to": "cfo"}],
    }


@pytest.fixture
def infographic_data() -> dict:
    return {
        "type": "infographic",
        "title": "Quarterly report",
        "sections": [
            {"type": "header", "content": "Q3 results", "style": {"backgroundColor": "#2c3e50", "color": "#ffffff"}},
            {
                "type": "stats",
                "items": [
                    {"label": "Revenue", "value": "12", "unit": "M"},
                    {"label": "Users", "value": "340", "unit": "k"},
                    {"label": "NPS", "value": "61"},
                ],
            },
            {
                "type": "chart",
                "chartType": "progress",
                "data": [{"label": "Goal A", "value": 80}, {"label": "Goal B", "value": 45}],
            },
            {"type": "text", "content": "Growth was driven by the new onboarding flow."},
        ],
    }
