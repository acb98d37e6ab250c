"""Download filename for exported images."""
from __future__ import annotations

from datetime import datetime

PREFIX = "visualization"


def export_filename(now: datetime | None = None, prefix: str = PREFIX) -> str:
    """visualization-YYYY-MM-DDTHH-MM-SS.png"""
    stamp = (now or datetime.now()).strftime("%Y-%m-%dT%H-%M-%S")
    return f"{prefix}-{stamp}.png"
