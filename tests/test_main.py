"""Tests for main entry and helpers."""
from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parent.parent


def _run_main(args: list[str], **env_overrides: str) -> subprocess.CompletedProcess:
    """Run main.py with zero delays and 1x export; return CompletedProcess."""
    env = {**os.environ, "DIAGRAM_MIN_DISPLAY_MS": "0", "EXPORT_SETTLE_MS": "0",
           "EXPORT_CLONE_SETTLE_MS": "0", "EXPORT_SCALE": "1", **env_overrides}
    return subprocess.run(
        [sys.executable, "main.py"] + args,
        cwd=_ROOT,
        capture_output=True,
        text=True,
        env=env,
    )


def _write(tmp_path: Path, data) -> Path:
    path = tmp_path / "diagram.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_description_requires_object(tmp_path: Path) -> None:
    from main import _load_description

    assert _load_description(_write(tmp_path, {"type": "timeline"})) == {"type": "timeline"}
    with pytest.raises(ValueError, match="JSON object"):
        _load_description(_write(tmp_path, [1, 2]))


def test_main_help_exits_zero() -> None:
    """python main.py --help exits with 0."""
    result = subprocess.run(
        [sys.executable, "main.py", "--help"],
        cwd=_ROOT,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "--strategy" in result.stdout
    assert "--html" in result.stdout


def test_main_exports_png(tmp_path: Path, timeline_data) -> None:
    out = tmp_path / "out"
    result = _run_main([str(_write(tmp_path, timeline_data)), "--strategy", "direct", "--out", str(out)])
    assert result.returncode == 0, result.stderr
    pngs = list(out.glob("visualization-*.png"))
    assert len(pngs) == 1
    assert pngs[0].read_bytes().startswith(b"\x89PNG")
    assert "direct" in result.stderr


def test_main_writes_html_preview(tmp_path: Path, infographic_data) -> None:
    out = tmp_path / "out"
    result = _run_main([str(_write(tmp_path, infographic_data)), "--strategy", "clone", "--out", str(out), "--html"])
    assert result.returncode == 0, result.stderr
    (html,) = out.glob("visualization-*.html")
    assert "Quarterly report" in html.read_text(encoding="utf-8")


def test_main_auto_strategy_uses_output_dir_env(tmp_path: Path, comparison_data) -> None:
    out = tmp_path / "env-out"
    result = _run_main([str(_write(tmp_path, comparison_data))], OUTPUT_DIR=str(out))
    assert result.returncode == 0, result.stderr
    assert len(list(out.glob("*.png"))) == 1


def test_main_missing_file(tmp_path: Path) -> None:
    result = _run_main([str(tmp_path / "nope.json")])
    assert result.returncode == 1
    assert "not found" in result.stderr.lower()


def test_main_invalid_description(tmp_path: Path, hierarchy_data) -> None:
    hierarchy_data["nodes"][1]["level"] = -3
    result = _run_main([str(_write(tmp_path, hierarchy_data)), "--out", str(tmp_path / "out")])
    assert result.returncode == 1
    assert "nodes[1].level" in result.stderr
    assert not (tmp_path / "out").exists()


def test_main_invalid_config(tmp_path: Path, mindmap_data) -> None:
    result = _run_main([str(_write(tmp_path, mindmap_data))], EXPORT_SCALE="-1")
    assert result.returncode == 1
    assert "EXPORT_SCALE" in result.stderr
