"""Visualizer: render lifecycle over one container."""
from .dispatcher import LOADING_TEXT, RenderState, Visualizer

__all__ = ["LOADING_TEXT", "RenderState", "Visualizer"]
