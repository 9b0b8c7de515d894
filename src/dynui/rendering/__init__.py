"""Rendering adapter interface and the reference dict renderer."""

from .renderer import Renderer, PROP_HANDLERS, render_tree, TreeRenderer

__all__ = ["Renderer", "PROP_HANDLERS", "render_tree", "TreeRenderer"]
