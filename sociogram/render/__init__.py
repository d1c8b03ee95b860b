"""
Render module for Sociogram.

This module draws encoded nodes and edges onto a canvas-like surface.
"""

from sociogram.render.canvas import (
    Canvas,
    SvgCanvas,
    draw_edge,
    draw_node,
    render_view,
)

__all__ = [
    "Canvas",
    "SvgCanvas",
    "draw_edge",
    "draw_node",
    "render_view",
]
