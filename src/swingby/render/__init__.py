"""Rendering helpers for the gravity-assist simulator."""

from .assets import get_text_surface, load_font
from .draw import (
    body_pixel_radius,
    draw_aim_line,
    draw_axes,
    draw_body,
    draw_ghost,
    draw_trail,
    format_gigameters,
)
from .graph import draw_speed_graph, graph_points, plot_area, time_axis_unit
from .ui import Button, ButtonVisualStyle, draw_text_lines, wrap_text

__all__ = [
    "Button",
    "ButtonVisualStyle",
    "body_pixel_radius",
    "draw_aim_line",
    "draw_axes",
    "draw_body",
    "draw_ghost",
    "draw_speed_graph",
    "draw_text_lines",
    "draw_trail",
    "format_gigameters",
    "get_text_surface",
    "graph_points",
    "load_font",
    "plot_area",
    "time_axis_unit",
    "wrap_text",
]
