from __future__ import annotations

from typing import Sequence, TYPE_CHECKING

import pygame

from swingby.core.history import TrailPoint
from swingby.core.model import Body, BodyRole
from swingby.core.vector import Vector2
from swingby.core.viewport import Viewport

from .assets import get_text_surface

if TYPE_CHECKING:  # pragma: no cover
    from swingby.core.config import PhysicsCfg, RenderCfg


def format_gigameters(value_km: float) -> str:
    return f"{value_km / 1e6:.1f} Gm"


def body_pixel_radius(body: Body, render_cfg: RenderCfg) -> int:
    if body.role is BodyRole.PRIMARY:
        return render_cfg.primary_pixel_radius
    return render_cfg.probe_pixel_radius


def draw_body(
    surface: pygame.Surface,
    viewport: Viewport,
    body: Body,
    *,
    render_cfg: RenderCfg,
) -> None:
    color = render_cfg.primary_color if body.role is BodyRole.PRIMARY else render_cfg.probe_color
    pygame.draw.circle(surface, color, viewport.to_pixel(body.position), body_pixel_radius(body, render_cfg))


def draw_ghost(
    surface: pygame.Surface,
    viewport: Viewport,
    point: Vector2,
    *,
    render_cfg: RenderCfg,
) -> None:
    pygame.draw.circle(
        surface,
        render_cfg.preview_color,
        viewport.to_pixel(point),
        render_cfg.probe_pixel_radius,
    )


def draw_aim_line(
    surface: pygame.Surface,
    start: tuple[int, int],
    end: tuple[int, int],
    *,
    render_cfg: RenderCfg,
) -> None:
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    pygame.draw.line(overlay, render_cfg.aim_line_color, start, end, 2)
    surface.blit(overlay, (0, 0))


def draw_trail(
    surface: pygame.Surface,
    viewport: Viewport,
    trail: Sequence[TrailPoint],
    *,
    render_cfg: RenderCfg,
) -> None:
    if not trail:
        return
    points = [viewport.to_pixel(Vector2(p.x, p.y)) for p in trail]
    if len(points) >= 2:
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        pygame.draw.lines(overlay, render_cfg.trail_color, False, points, 1)
        surface.blit(overlay, (0, 0))
    for point in points[:: render_cfg.trail_dot_interval]:
        pygame.draw.circle(surface, render_cfg.trail_dot_color, point, render_cfg.trail_dot_radius)


def draw_axes(
    surface: pygame.Surface,
    viewport: Viewport,
    *,
    physics_cfg: PhysicsCfg,
    render_cfg: RenderCfg,
    tick_font: pygame.font.Font,
) -> None:
    """Origin axes with ticks every eighth of the region, labelled in Gm."""

    width, height = surface.get_size()
    overlay = pygame.Surface((width, height), pygame.SRCALPHA)
    color = render_cfg.axis_color
    x0, y0 = viewport.to_pixel(Vector2(0.0, 0.0))
    pygame.draw.line(overlay, color, (x0, 0), (x0, height))
    pygame.draw.line(overlay, color, (0, y0), (width, y0))

    ticks = render_cfg.axis_ticks_per_side
    half = render_cfg.axis_tick_half_length
    interval_x = physics_cfg.region_width / (2 * ticks)
    interval_y = physics_cfg.region_height / (2 * ticks)
    label_color = render_cfg.axis_label_color
    alpha = render_cfg.axis_label_alpha

    for i in range(-ticks, ticks + 1):
        x_km = i * interval_x
        x_px, _ = viewport.to_pixel(Vector2(x_km, 0.0))
        pygame.draw.line(overlay, color, (x_px, y0 - half), (x_px, y0 + half))
        if i != 0:
            label = get_text_surface(tick_font, format_gigameters(x_km), label_color, alpha)
            overlay.blit(label, label.get_rect(midtop=(x_px, y0 + half + 3)))

    for i in range(-ticks, ticks + 1):
        y_km = i * interval_y
        _, y_px = viewport.to_pixel(Vector2(0.0, y_km))
        pygame.draw.line(overlay, color, (x0 - half, y_px), (x0 + half, y_px))
        if i != 0:
            label = get_text_surface(tick_font, format_gigameters(y_km), label_color, alpha)
            overlay.blit(label, label.get_rect(midleft=(x0 + half + 3, y_px)))

    surface.blit(overlay, (0, 0))


__all__ = [
    "body_pixel_radius",
    "draw_aim_line",
    "draw_axes",
    "draw_body",
    "draw_ghost",
    "draw_trail",
    "format_gigameters",
]
