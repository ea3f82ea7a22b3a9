"""Speed-over-time graph drawn below the main canvas."""
from __future__ import annotations

from typing import Sequence, TYPE_CHECKING

import pygame

from swingby.core.history import SpeedSample

from .assets import get_text_surface

if TYPE_CHECKING:  # pragma: no cover
    from swingby.core.config import RenderCfg

SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 60.0 * 60.0
SECONDS_PER_DAY = 24.0 * SECONDS_PER_HOUR


def time_axis_unit(time_range: float) -> tuple[str, float]:
    """Axis label and divisor for a graph spanning *time_range* seconds."""

    if time_range > 240 * SECONDS_PER_HOUR:
        return "time [days]", SECONDS_PER_DAY
    if time_range > SECONDS_PER_HOUR:
        return "time [h]", SECONDS_PER_HOUR
    if time_range > SECONDS_PER_MINUTE:
        return "time [min]", SECONDS_PER_MINUTE
    return "time [s]", 1.0


def plot_area(rect: pygame.Rect, render_cfg: RenderCfg) -> pygame.Rect:
    left = rect.left + render_cfg.graph_left
    top = rect.top + render_cfg.graph_top
    right = rect.right - render_cfg.graph_right_pad
    bottom = rect.bottom - render_cfg.graph_bottom_pad
    return pygame.Rect(left, top, right - left, bottom - top)


def graph_points(
    samples: Sequence[SpeedSample],
    speed_max: float,
    area: pygame.Rect,
) -> list[tuple[int, int]]:
    """Map samples onto *area*; time spans the width, 0..speed_max the height."""

    if len(samples) < 2 or speed_max <= 0.0:
        return []
    t0 = samples[0].time
    time_range = samples[-1].time - t0
    if time_range <= 0.0:
        return []
    points = []
    for sample in samples:
        x = area.left + (sample.time - t0) / time_range * area.width
        y = area.bottom - min(sample.speed, speed_max) / speed_max * area.height
        points.append((int(round(x)), int(round(y))))
    return points


def draw_speed_graph(
    surface: pygame.Surface,
    rect: pygame.Rect,
    samples: Sequence[SpeedSample],
    speed_max: float,
    *,
    render_cfg: RenderCfg,
    font: pygame.font.Font,
) -> None:
    pygame.draw.rect(surface, render_cfg.graph_background_color, rect)
    if len(samples) < 2:
        return

    area = plot_area(rect, render_cfg)
    t0 = samples[0].time
    time_range = samples[-1].time - t0
    if time_range <= 0.0:
        return
    time_label, divisor = time_axis_unit(time_range)

    grid = pygame.Surface(rect.size, pygame.SRCALPHA)
    ticks = render_cfg.graph_ticks
    text_color = render_cfg.graph_text_color
    for i in range(ticks + 1):
        speed = speed_max * i / ticks
        y = area.bottom - area.height * i / ticks
        pygame.draw.line(
            grid,
            render_cfg.graph_grid_color,
            (area.left - rect.left, y - rect.top),
            (area.right - rect.left, y - rect.top),
        )
        label = get_text_surface(font, f"{speed:.2f}", text_color)
        surface.blit(label, label.get_rect(midright=(area.left - 5, int(y))))

        t = t0 + time_range * i / ticks
        x = area.left + area.width * i / ticks
        pygame.draw.line(
            grid,
            render_cfg.graph_grid_color,
            (x - rect.left, area.top - rect.top),
            (x - rect.left, area.bottom - rect.top),
        )
        label = get_text_surface(font, f"{t / divisor:.1f}", text_color)
        surface.blit(label, label.get_rect(midtop=(int(x), area.bottom + 5)))
    surface.blit(grid, rect.topleft)

    axis_color = render_cfg.graph_axis_color
    pygame.draw.lines(
        surface,
        axis_color,
        False,
        [area.topleft, area.bottomleft, area.bottomright],
    )

    unit = get_text_surface(font, time_label, text_color)
    surface.blit(unit, unit.get_rect(bottomright=(area.right - 2, area.bottom - 2)))
    speed_label = pygame.transform.rotate(get_text_surface(font, "speed [km/s]", text_color), 90)
    surface.blit(speed_label, speed_label.get_rect(midleft=(rect.left + 2, area.centery)))

    points = graph_points(samples, speed_max, area)
    if len(points) >= 2:
        pygame.draw.lines(surface, render_cfg.graph_line_color, False, points, 1)


__all__ = ["draw_speed_graph", "graph_points", "plot_area", "time_axis_unit"]
