"""Configuration dataclasses for the gravity-assist simulation.

Units: kilometres, kilograms and seconds unless a field name says otherwise.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

from .vector import Vector2


@dataclass(frozen=True)
class GradeLadder:
    """Top-down speed thresholds (km/s) mapped to letter grades."""

    rungs: tuple[tuple[float, str], ...] = (
        (20.0, "S"),
        (18.0, "A"),
        (16.0, "B"),
        (14.0, "C"),
    )
    fallback: str = "F"

    def __post_init__(self) -> None:
        thresholds = [threshold for threshold, _ in self.rungs]
        if any(a <= b for a, b in zip(thresholds, thresholds[1:])):
            raise ValueError("grade thresholds must be strictly descending")

    def grade(self, speed: float) -> str:
        for threshold, letter in self.rungs:
            if speed >= threshold:
                return letter
        return self.fallback


CLASSIC_LADDER = GradeLadder()
RELAXED_LADDER = GradeLadder(
    rungs=((20.0, "S"), (18.0, "A"), (16.0, "B"), (10.0, "C")),
)


@dataclass(frozen=True)
class PhysicsCfg:
    name: str = "classic"
    gravitational_constant: float = 6.67430e-20  # km^3 kg^-1 s^-2
    primary_mass: float = 1.898e27
    probe_mass: float = 722.0
    primary_radius: float = 69_911.0
    probe_radius: float = 300.0
    region_width: float = 50_000_000.0
    region_height: float = 50_000_000.0
    # Primary starts on the y axis at this fraction of the half height.
    primary_start_fraction: float = 0.9
    primary_velocity: tuple[float, float] = (0.0, -13.07)
    close_threshold_fraction: float = 1.0 / 5.0
    max_substeps: int = 50
    launch_speed: float = 10.0
    trail_capacity: int = 500
    speed_capacity: int = 500
    # One year of simulated time squeezed into 30 s at 60 frames per second.
    simulated_duration: float = 31_536_000.0
    real_time_duration: float = 30.0
    frame_rate: float = 60.0
    speed_axis_initial: float = 10.0
    speed_axis_step: float = 5.0
    grade_ladder: GradeLadder = field(default_factory=GradeLadder)
    log_every_steps: int = 1

    @property
    def mu(self) -> float:
        return self.gravitational_constant * self.primary_mass

    @property
    def half_width(self) -> float:
        return self.region_width / 2.0

    @property
    def half_height(self) -> float:
        return self.region_height / 2.0

    @property
    def close_threshold(self) -> float:
        return self.region_width * self.close_threshold_fraction

    @property
    def tick_dt(self) -> float:
        return self.simulated_duration / self.real_time_duration / self.frame_rate

    @property
    def primary_start(self) -> Vector2:
        return Vector2(0.0, self.half_height * self.primary_start_fraction)

    def is_on_boundary(self, point: Vector2, tolerance: float | None = None) -> bool:
        """Return ``True`` if *point* lies on the edge of the simulation region."""

        if tolerance is None:
            tolerance = 1e-9 * max(self.half_width, self.half_height)
        inside_x = abs(point.x) <= self.half_width + tolerance
        inside_y = abs(point.y) <= self.half_height + tolerance
        on_vertical = math.isclose(abs(point.x), self.half_width, abs_tol=tolerance)
        on_horizontal = math.isclose(abs(point.y), self.half_height, abs_tol=tolerance)
        return (on_vertical and inside_y) or (on_horizontal and inside_x)


@dataclass(frozen=True)
class RenderCfg:
    width: int = 800
    height: int = 800
    graph_height: int = 200
    panel_height: int = 96
    fps: int = 60
    out_of_bounds_margin: int = 100
    edge_pick_margin: int = 20
    background_color: tuple[int, int, int] = (6, 10, 24)
    primary_color: tuple[int, int, int] = (255, 165, 0)
    probe_color: tuple[int, int, int] = (255, 255, 255)
    preview_color: tuple[int, int, int] = (128, 128, 128)
    primary_pixel_radius: int = 10
    probe_pixel_radius: int = 5
    trail_color: tuple[int, int, int, int] = (255, 255, 255, 128)
    trail_dot_color: tuple[int, int, int] = (255, 255, 255)
    trail_dot_interval: int = 15
    trail_dot_radius: int = 2
    aim_line_color: tuple[int, int, int, int] = (255, 255, 255, 128)
    axis_color: tuple[int, int, int, int] = (255, 255, 255, 77)
    axis_label_color: tuple[int, int, int] = (255, 255, 255)
    axis_label_alpha: int = 204
    axis_ticks_per_side: int = 4
    axis_tick_half_length: int = 5
    graph_background_color: tuple[int, int, int] = (12, 16, 30)
    graph_axis_color: tuple[int, int, int] = (255, 255, 255)
    graph_grid_color: tuple[int, int, int, int] = (255, 255, 255, 20)
    graph_text_color: tuple[int, int, int] = (204, 204, 204)
    graph_line_color: tuple[int, int, int] = (0, 255, 0)
    graph_left: int = 50
    graph_top: int = 10
    graph_right_pad: int = 10
    graph_bottom_pad: int = 30
    graph_ticks: int = 5
    hud_text_color: tuple[int, int, int] = (234, 241, 255)
    result_good_color: tuple[int, int, int] = (130, 230, 150)
    result_bad_color: tuple[int, int, int] = (255, 140, 120)
    button_color: tuple[int, int, int, int] = (8, 32, 64, int(255 * 0.78))
    button_hover_color: tuple[int, int, int, int] = (18, 52, 94, int(255 * 0.88))
    button_disabled_color: tuple[int, int, int, int] = (40, 44, 52, 160)
    button_text_color: tuple[int, int, int] = (234, 241, 255)
    button_disabled_text_color: tuple[int, int, int] = (120, 126, 138)
    button_border_color: tuple[int, int, int, int] = (88, 140, 255, int(255 * 0.55))
    button_radius: int = 14

    @property
    def window_size(self) -> tuple[int, int]:
        return (self.width, self.height + self.graph_height + self.panel_height)


PHYSICS_CFG = PhysicsCfg()
RENDER_CFG = RenderCfg()

PROFILES: dict[str, PhysicsCfg] = {
    "classic": PHYSICS_CFG,
    "relaxed": replace(PHYSICS_CFG, name="relaxed", grade_ladder=RELAXED_LADDER),
}
DEFAULT_PROFILE = "classic"


def get_profile(name: str) -> PhysicsCfg:
    try:
        return PROFILES[name]
    except KeyError:
        known = ", ".join(sorted(PROFILES))
        raise ValueError(f"unknown profile {name!r} (expected one of: {known})") from None


__all__ = [
    "CLASSIC_LADDER",
    "DEFAULT_PROFILE",
    "GradeLadder",
    "PHYSICS_CFG",
    "PROFILES",
    "PhysicsCfg",
    "RELAXED_LADDER",
    "RENDER_CFG",
    "RenderCfg",
    "get_profile",
]
