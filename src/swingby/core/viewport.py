"""Mapping between simulation kilometres and canvas pixels."""
from __future__ import annotations

import math
from dataclasses import dataclass

from .config import PHYSICS_CFG, RENDER_CFG, PhysicsCfg, RenderCfg
from .vector import Vector2

EDGES = ("left", "right", "top", "bottom")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class Viewport:
    """Fixed affine transform: region centre at canvas centre, y axis up."""

    width: int
    height: int
    km_per_pixel: float
    half_width_km: float
    half_height_km: float

    @classmethod
    def from_configs(
        cls,
        physics_cfg: PhysicsCfg = PHYSICS_CFG,
        render_cfg: RenderCfg = RENDER_CFG,
    ) -> "Viewport":
        return cls(
            width=render_cfg.width,
            height=render_cfg.height,
            km_per_pixel=physics_cfg.region_width / render_cfg.width,
            half_width_km=physics_cfg.half_width,
            half_height_km=physics_cfg.half_height,
        )

    def to_pixel(self, point: Vector2) -> tuple[int, int]:
        px = _round_half_up(point.x / self.km_per_pixel + self.width / 2.0)
        py = _round_half_up(self.height / 2.0 - point.y / self.km_per_pixel)
        return px, py

    def to_world(self, px: float, py: float) -> Vector2:
        return Vector2(
            (px - self.width / 2.0) * self.km_per_pixel,
            (self.height / 2.0 - py) * self.km_per_pixel,
        )

    def is_out_of_bounds(self, point: Vector2, margin: int) -> bool:
        px, py = self.to_pixel(point)
        return (
            px < -margin
            or px > self.width + margin
            or py < -margin
            or py > self.height + margin
        )

    def edge_at(self, px: float, py: float, margin: int) -> str | None:
        """Canvas edge within *margin* pixels of ``(px, py)``, checked left, right, top, bottom."""

        if px < margin:
            return "left"
        if px > self.width - margin:
            return "right"
        if py < margin:
            return "top"
        if py > self.height - margin:
            return "bottom"
        return None

    def snap_to_edge(self, px: float, py: float, edge: str) -> Vector2:
        """Project a pixel onto the given edge of the simulation region."""

        point = self.to_world(px, py)
        if edge == "left":
            return Vector2(-self.half_width_km, point.y)
        if edge == "right":
            return Vector2(self.half_width_km, point.y)
        if edge == "top":
            return Vector2(point.x, self.half_height_km)
        if edge == "bottom":
            return Vector2(point.x, -self.half_height_km)
        raise ValueError(f"unknown edge {edge!r}")


__all__ = ["EDGES", "Viewport"]
