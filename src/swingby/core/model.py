"""Data models for the two bodies taking part in the simulation."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .config import PHYSICS_CFG, PhysicsCfg
from .vector import ZERO, Vector2


class BodyRole(Enum):
    PRIMARY = "primary"
    PROBE = "probe"


@dataclass
class Body:
    """Mutable kinematic state of one body.

    ``position`` is in km, ``velocity`` in km/s. Mass and radius are fixed
    for the lifetime of the body and must be strictly positive.
    """

    role: BodyRole
    position: Vector2
    velocity: Vector2
    mass: float
    radius: float

    def __post_init__(self) -> None:
        if not self.mass > 0.0:
            raise ValueError(f"{self.role.value} mass must be positive, got {self.mass}")
        if not self.radius > 0.0:
            raise ValueError(f"{self.role.value} radius must be positive, got {self.radius}")

    @property
    def speed(self) -> float:
        return self.velocity.magnitude()

    def copy(self) -> "Body":
        # Vector2 is immutable, so a field-wise copy never aliases live state.
        return replace(self)


def initial_primary(cfg: PhysicsCfg = PHYSICS_CFG) -> Body:
    return Body(
        role=BodyRole.PRIMARY,
        position=cfg.primary_start,
        velocity=Vector2.from_iterable(cfg.primary_velocity),
        mass=cfg.primary_mass,
        radius=cfg.primary_radius,
    )


def initial_probe(cfg: PhysicsCfg = PHYSICS_CFG) -> Body:
    return Body(
        role=BodyRole.PROBE,
        position=ZERO,
        velocity=ZERO,
        mass=cfg.probe_mass,
        radius=cfg.probe_radius,
    )


class BodyPair:
    """The primary and the probe, resettable to their canonical templates."""

    def __init__(self, cfg: PhysicsCfg = PHYSICS_CFG) -> None:
        self._cfg = cfg
        self._primary_template = initial_primary(cfg)
        self._probe_template = initial_probe(cfg)
        self.primary = self._primary_template.copy()
        self.probe = self._probe_template.copy()

    def reset_to_initial(self) -> None:
        self.primary = self._primary_template.copy()
        self.probe = self._probe_template.copy()

    def set_launch(self, position: Vector2, velocity: Vector2) -> None:
        """Place the probe; mass and radius are left untouched."""

        self.probe.position = position
        self.probe.velocity = velocity

    def separation(self) -> float:
        return (self.primary.position - self.probe.position).magnitude()


__all__ = ["Body", "BodyPair", "BodyRole", "initial_primary", "initial_probe"]
