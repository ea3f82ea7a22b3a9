"""Physics helpers for the gravity-assist simulation.

The probe is integrated with semi-implicit Euler steps: velocity first, then
position from the updated velocity. Near the primary the requested time step
is split into several sub-steps; the count is chosen once per call from the
separation at entry and is not revisited inside the loop.

The primary drifts at constant velocity. Its mass is many orders of magnitude
larger than the probe's, so the probe's pull on it is ignored.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from .config import PHYSICS_CFG, PhysicsCfg
from .model import Body
from .vector import ZERO, Vector2


@dataclass(frozen=True)
class StepResult:
    primary: Body
    probe: Body
    collided: bool
    substeps: int


def substep_count(distance: float, cfg: PhysicsCfg = PHYSICS_CFG) -> int:
    """Number of sub-steps used for a call starting at *distance* km."""

    threshold = cfg.close_threshold
    if distance >= threshold:
        return 1
    if distance <= 0.0:
        return cfg.max_substeps
    return min(cfg.max_substeps, math.ceil(threshold / distance))


def gravitational_acceleration(
    diff: Vector2,
    primary_mass: float,
    probe_mass: float,
    cfg: PhysicsCfg = PHYSICS_CFG,
) -> Vector2:
    """Acceleration of the probe for the probe-to-primary vector *diff*."""

    r = diff.magnitude()
    if r == 0.0:
        return ZERO
    force = cfg.gravitational_constant * primary_mass * probe_mass / (r * r)
    return diff.normalize() * (force / probe_mass)


def advance(
    primary: Body,
    probe: Body,
    total_dt: float,
    cfg: PhysicsCfg = PHYSICS_CFG,
) -> StepResult:
    """Advance both bodies in place by *total_dt* seconds.

    If the probe is found inside the primary at the start of any sub-step its
    velocity is zeroed, the remaining sub-steps are skipped and ``collided``
    is reported.
    """

    distance = (primary.position - probe.position).magnitude()
    steps = substep_count(distance, cfg)
    dt = total_dt / steps

    for _ in range(steps):
        diff = primary.position - probe.position
        r = diff.magnitude()

        if r < primary.radius:
            probe.velocity = ZERO
            return StepResult(primary, probe, True, steps)

        acc = gravitational_acceleration(diff, primary.mass, probe.mass, cfg)
        probe.velocity = probe.velocity + acc * dt
        probe.position = probe.position + probe.velocity * dt
        primary.position = primary.position + primary.velocity * dt

    return StepResult(primary, probe, False, steps)


def escape_velocity(mass: float, distance: float, cfg: PhysicsCfg = PHYSICS_CFG) -> float:
    """Local escape velocity (km/s) at *distance* km from a body of *mass* kg."""

    if distance <= 0.0:
        return math.inf
    return math.sqrt(2.0 * cfg.gravitational_constant * mass / distance)


def energy_specific(primary: Body, probe: Body, cfg: PhysicsCfg = PHYSICS_CFG) -> float:
    """Specific orbital energy of the probe in the primary's rest frame (km^2/s^2)."""

    rel_v = probe.velocity - primary.velocity
    r = (primary.position - probe.position).magnitude()
    if r <= 0.0:
        return -math.inf
    return 0.5 * rel_v.dot(rel_v) - cfg.gravitational_constant * primary.mass / r


__all__ = [
    "StepResult",
    "advance",
    "energy_specific",
    "escape_velocity",
    "gravitational_acceleration",
    "substep_count",
]
