"""Run state machine owning all mutable simulation state."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from enum import Enum

from .config import PHYSICS_CFG, RENDER_CFG, PhysicsCfg, RenderCfg
from .history import HistoryBuffer, SpeedSample, TrailPoint
from .logging_utils import RunLogger
from .model import Body, BodyPair
from .outcome import Outcome, evaluate
from .physics import advance, energy_specific, escape_velocity
from .vector import Vector2
from .viewport import Viewport


class RunState(Enum):
    IDLE = "idle"
    ARMED = "armed"
    RUNNING = "running"
    ENDED = "ended"


class TransitionError(RuntimeError):
    """Raised when an operation is not allowed in the current run state."""


class InvalidLaunchError(ValueError):
    """Raised when a launch point does not lie on the region boundary."""


@dataclass(frozen=True)
class Snapshot:
    state: RunState
    time: float
    primary: Body
    probe: Body
    trail: tuple[TrailPoint, ...]
    speeds: tuple[SpeedSample, ...]
    speed_axis_max: float
    substeps: int
    outcome: Outcome | None
    out_of_bounds: bool

    @property
    def ended(self) -> bool:
        return self.state is RunState.ENDED

    @property
    def speed(self) -> float:
        return self.probe.speed


class Session:
    """A single gravity-assist attempt, from aiming to grading.

    The host calls :meth:`step` once per frame while the session is running.
    Every call advances the simulation by the fixed ``cfg.tick_dt``.
    """

    def __init__(
        self,
        cfg: PhysicsCfg = PHYSICS_CFG,
        render_cfg: RenderCfg = RENDER_CFG,
        viewport: Viewport | None = None,
    ) -> None:
        self.cfg = cfg
        self.viewport = viewport or Viewport.from_configs(cfg, render_cfg)
        self.out_of_bounds_margin = render_cfg.out_of_bounds_margin
        self.bodies = BodyPair(cfg)
        self.trail: HistoryBuffer[TrailPoint] = HistoryBuffer(cfg.trail_capacity)
        self.speeds: HistoryBuffer[SpeedSample] = HistoryBuffer(cfg.speed_capacity)
        self._logger: RunLogger | None = None
        self.reset()

    # ------------------------------------------------------------------
    @property
    def primary(self) -> Body:
        return self.bodies.primary

    @property
    def probe(self) -> Body:
        return self.bodies.probe

    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Return to ``IDLE`` with canonical bodies, empty histories and a zeroed clock."""

        self._close_logger()
        self.bodies.reset_to_initial()
        self.trail.clear()
        self.speeds.clear()
        self.time = 0.0
        self.speed_axis_max = self.cfg.speed_axis_initial
        self.state = RunState.IDLE
        self.outcome: Outcome | None = None
        self.out_of_bounds = False
        self.last_substeps = 0
        self.launch_point: Vector2 | None = None
        self.launch_direction: Vector2 | None = None
        self.closest_approach = math.inf
        self._prev_distance: float | None = None
        self._prev_dr: float | None = None
        self._ticks_since_log = 0

    def set_launch(self, point: Vector2, direction: Vector2) -> RunState:
        """Aim the probe from *point* on the boundary along *direction*.

        A zero-length direction cancels the shot and returns to ``IDLE``.
        """

        if self.state not in (RunState.IDLE, RunState.ARMED):
            raise TransitionError(f"cannot set a launch while {self.state.value}")

        if direction.magnitude() == 0.0:
            self.bodies.reset_to_initial()
            self.launch_point = None
            self.launch_direction = None
            self.state = RunState.IDLE
            return self.state

        if not self.cfg.is_on_boundary(point):
            raise InvalidLaunchError(f"launch point {point.as_tuple()} is not on the region boundary")

        velocity = direction.normalize() * self.cfg.launch_speed
        self.bodies.set_launch(point, velocity)
        self.launch_point = point
        self.launch_direction = direction
        self.state = RunState.ARMED
        return self.state

    def start(self, logger: RunLogger | None = None) -> None:
        """Begin integrating the armed shot, optionally recording it to *logger*."""

        if self.state is not RunState.ARMED:
            raise TransitionError(f"cannot start while {self.state.value}")

        self.trail.clear()
        self.speeds.clear()
        self.time = 0.0
        self.speed_axis_max = self.cfg.speed_axis_initial
        self.closest_approach = self.bodies.separation()
        self._prev_distance = self.closest_approach
        self._prev_dr = None
        self._ticks_since_log = 0
        self.state = RunState.RUNNING

        self._logger = logger
        if logger is not None:
            logger.write_meta(self._meta())
            logger.log_event(
                0.0,
                "launch",
                self.closest_approach,
                self.probe.speed,
                x=self.probe.position.x,
                y=self.probe.position.y,
            )

    def step(self) -> Snapshot:
        """Advance one tick and decide whether the run is over."""

        if self.state is not RunState.RUNNING:
            raise TransitionError(f"cannot step while {self.state.value}")

        dt = self.cfg.tick_dt
        result = advance(self.primary, self.probe, dt, self.cfg)
        self.last_substeps = result.substeps
        self.time += dt

        probe = self.probe
        speed = probe.speed
        self.trail.append(TrailPoint(probe.position.x, probe.position.y))
        self.speeds.append(SpeedSample(self.time, speed))
        if speed > self.speed_axis_max:
            step = self.cfg.speed_axis_step
            self.speed_axis_max = math.ceil(speed / step) * step

        distance = self.bodies.separation()
        self._track_approach(distance, speed)

        self.out_of_bounds = self.viewport.is_out_of_bounds(
            probe.position, self.out_of_bounds_margin
        )
        finished = result.collided or self.out_of_bounds or speed == 0.0
        self._log_tick(distance, speed, force=finished)
        if finished:
            self._finish(distance, speed)
        return self.snapshot()

    def run_to_end(self, max_ticks: int | None = None) -> Snapshot:
        """Step until the run ends or *max_ticks* ticks have elapsed."""

        ticks = 0
        while self.state is RunState.RUNNING:
            if max_ticks is not None and ticks >= max_ticks:
                break
            self.step()
            ticks += 1
        return self.snapshot()

    def snapshot(self) -> Snapshot:
        return Snapshot(
            state=self.state,
            time=self.time,
            primary=self.primary.copy(),
            probe=self.probe.copy(),
            trail=self.trail.view(),
            speeds=self.speeds.view(),
            speed_axis_max=self.speed_axis_max,
            substeps=self.last_substeps,
            outcome=self.outcome,
            out_of_bounds=self.out_of_bounds,
        )

    # ------------------------------------------------------------------
    def _finish(self, distance: float, speed: float) -> None:
        self.outcome = evaluate(speed, distance, self.primary.mass, self.cfg.grade_ladder, self.cfg)
        self.state = RunState.ENDED
        if self._logger is not None:
            self._logger.log_event(
                self.time,
                self.outcome.kind.value,
                distance,
                speed,
                grade=self.outcome.grade,
                v_esc=self.outcome.escape_velocity,
                out_of_bounds=self.out_of_bounds,
                closest_approach=self.closest_approach,
            )
        self._close_logger()

    def _track_approach(self, distance: float, speed: float) -> None:
        self.closest_approach = min(self.closest_approach, distance)
        if self._prev_distance is None:
            self._prev_distance = distance
            return
        dr = distance - self._prev_distance
        if self._prev_dr is not None and self._prev_dr < 0.0 and dr >= 0.0:
            if self._logger is not None:
                self._logger.log_event(
                    self.time,
                    "periapsis",
                    distance,
                    speed,
                    v_esc=escape_velocity(self.primary.mass, distance, self.cfg),
                )
        self._prev_dr = dr
        self._prev_distance = distance

    def _log_tick(self, distance: float, speed: float, *, force: bool) -> None:
        if self._logger is None:
            return
        self._ticks_since_log += 1
        if not force and self._ticks_since_log < self.cfg.log_every_steps:
            return
        self._ticks_since_log = 0
        probe = self.probe
        self._logger.log_ts(
            [
                self.time,
                probe.position.x,
                probe.position.y,
                probe.velocity.x,
                probe.velocity.y,
                distance,
                speed,
                escape_velocity(self.primary.mass, distance, self.cfg),
                energy_specific(self.primary, probe, self.cfg),
                self.last_substeps,
            ]
        )

    def _close_logger(self) -> None:
        if self._logger is not None:
            self._logger.close()
            self._logger = None

    def _meta(self) -> dict:
        cfg = self.cfg
        return {
            "profile": cfg.name,
            "gravitational_constant": cfg.gravitational_constant,
            "primary_mass": cfg.primary_mass,
            "probe_mass": cfg.probe_mass,
            "primary_radius": cfg.primary_radius,
            "probe_radius": cfg.probe_radius,
            "region_width": cfg.region_width,
            "region_height": cfg.region_height,
            "primary_start": asdict(cfg.primary_start),
            "primary_velocity": list(cfg.primary_velocity),
            "tick_dt": cfg.tick_dt,
            "max_substeps": cfg.max_substeps,
            "close_threshold": cfg.close_threshold,
            "launch_speed": cfg.launch_speed,
            "launch_point": asdict(self.launch_point) if self.launch_point else None,
            "launch_direction": asdict(self.launch_direction) if self.launch_direction else None,
            "grade_ladder": [list(rung) for rung in cfg.grade_ladder.rungs],
        }


__all__ = [
    "InvalidLaunchError",
    "RunState",
    "Session",
    "Snapshot",
    "TransitionError",
]
