"""Classification and grading of a finished run."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .config import PHYSICS_CFG, GradeLadder, PhysicsCfg
from .physics import escape_velocity


class OutcomeKind(Enum):
    CRASH = "crash"
    CAPTURED = "captured"
    ESCAPE = "escape"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    grade: str
    speed: float
    escape_velocity: float | None = None

    @property
    def escaped(self) -> bool:
        return self.kind is OutcomeKind.ESCAPE


def evaluate(
    speed: float,
    distance: float,
    primary_mass: float,
    ladder: GradeLadder | None = None,
    cfg: PhysicsCfg = PHYSICS_CFG,
) -> Outcome:
    """Classify the final state of the probe.

    A probe at rest has crashed. Otherwise it escaped if it is faster than the
    local escape velocity, in which case the speed is graded on *ladder*
    (the config's ladder when omitted). Crashes and captures grade as the
    ladder's fallback.
    """

    ladder = ladder or cfg.grade_ladder
    if speed == 0.0:
        return Outcome(OutcomeKind.CRASH, ladder.fallback, speed)

    v_esc = escape_velocity(primary_mass, distance, cfg)
    if speed > v_esc:
        return Outcome(OutcomeKind.ESCAPE, ladder.grade(speed), speed, v_esc)
    return Outcome(OutcomeKind.CAPTURED, ladder.fallback, speed, v_esc)


__all__ = ["Outcome", "OutcomeKind", "evaluate"]
