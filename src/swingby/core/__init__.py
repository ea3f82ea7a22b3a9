"""Physics core of the gravity-assist simulator."""

from .config import (
    DEFAULT_PROFILE,
    PHYSICS_CFG,
    PROFILES,
    RENDER_CFG,
    GradeLadder,
    PhysicsCfg,
    RenderCfg,
    get_profile,
)
from .history import HistoryBuffer, SpeedSample, TrailPoint
from .model import Body, BodyPair, BodyRole
from .outcome import Outcome, OutcomeKind, evaluate
from .physics import StepResult, advance, escape_velocity, substep_count
from .session import InvalidLaunchError, RunState, Session, Snapshot, TransitionError
from .vector import Vector2
from .viewport import Viewport

__all__ = [
    "Body",
    "BodyPair",
    "BodyRole",
    "DEFAULT_PROFILE",
    "GradeLadder",
    "HistoryBuffer",
    "InvalidLaunchError",
    "Outcome",
    "OutcomeKind",
    "PHYSICS_CFG",
    "PROFILES",
    "PhysicsCfg",
    "RENDER_CFG",
    "RenderCfg",
    "RunState",
    "Session",
    "Snapshot",
    "SpeedSample",
    "StepResult",
    "TrailPoint",
    "TransitionError",
    "Vector2",
    "Viewport",
    "advance",
    "escape_velocity",
    "evaluate",
    "get_profile",
    "substep_count",
]
