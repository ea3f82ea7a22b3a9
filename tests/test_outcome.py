import math

import pytest

from swingby.core.config import CLASSIC_LADDER, PHYSICS_CFG, RELAXED_LADDER, GradeLadder, get_profile
from swingby.core.outcome import OutcomeKind, evaluate

FAR = 30_000_000.0  # escape velocity here is about 2.9 km/s
MASS = PHYSICS_CFG.primary_mass


@pytest.mark.parametrize(
    "speed, grade",
    [
        (25.0, "S"),
        (20.5, "S"),
        (20.0, "S"),
        (19.0, "A"),
        (18.0, "A"),
        (16.0, "B"),
        (15.9, "C"),
        (14.0, "C"),
        (13.99, "F"),
        (9.9, "F"),
    ],
)
def test_classic_grades(speed, grade):
    outcome = evaluate(speed, FAR, MASS)
    assert outcome.kind is OutcomeKind.ESCAPE
    assert outcome.escaped
    assert outcome.grade == grade
    assert outcome.speed == speed


def test_relaxed_ladder_lowers_the_c_threshold():
    assert RELAXED_LADDER.grade(11.0) == "C"
    assert CLASSIC_LADDER.grade(11.0) == "F"
    assert evaluate(12.0, FAR, MASS, RELAXED_LADDER).grade == "C"
    assert evaluate(12.0, FAR, MASS, cfg=get_profile("relaxed")).grade == "C"


def test_zero_speed_is_a_crash():
    outcome = evaluate(0.0, 50_000.0, MASS)
    assert outcome.kind is OutcomeKind.CRASH
    assert outcome.grade == "F"
    assert not outcome.escaped


def test_slower_than_escape_velocity_is_captured():
    distance = 1_000_000.0
    v_esc = math.sqrt(2 * PHYSICS_CFG.mu / distance)
    outcome = evaluate(v_esc * 0.9, distance, MASS)
    assert outcome.kind is OutcomeKind.CAPTURED
    assert outcome.grade == "F"
    assert outcome.escape_velocity == pytest.approx(v_esc)


def test_ladder_must_descend():
    with pytest.raises(ValueError):
        GradeLadder(rungs=((14.0, "C"), (20.0, "S")))
    with pytest.raises(ValueError):
        GradeLadder(rungs=((14.0, "C"), (14.0, "B")))
