import math

import pytest

from swingby.core.config import PHYSICS_CFG
from swingby.core.logging_utils import RunLogger
from swingby.core.outcome import OutcomeKind
from swingby.core.session import InvalidLaunchError, RunState, Session, TransitionError
from swingby.core.vector import ZERO, Vector2

# Straight down from the top edge into the primary's path.
CRASH_SHOT = (Vector2(0.0, 25_000_000.0), Vector2(0.0, -1.0))
# Horizontal shot from the left edge that swings round the primary.
FLYBY_SHOT = (Vector2(-25_000_000.0, -7_500_000.0), Vector2(1.0, 0.0))


@pytest.fixture
def session() -> Session:
    return Session()


def armed(session: Session, shot) -> Session:
    session.set_launch(*shot)
    return session


def test_new_session_is_idle(session):
    snap = session.snapshot()
    assert snap.state is RunState.IDLE
    assert snap.time == 0.0
    assert snap.trail == ()
    assert snap.speeds == ()
    assert snap.speed_axis_max == 10.0
    assert snap.outcome is None
    assert snap.primary.position == Vector2(0.0, 22_500_000.0)


def test_set_launch_arms_with_launch_speed(session):
    state = session.set_launch(Vector2(-25_000_000.0, 0.0), Vector2(3.0, 4.0))
    assert state is RunState.ARMED
    assert session.probe.position == Vector2(-25_000_000.0, 0.0)
    assert session.probe.velocity.x == pytest.approx(6.0)
    assert session.probe.velocity.y == pytest.approx(8.0)
    assert session.probe.speed == pytest.approx(PHYSICS_CFG.launch_speed)


def test_rearming_replaces_the_shot(session):
    armed(session, CRASH_SHOT)
    assert session.set_launch(*FLYBY_SHOT) is RunState.ARMED
    assert session.probe.position == FLYBY_SHOT[0]


def test_zero_direction_cancels(session):
    armed(session, CRASH_SHOT)
    assert session.set_launch(Vector2(0.0, 25_000_000.0), ZERO) is RunState.IDLE
    assert session.probe.position == ZERO
    assert session.probe.velocity == ZERO


def test_launch_point_must_be_on_boundary(session):
    with pytest.raises(InvalidLaunchError):
        session.set_launch(Vector2(0.0, 0.0), Vector2(1.0, 0.0))
    assert session.state is RunState.IDLE


def test_start_and_step_need_the_right_state(session):
    with pytest.raises(TransitionError):
        session.start()
    with pytest.raises(TransitionError):
        session.step()
    armed(session, CRASH_SHOT)
    with pytest.raises(TransitionError):
        session.step()
    session.start()
    with pytest.raises(TransitionError):
        session.set_launch(*FLYBY_SHOT)
    with pytest.raises(TransitionError):
        session.start()


def test_first_tick(session):
    armed(session, FLYBY_SHOT).start()
    assert session.state is RunState.RUNNING
    snap = session.step()
    assert snap.state is RunState.RUNNING
    assert snap.time == pytest.approx(PHYSICS_CFG.tick_dt)
    assert len(snap.trail) == 1
    assert len(snap.speeds) == 1
    assert snap.trail[0] == (snap.probe.position.x, snap.probe.position.y)
    assert snap.speeds[0].time == snap.time
    assert snap.speeds[0].speed == pytest.approx(snap.probe.speed)
    assert snap.substeps == 1


def test_crash_run(session):
    armed(session, CRASH_SHOT).start()
    snap = session.run_to_end(max_ticks=200)
    assert snap.ended
    assert snap.outcome.kind is OutcomeKind.CRASH
    assert snap.outcome.grade == "F"
    assert snap.probe.velocity == ZERO
    assert snap.speed == 0.0
    assert not snap.out_of_bounds
    assert len(snap.speeds) <= 36
    assert snap.time == pytest.approx(len(snap.speeds) * PHYSICS_CFG.tick_dt)
    assert session.closest_approach < PHYSICS_CFG.primary_radius
    with pytest.raises(TransitionError):
        session.step()


def test_flyby_escapes_with_grade_b(session):
    armed(session, FLYBY_SHOT).start()
    snap = session.run_to_end(max_ticks=2_000)
    assert snap.ended
    assert snap.out_of_bounds
    assert snap.outcome.kind is OutcomeKind.ESCAPE
    assert snap.outcome.speed == pytest.approx(17.0956, abs=1e-3)
    assert snap.outcome.grade == "B"
    assert snap.outcome.escape_velocity < snap.outcome.speed
    assert len(snap.speeds) == 248


def test_speed_axis_baseline_tracks_peak_speed(session):
    armed(session, FLYBY_SHOT).start()
    snap = session.run_to_end(max_ticks=2_000)
    peak = max(sample.speed for sample in snap.speeds)
    assert snap.speed_axis_max == max(10.0, math.ceil(peak / 5.0) * 5.0)
    assert snap.speed_axis_max % 5.0 == 0.0


def test_run_to_end_respects_tick_cap(session):
    armed(session, FLYBY_SHOT).start()
    snap = session.run_to_end(max_ticks=5)
    assert snap.state is RunState.RUNNING
    assert len(snap.speeds) == 5


def test_reset_is_idempotent(session):
    armed(session, FLYBY_SHOT).start()
    session.run_to_end(max_ticks=10)
    session.reset()
    first = session.snapshot()
    session.reset()
    assert session.snapshot() == first
    assert first.state is RunState.IDLE
    assert first.trail == ()
    assert first.time == 0.0
    assert first.speed_axis_max == 10.0
    assert first.primary.position == Vector2(0.0, 22_500_000.0)


def test_snapshot_is_detached(session):
    armed(session, FLYBY_SHOT).start()
    snap = session.step()
    session.step()
    assert len(snap.trail) == 1
    assert snap.probe.position != session.probe.position


def test_logged_run_records_events(tmp_path, session):
    logger = RunLogger(tmp_path, run_id="crash")
    armed(session, CRASH_SHOT).start(logger)
    snap = session.run_to_end(max_ticks=200)
    assert logger.closed

    rows = (tmp_path / "crash" / "timeseries.csv").read_text().splitlines()
    assert rows[0] == ",".join(RunLogger.TIMESERIES_HEADER)
    assert len(rows) - 1 == len(snap.speeds)

    events = (tmp_path / "crash" / "events.csv").read_text().splitlines()
    assert events[1].split(",")[1] == "launch"
    assert events[-1].split(",")[1] == "crash"
    assert (tmp_path / "crash" / "meta.json").exists()


def test_reset_closes_an_active_logger(tmp_path, session):
    logger = RunLogger(tmp_path)
    armed(session, FLYBY_SHOT).start(logger)
    session.step()
    session.reset()
    assert logger.closed
