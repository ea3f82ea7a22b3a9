import pygame
import pytest

from swingby.app import describe_outcome, format_sim_time, parse_args
from swingby.core.history import SpeedSample
from swingby.core.outcome import Outcome, OutcomeKind
from swingby.render.draw import format_gigameters
from swingby.render.graph import graph_points, time_axis_unit


@pytest.mark.parametrize(
    "time_range, label",
    [
        (30.0, "time [s]"),
        (600.0, "time [min]"),
        (2 * 3600.0, "time [h]"),
        (241 * 3600.0, "time [days]"),
    ],
)
def test_time_axis_unit(time_range, label):
    assert time_axis_unit(time_range)[0] == label


def test_graph_points_span_the_area():
    area = pygame.Rect(50, 10, 100, 50)
    samples = [SpeedSample(0.0, 0.0), SpeedSample(50.0, 5.0), SpeedSample(100.0, 20.0)]
    assert graph_points(samples, 10.0, area) == [(50, 60), (100, 35), (150, 10)]


def test_graph_points_need_two_samples():
    area = pygame.Rect(0, 0, 10, 10)
    assert graph_points([SpeedSample(0.0, 1.0)], 10.0, area) == []
    assert graph_points([SpeedSample(5.0, 1.0), SpeedSample(5.0, 2.0)], 10.0, area) == []


def test_describe_outcome():
    crash = Outcome(OutcomeKind.CRASH, "F", 0.0)
    assert describe_outcome(crash) == "Mission failed! The probe crashed into Jupiter (grade: F)"
    escape = Outcome(OutcomeKind.ESCAPE, "S", 21.234, 3.5)
    text = describe_outcome(escape)
    assert text.startswith("Mission complete! Final speed: 21.23 km/s")
    assert text.endswith("(grade: S)")
    captured = Outcome(OutcomeKind.CAPTURED, "F", 4.0, 6.0)
    assert describe_outcome(captured).startswith("Escape velocity not reached.")


def test_formatting_helpers():
    assert format_gigameters(12_500_000.0) == "12.5 Gm"
    assert format_sim_time(86_400.0 * 3) == "t = 3.0 days"


def test_parse_args():
    args = parse_args(["--profile", "relaxed", "--no-log"])
    assert args.profile == "relaxed"
    assert args.no_log
