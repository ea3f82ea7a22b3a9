import pytest

from swingby.core.vector import ZERO, Vector2
from swingby.core.viewport import Viewport


@pytest.fixture
def viewport() -> Viewport:
    return Viewport.from_configs()


def test_scale(viewport):
    assert viewport.km_per_pixel == 62_500.0


def test_to_pixel_centre_and_corner(viewport):
    assert viewport.to_pixel(ZERO) == (400, 400)
    assert viewport.to_pixel(Vector2(25_000_000.0, 25_000_000.0)) == (800, 0)
    assert viewport.to_pixel(Vector2(-25_000_000.0, -25_000_000.0)) == (0, 800)


def test_to_pixel_rounds_half_up(viewport):
    assert viewport.to_pixel(Vector2(31_250.0, 0.0)) == (401, 400)


def test_to_world_inverts_to_pixel(viewport):
    assert viewport.to_world(400, 400) == ZERO
    assert viewport.to_world(0, 0) == Vector2(-25_000_000.0, 25_000_000.0)


def test_out_of_bounds_uses_pixel_margin(viewport):
    assert not viewport.is_out_of_bounds(Vector2(31_250_000.0, 0.0), 100)
    assert viewport.is_out_of_bounds(Vector2(31_300_000.0, 0.0), 100)
    assert viewport.is_out_of_bounds(Vector2(0.0, -31_300_000.0), 100)
    assert not viewport.is_out_of_bounds(Vector2(0.0, 0.0), 0)


def test_edge_at(viewport):
    assert viewport.edge_at(5, 5, 20) == "left"
    assert viewport.edge_at(795, 400, 20) == "right"
    assert viewport.edge_at(400, 10, 20) == "top"
    assert viewport.edge_at(400, 790, 20) == "bottom"
    assert viewport.edge_at(400, 400, 20) is None


def test_snap_to_edge(viewport):
    assert viewport.snap_to_edge(3, 400, "left") == Vector2(-25_000_000.0, 0.0)
    assert viewport.snap_to_edge(400, 797, "bottom") == Vector2(0.0, -25_000_000.0)
    assert viewport.snap_to_edge(800, 0, "right") == Vector2(25_000_000.0, 25_000_000.0)
    with pytest.raises(ValueError):
        viewport.snap_to_edge(0, 0, "middle")
