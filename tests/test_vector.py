import dataclasses

import numpy as np
import pytest

from swingby.core.vector import ZERO, Vector2


def test_arithmetic_returns_new_vectors():
    a = Vector2(1.0, 2.0)
    b = Vector2(3.0, -4.0)
    assert a + b == Vector2(4.0, -2.0)
    assert a.add(b) == a + b
    assert b - a == Vector2(2.0, -6.0)
    assert a.subtract(b) == a - b
    assert a * 3 == Vector2(3.0, 6.0)
    assert 3 * a == a * 3
    assert a.scale(0.5) == Vector2(0.5, 1.0)
    assert -a == Vector2(-1.0, -2.0)
    assert a == Vector2(1.0, 2.0)


def test_vectors_are_immutable():
    v = Vector2(1.0, 1.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        v.x = 5.0  # type: ignore[misc]


def test_magnitude_and_dot():
    assert Vector2(3.0, 4.0).magnitude() == 5.0
    assert ZERO.magnitude() == 0.0
    assert Vector2(1.0, 2.0).dot(Vector2(3.0, 4.0)) == 11.0


def test_normalize_unit_length():
    n = Vector2(3.0, 4.0).normalize()
    assert n == Vector2(0.6, 0.8)
    assert n.magnitude() == pytest.approx(1.0)


def test_normalize_zero_vector_is_zero():
    assert Vector2(0.0, 0.0).normalize() == Vector2(0.0, 0.0)


def test_conversions():
    v = Vector2.from_iterable((1, 2))
    assert v == Vector2(1.0, 2.0)
    assert v.as_tuple() == (1.0, 2.0)
    np.testing.assert_array_equal(v.as_array(), np.array([1.0, 2.0]))
