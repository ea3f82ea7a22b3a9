import pytest

from swingby.core.history import HistoryBuffer, SpeedSample, TrailPoint


def test_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        HistoryBuffer(0)


def test_oldest_samples_are_evicted_first():
    buf: HistoryBuffer[int] = HistoryBuffer(500)
    for i in range(503):
        buf.append(i)
    assert len(buf) == 500
    assert buf.capacity == 500
    assert buf[0] == 3
    assert buf.latest() == 502
    assert buf.view() == tuple(range(3, 503))


def test_view_is_a_snapshot():
    buf: HistoryBuffer[TrailPoint] = HistoryBuffer(3)
    buf.append(TrailPoint(1.0, 2.0))
    view = buf.view()
    buf.append(TrailPoint(3.0, 4.0))
    assert view == (TrailPoint(1.0, 2.0),)
    assert list(buf) == [TrailPoint(1.0, 2.0), TrailPoint(3.0, 4.0)]


def test_clear():
    buf: HistoryBuffer[SpeedSample] = HistoryBuffer(2)
    assert buf.latest() is None
    buf.append(SpeedSample(292.0, 10.0))
    buf.clear()
    assert len(buf) == 0
    assert buf.latest() is None
