"""Fixed-capacity sample histories fed by the integrator each tick."""
from __future__ import annotations

from collections import deque
from typing import Generic, Iterator, NamedTuple, TypeVar

T = TypeVar("T")


class TrailPoint(NamedTuple):
    x: float  # km
    y: float  # km


class SpeedSample(NamedTuple):
    time: float  # s
    speed: float  # km/s


class HistoryBuffer(Generic[T]):
    """FIFO that drops its oldest sample once ``capacity`` is reached.

    Index 0 is always the oldest retained sample.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._samples: deque[T] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._samples.maxlen  # type: ignore[return-value]

    def append(self, sample: T) -> None:
        self._samples.append(sample)

    def clear(self) -> None:
        self._samples.clear()

    def view(self) -> tuple[T, ...]:
        """Read-only snapshot in chronological order."""

        return tuple(self._samples)

    def latest(self) -> T | None:
        return self._samples[-1] if self._samples else None

    def __len__(self) -> int:
        return len(self._samples)

    def __getitem__(self, index: int) -> T:
        return self._samples[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self._samples)


__all__ = ["HistoryBuffer", "SpeedSample", "TrailPoint"]
