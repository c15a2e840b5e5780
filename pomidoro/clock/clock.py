"""Pausable monotonic clock.

A clock is either running or paused. Both variants are immutable; every
transition returns a new clock. Instants and durations are integer
nanoseconds taken from `time.monotonic_ns()`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class ClockError(RuntimeError):
    """Raised when a queried instant is older than the clock's resume time."""

    def __init__(self, instant: int, resumed_at: int):
        self.instant = instant
        self.resumed_at = resumed_at
        super().__init__(
            f"Instant {instant} is older than the resumed time {resumed_at}"
        )


class Clock(ABC):
    """Base class for the two clock states."""

    @property
    @abstractmethod
    def is_paused(self) -> bool:
        """Whether elapsed time is frozen."""
        ...

    @abstractmethod
    def duration_until(self, instant: int) -> int:
        """Total elapsed time at `instant`.

        Raises:
            ClockError: If `instant` precedes the clock's reference point.
        """
        ...

    @abstractmethod
    def toggle(self, now: int) -> "Clock":
        """Switch between running and paused at `now`.

        Raises:
            ClockError: If `now` precedes the clock's reference point.
        """
        ...

    @abstractmethod
    def skip_by(self, duration: int) -> "Clock":
        """Add `duration` to the accumulated time, keeping the state."""
        ...


@dataclass(frozen=True)
class Running(Clock):
    """Clock counting from `resumed_at`, with `offset` accumulated before."""

    resumed_at: int
    offset: int = 0

    @property
    def is_paused(self) -> bool:
        return False

    def duration_until(self, instant: int) -> int:
        if instant < self.resumed_at:
            raise ClockError(instant, self.resumed_at)
        return instant - self.resumed_at + self.offset

    def toggle(self, now: int) -> "Paused":
        return Paused(elapsed=self.duration_until(now))

    def skip_by(self, duration: int) -> "Running":
        return Running(resumed_at=self.resumed_at, offset=self.offset + duration)


@dataclass(frozen=True)
class Paused(Clock):
    """Clock with a frozen `elapsed` total."""

    elapsed: int = 0

    @property
    def is_paused(self) -> bool:
        return True

    def duration_until(self, instant: int) -> int:
        return self.elapsed

    def toggle(self, now: int) -> Running:
        return Running(resumed_at=now, offset=self.elapsed)

    def skip_by(self, duration: int) -> "Paused":
        return Paused(elapsed=self.elapsed + duration)
