"""Pomodoro engine: a pausable clock mapped onto a repeating session cycle."""

import logging
from collections.abc import Iterable, Iterator

from pomidoro.clock.clock import Clock, Paused
from pomidoro.clock.formatting import format_duration
from pomidoro.model.session import Session
from pomidoro.model.state import PomodoroState

logger = logging.getLogger(__name__)

DEFAULT_TIME_FORMAT = "%M:%S"


class EmptySessionsError(RuntimeError):
    """Raised when the engine is queried without any session configured."""

    def __init__(self) -> None:
        super().__init__("There should be at least one session defined")


class PomodoroClock:
    """Tracks elapsed time across an endlessly repeating list of sessions.

    The engine owns a single `Clock`. Elapsed time is reduced modulo the
    cycle length to locate the current session; commands replace the clock
    with a new one.

    Args:
        sessions: Sessions in cycle order.
        default_time_format: strftime pattern for sessions without their own.
        clock: Initial clock. Defaults to paused at zero.
    """

    def __init__(
        self,
        sessions: Iterable[Session],
        default_time_format: str = DEFAULT_TIME_FORMAT,
        clock: Clock | None = None,
    ):
        self.sessions: list[Session] = list(sessions)
        self.default_time_format = default_time_format
        self.clock: Clock = clock if clock is not None else Paused()

    @classmethod
    def paused(
        cls,
        sessions: Iterable[Session],
        default_time_format: str = DEFAULT_TIME_FORMAT,
    ) -> "PomodoroClock":
        """Create an engine with a paused clock at zero."""
        return cls(sessions, default_time_format)

    @property
    def cycle_duration(self) -> int:
        """Sum of all session durations."""
        return sum(session.duration for session in self.sessions)

    def sessions_bounds(self) -> Iterator[range]:
        """Yield the half-open `[start, end)` span of each session in order."""
        start = 0
        for session in self.sessions:
            end = start + session.duration
            yield range(start, end)
            start = end

    def elapsed_until(self, instant: int) -> int:
        """Elapsed time at `instant`, reduced into the current cycle.

        Raises:
            ClockError: If `instant` precedes the clock's reference point.
            EmptySessionsError: If no session is configured.
        """
        if not self.sessions:
            raise EmptySessionsError()
        elapsed = self.clock.duration_until(instant)
        cycle = self.cycle_duration
        if cycle == 0:
            return 0
        return elapsed % cycle

    def _current(self, elapsed: int) -> tuple[Session, range]:
        """Locate the session for a reduced elapsed value.

        Walks the sessions in order and keeps the last one that either
        contains `elapsed` or has already ended at or before it.
        """
        current: tuple[Session, range] | None = None
        for session, bounds in zip(self.sessions, self.sessions_bounds()):
            if elapsed >= bounds.stop or elapsed in bounds:
                current = (session, bounds)
            else:
                break
        if current is None:
            raise EmptySessionsError()
        return current

    def state_at(self, instant: int) -> PomodoroState:
        """Compute the displayed state at `instant`.

        Raises:
            ClockError: If `instant` precedes the clock's reference point.
            EmptySessionsError: If no session is configured.
        """
        elapsed = self.elapsed_until(instant)
        session, bounds = self._current(elapsed)
        time_left = max(bounds.stop - elapsed, 0)
        time_format = session.time_format or self.default_time_format

        if session.duration == 0:
            percent = 0
        else:
            percent = (session.duration - time_left) * 100 // session.duration

        return PomodoroState(
            is_paused=self.clock.is_paused,
            time=format_duration(time_left, time_format),
            session_name=session.name,
            session_duration=format_duration(session.duration, time_format),
            percent=percent,
        )

    def toggle(self, now: int) -> None:
        """Pause a running clock or resume a paused one.

        Raises:
            ClockError: If `now` precedes the clock's reference point.
        """
        self.clock = self.clock.toggle(now)
        logger.debug(f"Clock toggled, paused={self.clock.is_paused}")

    def skip_session(self, now: int) -> None:
        """Jump to the start of the next session.

        Raises:
            ClockError: If `now` precedes the clock's reference point.
            EmptySessionsError: If no session is configured.
        """
        elapsed = self.elapsed_until(now)
        session, bounds = self._current(elapsed)
        skip_by = bounds.stop - elapsed
        self.clock = self.clock.skip_by(skip_by)
        logger.debug(f"Skipped {skip_by}ns to the end of session '{session.name}'")

    def reset(self) -> None:
        """Pause the clock at zero elapsed time."""
        self.clock = Paused()
        logger.debug("Clock reset")
