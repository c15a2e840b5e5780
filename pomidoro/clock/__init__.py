"""Clock and session-cycle engine."""

from pomidoro.clock.clock import Clock, ClockError, Paused, Running
from pomidoro.clock.formatting import NANOS_PER_SECOND, format_duration
from pomidoro.clock.pomodoro import DEFAULT_TIME_FORMAT, EmptySessionsError, PomodoroClock

__all__ = [
    "Clock",
    "ClockError",
    "DEFAULT_TIME_FORMAT",
    "EmptySessionsError",
    "NANOS_PER_SECOND",
    "Paused",
    "PomodoroClock",
    "Running",
    "format_duration",
]
