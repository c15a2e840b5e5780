"""Server-side runtime wiring."""

from pomidoro.runtime.service import PomodoroService

__all__ = ["PomodoroService"]
