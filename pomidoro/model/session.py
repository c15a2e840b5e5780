"""Domain models for the session cycle."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Session:
    """One named span of the repeating pomodoro cycle.

    Attributes:
        name: Display name (e.g., "work", "rest").
        duration: Length of the session in nanoseconds.
        time_format: strftime pattern overriding the default time format.
    """

    name: str
    duration: int
    time_format: str | None = None
