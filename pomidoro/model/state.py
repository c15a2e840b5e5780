"""Snapshot of the pomodoro clock as reported to clients."""

from pydantic import BaseModel, ConfigDict, Field


class PomodoroState(BaseModel):
    """Computed view of the clock at a single instant.

    Validation is strict so that a decoded reply carries exactly the
    JSON types it was encoded with.

    Attributes:
        is_paused: Whether the clock is currently paused.
        time: Formatted time left in the current session.
        session_name: Name of the current session.
        session_duration: Formatted total duration of the current session.
        percent: Share of the current session already elapsed, 0 to 100.
    """

    is_paused: bool
    time: str
    session_name: str
    session_duration: str
    percent: int = Field(ge=0, le=100)

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")
