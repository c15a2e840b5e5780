"""Pydantic configuration models for pomidoro.

This module defines the configuration schema read from config.yaml.
For loading logic, see loader.py.
"""

import logging
from datetime import timedelta
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from pomidoro.core.paths import default_log_dir, default_socket_dir, server_socket_path
from pomidoro.model.session import Session

_NANOS_PER_MICROSECOND = 1_000


class SessionConfig(BaseModel):
    """Configuration for a single session of the cycle."""

    name: str = Field(description="Session name shown to clients")
    duration: timedelta = Field(description="Session length (seconds, HH:MM:SS, or ISO 8601)")
    time_format: str | None = Field(default=None, description="strftime pattern overriding time_format")

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v: timedelta) -> timedelta:
        """Durations must be renderable as a time of day."""
        if v < timedelta(0):
            raise ValueError("Session duration cannot be negative")
        if v >= timedelta(days=1):
            raise ValueError("Session duration must be shorter than 24 hours")
        return v

    def to_session(self) -> Session:
        """Convert to the engine's Session value (nanosecond duration)."""
        return Session(
            name=self.name,
            duration=(self.duration // timedelta(microseconds=1)) * _NANOS_PER_MICROSECOND,
            time_format=self.time_format,
        )


def _default_sessions() -> list[SessionConfig]:
    return [
        SessionConfig(name="work", duration=timedelta(minutes=25)),
        SessionConfig(name="rest", duration=timedelta(minutes=5)),
    ]


class LoggingConfig(BaseModel):
    """Configuration for logging system."""

    level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    directory: Path = Field(default_factory=default_log_dir, description="Directory for server log files")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB before rotation")
    backup_count: int = Field(default=5, description="Number of backup log files to keep")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate level is a standard logging level name."""
        if not isinstance(logging.getLevelName(v.upper()), int):
            raise ValueError(f"Invalid logging level '{v}'")
        return v.upper()


class Config(BaseModel):
    """Root configuration for pomidoro."""

    paused_state_text: str = Field(default="paused", description="clock_state text while paused")
    running_state_text: str = Field(default="running", description="clock_state text while running")
    time_format: str = Field(default="%M:%S", description="Default strftime pattern for durations")
    socket_dir: Path = Field(default_factory=default_socket_dir, description="Directory for socket files")
    sessions: list[SessionConfig] = Field(
        default_factory=_default_sessions,
        min_length=1,
        description="Sessions in cycle order",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")

    def server_path(self, server_id: int) -> Path:
        """Endpoint path of the server with the given id."""
        return server_socket_path(self.socket_dir, server_id)

    def build_sessions(self) -> list[Session]:
        """Sessions converted for the engine, in cycle order."""
        return [session.to_session() for session in self.sessions]
