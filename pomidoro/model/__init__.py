"""pomidoro domain models - pure value types.

These dataclasses carry no behavior beyond serialization and have no
dependencies on the clock, transport, or configuration layers.
"""

from pomidoro.model.session import Session
from pomidoro.model.state import PomodoroState

__all__ = [
    "PomodoroState",
    "Session",
]
