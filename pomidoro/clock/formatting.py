"""Duration rendering."""

from datetime import time

NANOS_PER_SECOND = 1_000_000_000


def format_duration(duration: int, fmt: str) -> str:
    """Render a duration with a strftime pattern.

    Sub-second precision is dropped before formatting, so "%M:%S" renders
    90.9 seconds as "01:30".

    Args:
        duration: Non-negative duration in nanoseconds.
        fmt: strftime pattern, e.g. "%M:%S" or "%H:%M:%S".

    Returns:
        The formatted text.

    Raises:
        ValueError: If the duration is negative or spans 24 hours or more.
    """
    total_seconds = duration // NANOS_PER_SECOND
    seconds = total_seconds % 60
    minutes = (total_seconds % 3600) // 60
    hours = total_seconds // 3600

    if duration < 0 or hours >= 24:
        raise ValueError(f"Cannot format a duration of {total_seconds} seconds")
    return time(hours, minutes, seconds).strftime(fmt)
