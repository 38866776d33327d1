"""Timer package."""

from .engine import (
    PomodoroTimer,
    Mode,
    DEFAULT_WORK_MINUTES,
    DEFAULT_BREAK_MINUTES,
    TICK_INTERVAL_MS,
    format_time,
)

__all__ = [
    "PomodoroTimer",
    "Mode",
    "DEFAULT_WORK_MINUTES",
    "DEFAULT_BREAK_MINUTES",
    "TICK_INTERVAL_MS",
    "format_time",
]
