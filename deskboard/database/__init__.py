"""Database package."""

from .db import configure_engine, get_session, init_db
from .models import Link, Note, PomodoroSession, Task

__all__ = [
    "configure_engine",
    "get_session",
    "init_db",
    "Link",
    "Note",
    "PomodoroSession",
    "Task",
]
