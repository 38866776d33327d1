"""SQLAlchemy ORM models for the dashboard API."""

from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Text
)
from sqlalchemy.orm import DeclarativeBase


def _now() -> datetime:
    return datetime.now()


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class Base(DeclarativeBase):
    pass


class Note(Base):
    """Free-form note; ``updated_at`` is refreshed on every edit."""

    __tablename__ = "notes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=_now)
    updated_at = Column(DateTime, nullable=False, default=_now, onupdate=_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Note id={self.id} title={self.title!r}>"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    priority = Column(String(10), nullable=False, default="medium")  # low | medium | high
    due_date = Column(String(32), nullable=True)
    created_at = Column(DateTime, nullable=False, default=_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "completed": bool(self.completed),
            "priority": self.priority,
            "due_date": self.due_date,
            "created_at": _iso(self.created_at),
        }

    def __repr__(self) -> str:
        return (
            f"<Task id={self.id} priority={self.priority} "
            f"completed={self.completed}>"
        )


class Link(Base):
    """Quick link; ``position`` only orders the display."""

    __tablename__ = "links"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    url = Column(String(2048), nullable=False)
    icon = Column(String(32), nullable=True)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "icon": self.icon,
            "position": self.position,
            "created_at": _iso(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<Link id={self.id} position={self.position} url={self.url!r}>"


class PomodoroSession(Base):
    """One completed work interval."""

    __tablename__ = "pomodoro_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    duration = Column(Integer, nullable=False)  # minutes
    completed_at = Column(DateTime, nullable=False, default=_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "duration": self.duration,
            "completed_at": _iso(self.completed_at),
        }

    def __repr__(self) -> str:
        return f"<PomodoroSession id={self.id} duration={self.duration}m>"
