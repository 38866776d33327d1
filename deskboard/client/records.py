"""Client-side records and their partial-update structures.

Records mirror the JSON the API returns (snake_case keys).  Remote ids are
integers; ids minted while offline are string tokens.

Each ``*Update`` lists the fields that may change for its kind.  Fields
left at :data:`UNSET` are not touched, so ``TaskUpdate(due_date=None)``
clears a due date while ``TaskUpdate()`` changes nothing.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, fields
from typing import Union

RecordId = Union[int, str]


class _Unset:
    """Marker for "field not provided"."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()


class _RecordMixin:

    @classmethod
    def from_dict(cls, data: dict):
        """Build a record from a JSON object, ignoring unknown keys.

        Raises ``TypeError`` when a required key is missing.
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected an object, got {type(data).__name__}")
        valid_keys = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in valid_keys})

    def to_dict(self) -> dict:
        return asdict(self)


class _UpdateMixin:

    def changes(self) -> dict:
        """Only the fields that were provided."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def __bool__(self) -> bool:
        return bool(self.changes())


# ── records ───────────────────────────────────────────────────────────────


@dataclass
class Note(_RecordMixin):
    id: RecordId
    title: str
    content: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


@dataclass
class Task(_RecordMixin):
    id: RecordId
    title: str
    completed: bool = False
    priority: str = "medium"
    due_date: str | None = None
    created_at: str | None = None


@dataclass
class QuickLink(_RecordMixin):
    id: RecordId
    title: str
    url: str
    icon: str | None = None
    position: int = 0
    created_at: str | None = None


# ── partial updates ───────────────────────────────────────────────────────


@dataclass
class NoteUpdate(_UpdateMixin):
    title: str | _Unset = UNSET
    content: str | _Unset = UNSET


@dataclass
class TaskUpdate(_UpdateMixin):
    title: str | _Unset = UNSET
    completed: bool | _Unset = UNSET
    priority: str | _Unset = UNSET
    due_date: str | None | _Unset = UNSET


@dataclass
class LinkUpdate(_UpdateMixin):
    title: str | _Unset = UNSET
    url: str | _Unset = UNSET
    icon: str | None | _Unset = UNSET
