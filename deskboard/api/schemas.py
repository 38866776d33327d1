"""Request bodies accepted by the API.

Every field is optional at the schema level; the routers decide what is
required so the error messages name the missing field.  Strict types keep
pydantic from coercing ``"yes"`` into ``True``.
"""

from __future__ import annotations

from pydantic import BaseModel, StrictBool, StrictFloat, StrictInt, StrictStr


class NoteCreate(BaseModel):
    title: StrictStr | None = None
    content: StrictStr | None = None


class NoteUpdate(BaseModel):
    title: StrictStr | None = None
    content: StrictStr | None = None


class TaskCreate(BaseModel):
    title: StrictStr | None = None
    priority: StrictStr | None = None
    due_date: StrictStr | None = None


class TaskUpdate(BaseModel):
    title: StrictStr | None = None
    completed: StrictBool | None = None
    priority: StrictStr | None = None
    due_date: StrictStr | None = None


class LinkCreate(BaseModel):
    title: StrictStr | None = None
    url: StrictStr | None = None
    icon: StrictStr | None = None


class LinkUpdate(BaseModel):
    title: StrictStr | None = None
    url: StrictStr | None = None
    icon: StrictStr | None = None


class LinkPosition(BaseModel):
    id: StrictInt
    position: StrictInt


class LinkReorder(BaseModel):
    links: list[LinkPosition]


class SessionCreate(BaseModel):
    duration: StrictInt | StrictFloat | None = None


def envelope(data) -> dict:
    """Wrap a payload the way every successful response is wrapped."""
    return {"data": data, "success": True}
