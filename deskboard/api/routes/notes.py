"""``/notes``: list, fetch, create, update and delete notes."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter

from ...database.db import get_session
from ...database.models import Note
from ...errors import NotFoundError, ValidationError
from ...validation import validate_required
from ..schemas import NoteCreate, NoteUpdate, envelope

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("")
def list_notes() -> dict:
    with get_session() as db:
        notes = db.query(Note).order_by(Note.updated_at.desc(), Note.id.desc()).all()
        return envelope([n.to_dict() for n in notes])


@router.get("/{note_id}")
def get_note(note_id: int) -> dict:
    with get_session() as db:
        note = db.get(Note, note_id)
        if note is None:
            raise NotFoundError("Note")
        return envelope(note.to_dict())


@router.post("", status_code=201)
def create_note(body: NoteCreate) -> dict:
    validate_required(body.title, "title")
    with get_session() as db:
        note = Note(title=body.title, content=body.content or None)
        db.add(note)
        db.flush()
        return envelope(note.to_dict())


@router.put("/{note_id}")
def update_note(note_id: int, body: NoteUpdate) -> dict:
    changes = body.model_dump(exclude_unset=True)
    with get_session() as db:
        note = db.get(Note, note_id)
        if note is None:
            raise NotFoundError("Note")
        if "title" in changes:
            validate_required(changes["title"], "title")
        if not changes:
            raise ValidationError("No fields to update")
        for field, value in changes.items():
            setattr(note, field, value)
        note.updated_at = datetime.now()
        db.flush()
        return envelope(note.to_dict())


@router.delete("/{note_id}")
def delete_note(note_id: int) -> dict:
    with get_session() as db:
        note = db.get(Note, note_id)
        if note is None:
            raise NotFoundError("Note")
        db.delete(note)
        return envelope({"id": note_id})
