"""``/links``: quick links kept in ``position`` order."""

from __future__ import annotations

from fastapi import APIRouter
from sqlalchemy import func

from ...database.db import get_session
from ...database.models import Link
from ...errors import NotFoundError, ValidationError
from ...validation import validate_required, validate_url
from ..schemas import LinkCreate, LinkReorder, LinkUpdate, envelope

router = APIRouter(prefix="/links", tags=["links"])


def _all_links(db) -> list[dict]:
    links = db.query(Link).order_by(Link.position.asc(), Link.id.asc()).all()
    return [link.to_dict() for link in links]


@router.get("")
def list_links() -> dict:
    with get_session() as db:
        return envelope(_all_links(db))


@router.post("", status_code=201)
def create_link(body: LinkCreate) -> dict:
    validate_required(body.title, "title")
    validate_required(body.url, "url")
    validate_url(body.url)

    with get_session() as db:
        max_position = db.query(func.coalesce(func.max(Link.position), -1)).scalar()
        link = Link(
            title=body.title,
            url=body.url,
            icon=body.icon or None,
            position=max_position + 1,
        )
        db.add(link)
        db.flush()
        return envelope(link.to_dict())


# Declared before ``/{link_id}`` so "reorder" is never parsed as an id.
@router.put("/reorder")
def reorder_links(body: LinkReorder) -> dict:
    """Apply ``{id, position}`` pairs in one transaction."""
    with get_session() as db:
        for entry in body.links:
            link = db.get(Link, entry.id)
            if link is None:
                raise NotFoundError("Link")
            link.position = entry.position
        db.flush()
        return envelope(_all_links(db))


@router.put("/{link_id}")
def update_link(link_id: int, body: LinkUpdate) -> dict:
    changes = body.model_dump(exclude_unset=True)
    with get_session() as db:
        link = db.get(Link, link_id)
        if link is None:
            raise NotFoundError("Link")

        if "title" in changes:
            validate_required(changes["title"], "title")
        if "url" in changes:
            validate_required(changes["url"], "url")
            validate_url(changes["url"])
        if not changes:
            raise ValidationError("No fields to update")

        for field, value in changes.items():
            setattr(link, field, value)
        db.flush()
        return envelope(link.to_dict())


@router.delete("/{link_id}")
def delete_link(link_id: int) -> dict:
    with get_session() as db:
        link = db.get(Link, link_id)
        if link is None:
            raise NotFoundError("Link")
        db.delete(link)
        return envelope({"id": link_id})
