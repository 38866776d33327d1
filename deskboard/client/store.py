"""Dual-persistence resource stores.

Each store keeps an in-memory *mirror* of one resource kind and routes
every mutation to one of two backends:

REMOTE   the REST API (ids and timestamps come from the server)
LOCAL    an on-device snapshot: the whole mirror serialized as JSON

``load()`` probes the API once.  Success means REMOTE; any failure means
LOCAL, with the previous snapshot (or a default collection) as the
mirror.  The mode then stays put until ``reprobe()`` is called.

Contract shared by both modes:

- ``update`` / ``delete`` / ``toggle`` raise :class:`NotFoundError` for an
  id that is not in the mirror.
- A mutation that raises leaves the mirror exactly as it was.
- Required fields are checked before anything is sent or written.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime
from enum import Enum

from ..errors import DashboardError, NotFoundError, PersistenceError, ValidationError
from ..validation import normalize_url, validate_date, validate_not_blank, validate_priority
from .records import (
    LinkUpdate, Note, QuickLink, RecordId, Task,
)
from .remote import ResourceApi
from .snapshot import SnapshotStore

logger = logging.getLogger(__name__)


class StorageMode(Enum):
    REMOTE = "remote"
    LOCAL = "local"


def _now_iso() -> str:
    return datetime.now().isoformat()


class ResourceStore:
    """Base class; subclasses pick the record type and payload rules."""

    record_type = None
    snapshot_key = ""

    def __init__(self, api: ResourceApi, snapshots: SnapshotStore) -> None:
        self._api = api
        self._snapshots = snapshots
        self._mirror: list = []
        self._mode: StorageMode | None = None
        self._last_local_id = 0

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def mode(self) -> StorageMode | None:
        """``None`` until ``load()`` has run."""
        return self._mode

    @property
    def records(self) -> list:
        """A copy of the mirror, in display order."""
        return list(self._mirror)

    @property
    def resource(self) -> str:
        return self._api.resource

    def get(self, record_id: RecordId):
        return self._find(record_id)[1]

    # ══════════════════════════════════════════════════════════════════
    #  LOADING
    # ══════════════════════════════════════════════════════════════════

    def load(self) -> list:
        """Probe the API, falling back to the local snapshot."""
        try:
            records = self._fetch_remote()
        except DashboardError as exc:
            logger.warning(
                "%s API unavailable (%s); using local storage", self.resource, exc,
            )
            self._mode = StorageMode.LOCAL
            self._mirror = self._read_snapshot()
        else:
            self._mode = StorageMode.REMOTE
            self._mirror = records
        self._after_load()
        return self.records

    def reprobe(self) -> StorageMode:
        """Try the API again; switch to REMOTE (and its data) on success.

        Records created while LOCAL stay in the snapshot; they are not
        uploaded.
        """
        try:
            records = self._fetch_remote()
        except DashboardError as exc:
            logger.info("%s API still unavailable: %s", self.resource, exc)
            if self._mode is None:
                self._mode = StorageMode.LOCAL
                self._mirror = self._read_snapshot()
                self._after_load()
            return self._mode
        self._mode = StorageMode.REMOTE
        self._mirror = records
        self._after_load()
        logger.info("%s store switched to remote storage", self.resource)
        return self._mode

    def _fetch_remote(self) -> list:
        try:
            return [self.record_type.from_dict(item) for item in self._api.list_all()]
        except TypeError as exc:
            raise PersistenceError(f"malformed {self.resource} payload: {exc}") from exc

    def _ensure_loaded(self) -> None:
        if self._mode is None:
            self.load()

    def _after_load(self) -> None:
        """Hook for subclasses that keep the mirror in a particular order."""

    # ══════════════════════════════════════════════════════════════════
    #  LOCAL SNAPSHOT
    # ══════════════════════════════════════════════════════════════════

    def default_records(self) -> list:
        """Collection used when no snapshot exists yet."""
        return []

    def _read_snapshot(self) -> list:
        try:
            raw = self._snapshots.get(self.snapshot_key)
        except OSError as exc:
            logger.error("Could not read %s snapshot: %s", self.snapshot_key, exc)
            raw = None
        if raw is not None:
            try:
                items = json.loads(raw)
                if not isinstance(items, list):
                    raise TypeError("snapshot is not a list")
                return [self.record_type.from_dict(item) for item in items]
            except (ValueError, TypeError) as exc:
                logger.error("Discarding unreadable %s snapshot: %s", self.snapshot_key, exc)

        records = self.default_records()
        try:
            self._write_snapshot(records)
        except PersistenceError as exc:
            # the defaults stay in memory until a later write succeeds
            logger.warning("Could not save default %s: %s", self.snapshot_key, exc)
        return records

    def _write_snapshot(self, records: list) -> None:
        blob = json.dumps([r.to_dict() for r in records], ensure_ascii=False)
        try:
            self._snapshots.set(self.snapshot_key, blob)
        except OSError as exc:
            raise PersistenceError(f"could not write {self.snapshot_key} snapshot: {exc}") from exc

    def _provisional_id(self) -> str:
        """Millisecond timestamp, bumped until unique within this store."""
        taken = {str(r.id) for r in self._mirror}
        token = max(int(time.time() * 1000), self._last_local_id + 1)
        while str(token) in taken:
            token += 1
        self._last_local_id = token
        return str(token)

    # ══════════════════════════════════════════════════════════════════
    #  MUTATIONS
    # ══════════════════════════════════════════════════════════════════

    def _find(self, record_id: RecordId) -> tuple[int, object]:
        for index, record in enumerate(self._mirror):
            if record.id == record_id:
                return index, record
        raise NotFoundError(self.resource)

    def _create(self, payload: dict):
        """Append a record built from *payload* (already validated)."""
        self._ensure_loaded()
        if self._mode == StorageMode.REMOTE:
            record = self._from_remote(self._api.create(payload))
            self._mirror = self._mirror + [record]
        else:
            record = self._build_local(self._provisional_id(), payload)
            mirror = self._mirror + [record]
            self._write_snapshot(mirror)
            self._mirror = mirror
        logger.debug("Created %s %s (%s)", self.resource, record.id, self._mode.value)
        return record

    def _build_local(self, record_id: str, payload: dict):
        return self.record_type(id=record_id, created_at=_now_iso(), **payload)

    def _from_remote(self, data):
        try:
            return self.record_type.from_dict(data)
        except TypeError as exc:
            raise PersistenceError(f"malformed {self.resource} payload: {exc}") from exc

    def _replace(self, index: int, record) -> None:
        mirror = list(self._mirror)
        mirror[index] = record
        if self._mode == StorageMode.LOCAL:
            self._write_snapshot(mirror)
        self._mirror = mirror

    def update(self, record_id: RecordId, changes):
        """Merge the provided fields of *changes* into one record."""
        self._ensure_loaded()
        index, current = self._find(record_id)
        fields = self._validate_changes(changes.changes())
        if not fields:
            raise ValidationError("No fields to update")

        if self._mode == StorageMode.REMOTE:
            updated = self._from_remote(self._api.update(record_id, fields))
        else:
            updated = self._merge_local(current, fields)
        self._replace(index, updated)
        return updated

    def _validate_changes(self, fields: dict) -> dict:
        if "title" in fields:
            validate_not_blank(fields["title"], "title")
        return fields

    def _merge_local(self, current, fields: dict):
        data = current.to_dict()
        data.update(fields)
        return self.record_type.from_dict(data)

    def delete(self, record_id: RecordId) -> None:
        self._ensure_loaded()
        index, _ = self._find(record_id)
        if self._mode == StorageMode.REMOTE:
            self._api.delete(record_id)
        mirror = self._mirror[:index] + self._mirror[index + 1:]
        if self._mode == StorageMode.LOCAL:
            self._write_snapshot(mirror)
        self._mirror = mirror


# ═══════════════════════════════════════════════════════════════════════════
#  CONCRETE STORES
# ═══════════════════════════════════════════════════════════════════════════


class NoteStore(ResourceStore):
    record_type = Note
    snapshot_key = "notes"

    def create(self, title: str, content: str) -> Note:
        validate_not_blank(title, "title")
        validate_not_blank(content, "content")
        return self._create({"title": title, "content": content})

    def _build_local(self, record_id: str, payload: dict) -> Note:
        stamp = _now_iso()
        return Note(id=record_id, created_at=stamp, updated_at=stamp, **payload)

    def _validate_changes(self, fields: dict) -> dict:
        fields = super()._validate_changes(fields)
        if "content" in fields:
            validate_not_blank(fields["content"], "content")
        return fields

    def _merge_local(self, current, fields: dict) -> Note:
        note = super()._merge_local(current, fields)
        note.updated_at = _now_iso()
        return note


class TaskStore(ResourceStore):
    record_type = Task
    snapshot_key = "tasks"

    def create(
        self,
        title: str,
        priority: str = "medium",
        due_date: str | None = None,
    ) -> Task:
        validate_not_blank(title, "title")
        validate_priority(priority)
        if due_date:
            validate_date(due_date)
        payload = {"title": title, "priority": priority}
        if due_date:
            payload["due_date"] = due_date
        return self._create(payload)

    def _build_local(self, record_id: str, payload: dict) -> Task:
        return Task(id=record_id, completed=False, created_at=_now_iso(), **payload)

    def _validate_changes(self, fields: dict) -> dict:
        fields = super()._validate_changes(fields)
        if "priority" in fields:
            validate_priority(fields["priority"])
        if "completed" in fields and not isinstance(fields["completed"], bool):
            raise ValidationError("completed must be a boolean")
        if fields.get("due_date") is not None:
            validate_date(fields["due_date"])
        return fields

    def toggle(self, record_id: RecordId) -> Task:
        """Flip ``completed``."""
        self._ensure_loaded()
        index, current = self._find(record_id)
        if self._mode == StorageMode.REMOTE:
            updated = self._from_remote(self._api.toggle(record_id))
        else:
            updated = self._merge_local(current, {"completed": not current.completed})
        self._replace(index, updated)
        return updated


DEFAULT_LINK_ICON = "🔗"

SEED_LINKS = (
    ("GitHub", "https://github.com", "🐙"),
    ("Gmail", "https://gmail.com", "📧"),
    ("Calendar", "https://calendar.google.com", "📅"),
)


class LinkStore(ResourceStore):
    """Quick links, always kept sorted by ``position``."""

    record_type = QuickLink
    snapshot_key = "quickLinks"

    def default_records(self) -> list[QuickLink]:
        stamp = _now_iso()
        return [
            QuickLink(
                id=str(index + 1), title=title, url=url, icon=icon,
                position=index, created_at=stamp,
            )
            for index, (title, url, icon) in enumerate(SEED_LINKS)
        ]

    def _after_load(self) -> None:
        self._sort()

    def _sort(self) -> None:
        # stable: equal positions keep their load order
        self._mirror = sorted(self._mirror, key=lambda link: link.position)

    def create(self, title: str, url: str, icon: str | None = None) -> QuickLink:
        validate_not_blank(title, "title")
        validate_not_blank(url, "url")
        payload = {
            "title": title,
            "url": normalize_url(url.strip()),
            "icon": icon or DEFAULT_LINK_ICON,
        }
        return self._create(payload)

    def _build_local(self, record_id: str, payload: dict) -> QuickLink:
        next_position = max((link.position for link in self._mirror), default=-1) + 1
        return QuickLink(
            id=record_id, position=next_position, created_at=_now_iso(), **payload,
        )

    def _validate_changes(self, fields: dict) -> dict:
        fields = super()._validate_changes(fields)
        if "url" in fields:
            validate_not_blank(fields["url"], "url")
            fields = {**fields, "url": normalize_url(fields["url"].strip())}
        return fields

    def update(self, record_id: RecordId, changes: LinkUpdate) -> QuickLink:
        link = super().update(record_id, changes)
        self._sort()
        return link

    def reorder(self, ordered_ids: list[RecordId]) -> list[QuickLink]:
        """Put the given links first, in that order; the rest keep theirs.

        Positions are rewritten as 0..n-1.
        """
        self._ensure_loaded()
        by_id = {}
        for record_id in ordered_ids:
            _, link = self._find(record_id)
            by_id[link.id] = link
        rest = [link for link in self._mirror if link.id not in by_id]
        ordered = list(by_id.values()) + rest
        positions = [{"id": link.id, "position": index} for index, link in enumerate(ordered)]

        if self._mode == StorageMode.REMOTE:
            mirror = [self._from_remote(item) for item in self._api.reorder(positions)]
        else:
            mirror = [
                self._merge_local(link, {"position": index})
                for index, link in enumerate(ordered)
            ]
            self._write_snapshot(mirror)
        self._mirror = mirror
        self._sort()
        return self.records
