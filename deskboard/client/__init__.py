"""Desktop-side access to the dashboard data.

``build_stores`` wires one :class:`ApiClient` and one snapshot store into
the three resource stores::

    stores = build_stores(settings)
    stores.tasks.load()
    stores.tasks.create("Buy milk")
"""

from __future__ import annotations

from dataclasses import dataclass

from ..settings import Settings
from .remote import ApiClient, LinkApi, NoteApi, PomodoroApi, TaskApi
from .snapshot import JsonFileSnapshotStore, MemorySnapshotStore, SnapshotStore
from .store import LinkStore, NoteStore, StorageMode, TaskStore


@dataclass
class Stores:
    notes: NoteStore
    tasks: TaskStore
    links: LinkStore
    pomodoro: PomodoroApi

    def load_all(self) -> None:
        for store in (self.notes, self.tasks, self.links):
            store.load()


def build_stores(
    settings: Settings,
    *,
    session=None,
    snapshots: SnapshotStore | None = None,
) -> Stores:
    client = ApiClient(
        settings.api_base_url, session=session, timeout=settings.request_timeout,
    )
    if snapshots is None:
        snapshots = JsonFileSnapshotStore()
    return Stores(
        notes=NoteStore(NoteApi(client), snapshots),
        tasks=TaskStore(TaskApi(client), snapshots),
        links=LinkStore(LinkApi(client), snapshots),
        pomodoro=PomodoroApi(client),
    )


__all__ = [
    "ApiClient",
    "JsonFileSnapshotStore",
    "LinkStore",
    "MemorySnapshotStore",
    "NoteStore",
    "PomodoroApi",
    "SnapshotStore",
    "StorageMode",
    "Stores",
    "TaskStore",
    "build_stores",
]
