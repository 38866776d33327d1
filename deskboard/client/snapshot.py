"""On-device key-value snapshot stores.

A snapshot is an opaque string (serialized JSON) per resource kind.  The
stores know nothing about its contents.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from ..settings import APP_SUPPORT_DIR

logger = logging.getLogger(__name__)

SNAPSHOT_DIR = APP_SUPPORT_DIR / "snapshots"

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class SnapshotStore:
    """Interface: ``get`` / ``set`` / ``remove`` string blobs by key."""

    def get(self, key: str) -> str | None:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemorySnapshotStore(SnapshotStore):
    """Keeps snapshots in a dict; lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileSnapshotStore(SnapshotStore):
    """One ``<key>.json`` file per key inside *directory*."""

    def __init__(self, directory: Path | None = None) -> None:
        self._dir = directory or SNAPSHOT_DIR

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"invalid snapshot key: {key!r}")
        return self._dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        # write-then-rename so a crash never leaves half a snapshot
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)
        logger.debug("Wrote snapshot %s (%d bytes)", path.name, len(value))

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
