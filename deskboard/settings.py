"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/Deskboard/settings.json

Set ``DESKBOARD_HOME`` to move the whole app-support directory (database,
snapshots, sounds, logs and settings).

Usage::

    settings = load_settings()
    settings.work_minutes = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path

logger = logging.getLogger(__name__)


APP_SUPPORT_DIR = Path(
    os.environ.get(
        "DESKBOARD_HOME",
        Path.home() / "Library" / "Application Support" / "Deskboard",
    )
)
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── remote API ────────────────────────────────────────────────────
    api_base_url: str = "http://localhost:3010/api"
    request_timeout: float = 5.0           # seconds

    # ── server ────────────────────────────────────────────────────────
    server_host: str = "127.0.0.1"
    server_port: int = 3010
    database_url: str | None = None        # None → sqlite file in APP_SUPPORT_DIR

    # ── pomodoro ──────────────────────────────────────────────────────
    work_minutes: int = 25
    break_minutes: int = 5
    sound_enabled: bool = True

    # ── weather ───────────────────────────────────────────────────────
    weather_latitude: float = 51.5074
    weather_longitude: float = -0.1278
    weather_location_name: str = "London, UK"

    # ── logging ───────────────────────────────────────────────────────
    log_level: str = "INFO"


_DURATION_KEYS = ("work_minutes", "break_minutes")


def _drop_bad_durations(data: dict) -> dict:
    """Remove timer durations that are not positive ints so the defaults apply."""
    for key in _DURATION_KEYS:
        if key not in data:
            continue
        value = data[key]
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            logger.warning("Ignoring invalid %s in settings: %r", key, value)
            del data[key]
    return data


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**_drop_bad_durations(filtered))
    except (OSError, ValueError, TypeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
