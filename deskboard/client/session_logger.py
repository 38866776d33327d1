"""Posts finished work intervals to ``/pomodoro/session``."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject

from ..errors import DashboardError
from ..timer.engine import Mode, PomodoroTimer
from .remote import PomodoroApi

logger = logging.getLogger(__name__)


class SessionLogger(QObject):
    """Listens to a timer and records each completed work interval.

    Logging is best-effort: a failed POST is logged and the session is
    not retried.
    """

    def __init__(self, api: PomodoroApi, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._api = api

    def attach(self, timer: PomodoroTimer) -> None:
        timer.session_completed.connect(self.on_session_completed)

    def on_session_completed(self, data: dict) -> bool:
        if data.get("mode") != Mode.WORK:
            return False
        try:
            self._api.log_session(data["duration_minutes"])
        except DashboardError as exc:
            logger.warning("Could not log pomodoro session: %s", exc)
            return False
        return True
