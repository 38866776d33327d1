"""Main dashboard window."""

from __future__ import annotations

import logging

from PyQt6.QtWidgets import QGridLayout, QMainWindow, QStatusBar, QWidget

from .audio.sounds import ToneNotifier
from .client import Stores, build_stores
from .client.session_logger import SessionLogger
from .settings import Settings, load_settings, save_settings
from .timer.engine import PomodoroTimer
from .ui import NotesWidget, PomodoroWidget, QuickLinksWidget, TasksWidget, WeatherWidget
from .weather import Location, WeatherClient

logger = logging.getLogger(__name__)

NOTICE_MS = 5000

STYLESHEET = """
QMainWindow { background: #1e1b2e; }
QFrame#card {
    background: rgba(255, 255, 255, 0.06);
    border: 1px solid rgba(255, 255, 255, 0.12);
    border-radius: 14px;
}
QLabel { color: #f4f4f5; }
QLabel#cardTitle { font-size: 16px; font-weight: 700; }
QLabel#mutedLabel { color: rgba(255, 255, 255, 0.6); }
QPushButton#primaryButton { background: #a78bfa; color: #1e1b2e; font-weight: 600; }
"""


class DashboardWindow(QMainWindow):
    """Weather, pomodoro, tasks, notes and quick links in one grid."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        stores: Stores | None = None,
        weather_client: WeatherClient | None = None,
        play_sounds: bool = True,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Deskboard")
        self.resize(1100, 760)
        self.setStyleSheet(STYLESHEET)

        self._settings = settings or load_settings()
        self._stores = stores or build_stores(self._settings)

        # ── timer + listeners ─────────────────────────────────────────
        self._timer = PomodoroTimer(
            self,
            work_minutes=self._settings.work_minutes,
            break_minutes=self._settings.break_minutes,
            sound_enabled=self._settings.sound_enabled,
        )
        if play_sounds:
            self._notifier = ToneNotifier(self)
            self._notifier.attach(self._timer)
        self._session_logger = SessionLogger(self._stores.pomodoro, self)
        self._session_logger.attach(self._timer)
        self._timer.sound_toggled.connect(self._on_sound_toggled)

        # ── widgets ───────────────────────────────────────────────────
        location = Location(
            self._settings.weather_latitude,
            self._settings.weather_longitude,
            self._settings.weather_location_name,
        )
        self.weather_widget = WeatherWidget(
            weather_client or WeatherClient(timeout=self._settings.request_timeout),
            location,
        )
        self.pomodoro_widget = PomodoroWidget(self._timer)
        self.pomodoro_widget.settings_saved.connect(self._on_timer_settings_saved)
        self.tasks_widget = TasksWidget(self._stores.tasks)
        self.notes_widget = NotesWidget(self._stores.notes)
        self.links_widget = QuickLinksWidget(self._stores.links)

        central = QWidget(self)
        grid = QGridLayout(central)
        grid.setContentsMargins(20, 20, 20, 20)
        grid.setSpacing(16)
        grid.addWidget(self.weather_widget, 0, 0)
        grid.addWidget(self.pomodoro_widget, 1, 0)
        grid.addWidget(self.tasks_widget, 0, 1, 2, 1)
        grid.addWidget(self.notes_widget, 0, 2)
        grid.addWidget(self.links_widget, 1, 2)
        self.setCentralWidget(central)

        self.setStatusBar(QStatusBar(self))
        for widget in (
            self.weather_widget, self.tasks_widget,
            self.notes_widget, self.links_widget,
        ):
            widget.notice.connect(self.show_notice)

    @property
    def timer(self) -> PomodoroTimer:
        return self._timer

    def load(self) -> None:
        """Load every card; stores that cannot reach the API go local."""
        for widget in (self.tasks_widget, self.notes_widget, self.links_widget):
            widget.load()
        self.weather_widget.refresh()

    def show_notice(self, message: str) -> None:
        self.statusBar().showMessage(message, NOTICE_MS)

    # ── settings persistence ──────────────────────────────────────────────

    def _on_timer_settings_saved(self, work_minutes: int, break_minutes: int) -> None:
        self._settings.work_minutes = work_minutes
        self._settings.break_minutes = break_minutes
        self._save_settings()

    def _on_sound_toggled(self, enabled: bool) -> None:
        self._settings.sound_enabled = enabled
        self._save_settings()

    def _save_settings(self) -> None:
        try:
            save_settings(self._settings)
        except OSError as exc:
            logger.warning("Could not save settings: %s", exc)
