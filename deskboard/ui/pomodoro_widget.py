"""Pomodoro card: countdown, mode, controls, session count and sound toggle."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QDialog, QFrame, QHBoxLayout, QLabel, QProgressBar,
    QPushButton, QVBoxLayout, QWidget,
)

from ..timer.engine import Mode, PomodoroTimer, format_time
from .settings_dialog import TimerSettingsDialog

MODE_LABELS: dict[Mode, str] = {
    Mode.WORK: "Work Time",
    Mode.BREAK: "Break Time",
}


class PomodoroWidget(QWidget):
    """Renders a :class:`PomodoroTimer` and forwards button presses to it."""

    # (work_minutes, break_minutes) after the user saves the dialog
    settings_saved = pyqtSignal(int, int)

    def __init__(self, timer: PomodoroTimer, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._timer = timer
        self._build_ui()
        self._connect_signals()
        self._refresh()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(10)

        title = QLabel("Pomodoro Timer", card)
        title.setObjectName("cardTitle")
        layout.addWidget(title)

        self._time_label = QLabel(card)
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._time_label.setStyleSheet("font-size: 40px; font-weight: 700;")
        layout.addWidget(self._time_label)

        self._mode_label = QLabel(card)
        self._mode_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._mode_label)

        self._progress = QProgressBar(card)
        self._progress.setRange(0, 1000)
        self._progress.setTextVisible(False)
        layout.addWidget(self._progress)

        btn_row = QHBoxLayout()
        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")
        self._reset_btn = QPushButton("Reset", card)
        self._settings_btn = QPushButton("Settings", card)
        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        btn_row.addWidget(self._settings_btn)
        layout.addLayout(btn_row)

        stats_row = QHBoxLayout()
        self._sessions_label = QLabel(card)
        self._sound_btn = QPushButton(card)
        self._sound_btn.setCheckable(True)
        stats_row.addWidget(self._sessions_label)
        stats_row.addStretch()
        stats_row.addWidget(self._sound_btn)
        layout.addLayout(stats_row)

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._on_start_pause)
        self._reset_btn.clicked.connect(self._timer.reset)
        self._settings_btn.clicked.connect(self.open_settings)
        self._sound_btn.clicked.connect(self._timer.toggle_sound)

        self._timer.tick.connect(lambda _remaining: self._refresh())
        self._timer.state_changed.connect(lambda _timer: self._refresh())
        self._timer.sound_toggled.connect(lambda _enabled: self._refresh())

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_start_pause(self) -> None:
        if self._timer.is_running:
            self._timer.pause()
        else:
            self._timer.start()

    def open_settings(self) -> None:
        dialog = TimerSettingsDialog(
            self._timer.work_minutes, self._timer.break_minutes, self,
        )
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self.apply_settings(dialog.work_minutes, dialog.break_minutes)

    def apply_settings(self, work_minutes: int, break_minutes: int) -> None:
        self._timer.apply_settings(work_minutes, break_minutes)
        self.settings_saved.emit(work_minutes, break_minutes)

    # ── display ───────────────────────────────────────────────────────────

    def _refresh(self) -> None:
        timer = self._timer
        self._time_label.setText(format_time(timer.remaining))
        self._mode_label.setText(MODE_LABELS[timer.mode])
        self._progress.setValue(round(timer.percent_complete * 1000))
        self._start_pause_btn.setText("Pause" if timer.is_running else "Start")
        self._sessions_label.setText(f"Sessions: {timer.completed_sessions}")
        self._sound_btn.setChecked(timer.sound_enabled)
        self._sound_btn.setText("Sound on" if timer.sound_enabled else "Sound off")

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    @property
    def mode_text(self) -> str:
        return self._mode_label.text()
