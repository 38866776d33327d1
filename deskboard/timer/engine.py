"""Pomodoro timer state machine.

Modes
-----
WORK    Focus interval (initial mode).
BREAK   Rest interval.

Transitions
-----------
WORK,  remaining → 0   completed_sessions += 1, emit, switch to BREAK
BREAK, remaining → 0   emit, switch to WORK
start / pause          toggle the countdown; mode untouched
reset                  stop, back to WORK with a full work interval
apply_settings         new durations; refill the *current* mode

Completing an interval stops the countdown; the user starts the next one.

Ticks come from a single ``QTimer`` owned by the instance.  ``start()``
restarts it and ``pause()``/``reset()`` stop it, so there is never more
than one pending tick.  The timer never plays sound itself: listeners of
``session_completed`` (see :class:`~deskboard.audio.sounds.ToneNotifier`)
decide what to do with the ``sound_enabled`` flag in the payload.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from PyQt6.QtCore import QObject, QTimer, pyqtSignal


# ── enums ─────────────────────────────────────────────────────────────────


class Mode(Enum):
    WORK = "work"
    BREAK = "break"


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_WORK_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5
TICK_INTERVAL_MS = 1000


def format_time(seconds: int) -> str:
    """``MM:SS`` for the countdown display."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def _check_minutes(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return value


# ── timer ─────────────────────────────────────────────────────────────────


class PomodoroTimer(QObject):
    """Work/break countdown driven by a one-second ``QTimer``.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted after every decrement.
    state_changed(timer: PomodoroTimer)
        Emitted on start, pause, reset, settings change and mode switch.
    session_completed(data: dict)
        Emitted when an interval runs out.  Keys: ``mode`` (the mode that
        just finished), ``duration_minutes``, ``completed_sessions``,
        ``sound_enabled``, ``end_time``.
    sound_toggled(enabled: bool)
    """

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    session_completed = pyqtSignal(object)
    sound_toggled = pyqtSignal(bool)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        work_minutes: int = DEFAULT_WORK_MINUTES,
        break_minutes: int = DEFAULT_BREAK_MINUTES,
        sound_enabled: bool = True,
    ) -> None:
        super().__init__(parent)

        # ── configuration ─────────────────────────────────────────────
        self._work_minutes = _check_minutes(work_minutes, "work_minutes")
        self._break_minutes = _check_minutes(break_minutes, "break_minutes")
        self._sound_enabled = sound_enabled

        # ── state ─────────────────────────────────────────────────────
        self._mode = Mode.WORK
        self._remaining = self._work_minutes * 60
        self._running = False
        self._completed_sessions = 0

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def remaining(self) -> int:
        """Seconds left in the current interval."""
        return self._remaining

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def completed_sessions(self) -> int:
        """Finished work intervals since this timer was created."""
        return self._completed_sessions

    @property
    def sound_enabled(self) -> bool:
        return self._sound_enabled

    @property
    def work_minutes(self) -> int:
        return self._work_minutes

    @property
    def break_minutes(self) -> int:
        return self._break_minutes

    def duration_for(self, mode: Mode) -> int:
        """Full length of *mode* in seconds."""
        minutes = self._work_minutes if mode == Mode.WORK else self._break_minutes
        return minutes * 60

    @property
    def total_seconds(self) -> int:
        return self.duration_for(self._mode)

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current interval."""
        total = self.total_seconds
        if total <= 0:
            return 0.0
        return max(0.0, min(1.0, (total - self._remaining) / total))

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Begin counting down.  No-op while already running."""
        if self._running:
            return
        self._running = True
        # QTimer.start() restarts an active timer instead of adding one
        self._qt_timer.start()
        self.state_changed.emit(self)

    def pause(self) -> None:
        """Freeze the countdown; everything else is kept."""
        if not self._running:
            return
        self._qt_timer.stop()
        self._running = False
        self.state_changed.emit(self)

    def reset(self) -> None:
        """Stop and return to a full work interval.  Keeps the session count."""
        self._qt_timer.stop()
        self._running = False
        self._mode = Mode.WORK
        self._remaining = self.duration_for(Mode.WORK)
        self.state_changed.emit(self)

    def apply_settings(self, work_minutes: int, break_minutes: int) -> None:
        """Store new durations and refill the current mode with its new length.

        Any positive integer is accepted; range limits belong to the
        settings dialog.
        """
        work_minutes = _check_minutes(work_minutes, "work_minutes")
        break_minutes = _check_minutes(break_minutes, "break_minutes")
        self._work_minutes = work_minutes
        self._break_minutes = break_minutes
        self._remaining = self.duration_for(self._mode)
        self.state_changed.emit(self)

    def toggle_sound(self) -> bool:
        self._sound_enabled = not self._sound_enabled
        self.sound_toggled.emit(self._sound_enabled)
        return self._sound_enabled

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        if not self._running:
            return
        self._remaining = max(0, self._remaining - 1)
        self.tick.emit(self._remaining)
        if self._remaining <= 0:
            self._finish_interval()

    def _finish_interval(self) -> None:
        self._qt_timer.stop()
        self._running = False
        finished = self._mode

        if finished == Mode.WORK:
            self._completed_sessions += 1
            duration_minutes = self._work_minutes
            self._mode = Mode.BREAK
        else:
            duration_minutes = self._break_minutes
            self._mode = Mode.WORK
        self._remaining = self.duration_for(self._mode)

        self.session_completed.emit({
            "mode": finished,
            "duration_minutes": duration_minutes,
            "completed_sessions": self._completed_sessions,
            "sound_enabled": self._sound_enabled,
            "end_time": datetime.now(),
        })
        self.state_changed.emit(self)
