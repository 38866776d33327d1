"""Tests for the pomodoro timer state machine.

Covers: initial state, start/pause/reset, countdown, work→break and
break→work transitions, session counting, settings changes, sound toggle
and the single-tick-source guarantee.
"""

import pytest

from deskboard.timer.engine import (
    PomodoroTimer, Mode, TICK_INTERVAL_MS,
    DEFAULT_WORK_MINUTES, DEFAULT_BREAK_MINUTES, format_time,
)

from helpers import SignalCollector, finish_interval


# ═══════════════════════════════════════════════════════════════════════════
#  INITIAL STATE / CONTROLS
# ═══════════════════════════════════════════════════════════════════════════


class TestControls:

    def test_initial_state(self, timer):
        assert timer.mode == Mode.WORK
        assert timer.remaining == DEFAULT_WORK_MINUTES * 60
        assert timer.is_running is False
        assert timer.completed_sessions == 0
        assert timer.sound_enabled is True
        assert timer.break_minutes == DEFAULT_BREAK_MINUTES

    def test_start_sets_running(self, timer):
        timer.start()
        assert timer.is_running is True

    def test_start_is_noop_when_already_running(self, timer):
        c = SignalCollector()
        timer.state_changed.connect(c)
        timer.start()
        timer.start()
        assert timer.is_running is True
        assert len(c) == 1

    def test_pause_freezes_countdown(self, timer):
        timer.start()
        timer._on_tick()
        timer.pause()
        frozen = timer.remaining
        timer._on_tick()  # a stray tick after pausing must not count
        assert timer.is_running is False
        assert timer.remaining == frozen
        assert timer.mode == Mode.WORK

    def test_pause_is_noop_when_stopped(self, timer):
        c = SignalCollector()
        timer.state_changed.connect(c)
        timer.pause()
        assert len(c) == 0

    def test_tick_ignored_before_start(self, timer):
        timer._on_tick()
        assert timer.remaining == DEFAULT_WORK_MINUTES * 60

    def test_reset_from_break(self, timer):
        finish_interval(timer)
        assert timer.mode == Mode.BREAK
        timer.start()
        timer._on_tick()
        timer.reset()
        assert timer.mode == Mode.WORK
        assert timer.is_running is False
        assert timer.remaining == timer.work_minutes * 60
        assert timer.completed_sessions == 1

    def test_reset_keeps_session_count(self, timer):
        finish_interval(timer)
        finish_interval(timer)
        finish_interval(timer)
        before = timer.completed_sessions
        timer.reset()
        assert timer.completed_sessions == before


# ═══════════════════════════════════════════════════════════════════════════
#  TICK SOURCE
# ═══════════════════════════════════════════════════════════════════════════


class TestTickSource:

    def test_tick_interval_is_one_second(self, timer):
        assert timer._qt_timer.interval() == TICK_INTERVAL_MS == 1000

    def test_single_active_timer_after_repeated_start(self, timer):
        timer.start()
        timer.start()
        assert timer._qt_timer.isActive()
        assert len(timer.findChildren(type(timer._qt_timer))) == 1

    def test_pause_cancels_pending_tick(self, timer):
        timer.start()
        timer.pause()
        assert not timer._qt_timer.isActive()

    def test_reset_cancels_pending_tick(self, timer):
        timer.start()
        timer.reset()
        assert not timer._qt_timer.isActive()

    def test_completion_stops_ticking(self, timer):
        finish_interval(timer)
        assert not timer._qt_timer.isActive()
        assert timer.is_running is False


# ═══════════════════════════════════════════════════════════════════════════
#  COUNTDOWN
# ═══════════════════════════════════════════════════════════════════════════


class TestCountdown:

    def test_tick_decrements_remaining(self, timer):
        timer.start()
        initial = timer.remaining
        timer._on_tick()
        assert timer.remaining == initial - 1

    def test_tick_signal_emits_remaining(self, timer):
        c = SignalCollector()
        timer.tick.connect(c)
        timer.start()
        timer._on_tick()
        assert c.last == timer.remaining

    def test_pause_resume_never_skips_or_double_counts(self, timer):
        timer.start()
        initial = timer.remaining
        applied = 0
        # (running?, ticks delivered); ticks while paused are stray
        script = [(True, 3), (False, 2), (True, 5), (False, 4), (True, 1)]
        for running, ticks in script:
            if running:
                timer.start()
            else:
                timer.pause()
            for _ in range(ticks):
                timer._on_tick()
                if running:
                    applied += 1
        assert initial - timer.remaining == applied == 9

    def test_percent_complete(self, qapp):
        t = PomodoroTimer(work_minutes=1)
        t.start()
        for _ in range(30):
            t._on_tick()
        assert t.percent_complete == pytest.approx(0.5)

    def test_remaining_stays_within_bounds(self, qapp):
        t = PomodoroTimer(work_minutes=1, break_minutes=1)
        for _ in range(3):
            t.start()
            for _ in range(61):
                t._on_tick()
                assert 0 <= t.remaining <= t.total_seconds


# ═══════════════════════════════════════════════════════════════════════════
#  TRANSITIONS
# ═══════════════════════════════════════════════════════════════════════════


class TestTransitions:

    def test_work_completion_switches_to_break(self, timer):
        timer.start()
        timer._remaining = 1
        timer._on_tick()
        assert timer.completed_sessions == 1
        assert timer.mode == Mode.BREAK
        assert timer.remaining == timer.break_minutes * 60

    def test_break_completion_switches_to_work(self, timer):
        finish_interval(timer)
        finish_interval(timer)
        assert timer.mode == Mode.WORK
        assert timer.remaining == timer.work_minutes * 60
        # only work intervals count
        assert timer.completed_sessions == 1

    def test_session_completed_payload(self, timer):
        c = SignalCollector()
        timer.session_completed.connect(c)
        finish_interval(timer)
        data = c.last
        assert data["mode"] == Mode.WORK
        assert data["duration_minutes"] == DEFAULT_WORK_MINUTES
        assert data["completed_sessions"] == 1
        assert data["sound_enabled"] is True
        assert data["end_time"] is not None

    def test_break_completion_payload(self, timer):
        c = SignalCollector()
        timer.session_completed.connect(c)
        finish_interval(timer)
        finish_interval(timer)
        assert c.last["mode"] == Mode.BREAK
        assert c.last["duration_minutes"] == DEFAULT_BREAK_MINUTES
        assert len(c) == 2

    def test_payload_reports_sound_off(self, timer):
        c = SignalCollector()
        timer.session_completed.connect(c)
        timer.toggle_sound()
        finish_interval(timer)
        assert c.last["sound_enabled"] is False

    def test_full_cycle_counts(self, timer):
        for _ in range(4):
            finish_interval(timer)  # work
            finish_interval(timer)  # break
        assert timer.completed_sessions == 4
        assert timer.mode == Mode.WORK


# ═══════════════════════════════════════════════════════════════════════════
#  SETTINGS / SOUND
# ═══════════════════════════════════════════════════════════════════════════


class TestSettings:

    @pytest.mark.parametrize("work,brk", [(1, 1), (25, 5), (50, 10), (90, 45), (240, 120)])
    def test_apply_settings_in_work_mode(self, timer, work, brk):
        timer.apply_settings(work, brk)
        assert timer.mode == Mode.WORK
        assert timer.remaining == work * 60

    @pytest.mark.parametrize("work,brk", [(1, 1), (30, 7), (90, 45)])
    def test_apply_settings_in_break_mode(self, timer, work, brk):
        finish_interval(timer)
        timer.apply_settings(work, brk)
        assert timer.mode == Mode.BREAK
        assert timer.remaining == brk * 60

    def test_apply_settings_does_not_stop_running_timer(self, timer):
        timer.start()
        timer.apply_settings(10, 2)
        assert timer.is_running is True
        assert timer.remaining == 600

    def test_out_of_range_values_are_accepted(self, timer):
        timer.apply_settings(180, 75)
        assert timer.work_minutes == 180
        assert timer.break_minutes == 75

    @pytest.mark.parametrize("bad", [0, -5, 2.5, "25", True])
    def test_non_positive_or_non_integer_rejected(self, timer, bad):
        with pytest.raises(ValueError):
            timer.apply_settings(bad, 5)
        assert timer.work_minutes == DEFAULT_WORK_MINUTES

    def test_bad_break_leaves_work_untouched(self, timer):
        with pytest.raises(ValueError):
            timer.apply_settings(40, 0)
        assert timer.work_minutes == DEFAULT_WORK_MINUTES
        assert timer.remaining == DEFAULT_WORK_MINUTES * 60

    def test_toggle_sound(self, timer):
        c = SignalCollector()
        timer.sound_toggled.connect(c)
        timer.start()
        remaining = timer.remaining
        assert timer.toggle_sound() is False
        assert timer.toggle_sound() is True
        assert c.items == [False, True]
        assert timer.remaining == remaining
        assert timer.is_running is True


class TestFormatTime:

    @pytest.mark.parametrize("seconds,expected", [
        (0, "00:00"), (59, "00:59"), (60, "01:00"), (1500, "25:00"), (3599, "59:59"),
    ])
    def test_format(self, seconds, expected):
        assert format_time(seconds) == expected

    def test_negative_clamps_to_zero(self):
        assert format_time(-3) == "00:00"
