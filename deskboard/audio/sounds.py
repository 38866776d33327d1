"""Completion tone synthesis and playback using numpy + QSoundEffect.

The tone is a pure sine wave whose gain ramps exponentially from 0.3 down
to 0.01 over its duration, a short "ding".  Rendered WAV files are cached
in the app-support directory, one per (frequency, duration) pair, so the
synthesis only happens once.

Playback is fire-and-forget: ``QSoundEffect.play()`` returns immediately,
and any failure to write or play a file is logged and dropped.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_SUPPORT_DIR
from ..timer.engine import PomodoroTimer

logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SAMPLE_RATE = 44100
COMPLETION_FREQUENCY_HZ = 800.0
COMPLETION_DURATION_S = 0.5
START_GAIN = 0.3
END_GAIN = 0.01


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _exponential_decay(length: int) -> np.ndarray:
    """Gain curve from START_GAIN to END_GAIN over *length* samples."""
    if length <= 0:
        return np.zeros(0, dtype=np.float64)
    return np.geomspace(START_GAIN, END_GAIN, length)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


def synthesize_tone(frequency_hz: float, duration_s: float) -> bytes:
    """WAV bytes for a decaying sine tone."""
    tone = _sine(frequency_hz, duration_s)
    return _to_wav_bytes(tone * _exponential_decay(len(tone)))


# ═══════════════════════════════════════════════════════════════════════════
#  NOTIFIER
# ═══════════════════════════════════════════════════════════════════════════


class ToneNotifier(QObject):
    """Plays a tone when a timer interval completes.

    Usage::

        notifier = ToneNotifier(parent=self)
        notifier.attach(timer)
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
        frequency_hz: float = COMPLETION_FREQUENCY_HZ,
        duration_s: float = COMPLETION_DURATION_S,
    ) -> None:
        super().__init__(parent)
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._frequency_hz = frequency_hz
        self._duration_s = duration_s
        self._effects: dict[str, QSoundEffect] = {}

    # ── public API ────────────────────────────────────────────────────

    def attach(self, timer: PomodoroTimer) -> None:
        timer.session_completed.connect(self.on_session_completed)

    def on_session_completed(self, data: dict) -> None:
        if data.get("sound_enabled"):
            self.play_tone(self._frequency_hz, self._duration_s)

    def play_tone(self, frequency_hz: float, duration_s: float) -> bool:
        """Start playing a tone.  Returns False instead of raising on failure."""
        try:
            effect = self._effect_for(frequency_hz, duration_s)
            effect.play()
        except Exception as exc:  # audio is best-effort
            logger.warning("Could not play %.0f Hz tone: %s", frequency_hz, exc)
            return False
        return True

    # ── internal ──────────────────────────────────────────────────────

    def _wav_path(self, frequency_hz: float, duration_s: float) -> Path:
        name = f"tone_{frequency_hz:g}hz_{int(duration_s * 1000)}ms.wav"
        return self._sounds_dir / name

    def _effect_for(self, frequency_hz: float, duration_s: float) -> QSoundEffect:
        path = self._wav_path(frequency_hz, duration_s)
        effect = self._effects.get(path.name)
        if effect is not None:
            return effect

        if not path.exists():
            self._sounds_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(synthesize_tone(frequency_hz, duration_s))

        effect = QSoundEffect(self)
        effect.setSource(QUrl.fromLocalFile(str(path)))
        effect.setVolume(1.0)
        self._effects[path.name] = effect
        return effect
