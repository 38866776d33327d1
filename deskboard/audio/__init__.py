"""Audio package."""

from .sounds import ToneNotifier, synthesize_tone

__all__ = ["ToneNotifier", "synthesize_tone"]
