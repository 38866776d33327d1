"""Deskboard: a personal productivity dashboard."""

__version__ = "0.1.0"
