"""Real-time channel endpoints."""

from . import events

__all__ = ["events"]
