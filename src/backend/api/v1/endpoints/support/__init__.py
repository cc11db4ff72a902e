"""Support request and chat endpoints."""

from . import chat, requests

__all__ = [
    "chat",
    "requests",
]
