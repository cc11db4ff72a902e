"""Reference data endpoints."""

from . import airports, service_types

__all__ = [
    "airports",
    "service_types",
]
