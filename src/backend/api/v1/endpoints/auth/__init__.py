"""Authentication endpoints."""

from . import auth

__all__ = ["auth"]
