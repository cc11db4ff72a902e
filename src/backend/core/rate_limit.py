"""
Shared slowapi limiter.

Endpoints decorate themselves with ``@limiter.limit(...)``; the app factory
attaches the same instance to ``app.state.limiter``.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit.enabled,
)
