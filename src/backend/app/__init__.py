"""
Application package.

Exposes create_app(), which wires routers, middleware, the event
broadcaster and the lifespan into a FastAPI instance.
"""

from .factory import create_app

__all__ = ["create_app"]
