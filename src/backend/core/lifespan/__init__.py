"""
Application lifespan management.

Startup creates tables and seeds airports; shutdown closes WebSocket
subscribers, the database engine and the logging listener.
"""

from .manager import lifespan

__all__ = ["lifespan"]
