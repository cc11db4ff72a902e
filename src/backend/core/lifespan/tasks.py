"""
Lifespan startup and shutdown task functions.

This module contains individual task functions for application startup
and shutdown sequences. Each function handles a specific responsibility.
"""

import logging


async def initialize_logging(settings, log_config):
    """Setup logging configuration."""
    from core.logging_config import setup_logging

    logger = logging.getLogger("main")
    setup_logging(log_config)

    logger.info(f"Starting {settings.api.app_name} {settings.api.app_version}...")


async def log_cors_configuration(settings, logger):
    """Log CORS configuration for debugging."""
    logger.info(f"CORS Allowed Origins: {settings.cors.origins}")


async def initialize_database():
    """Initialize database tables."""
    from core.database import init_db

    logger = logging.getLogger("main")
    try:
        await init_db()
        logger.info("Database initialized")
    except Exception as e:
        logger.error(f"Database initialization failed: {type(e).__name__}: {e}")


async def setup_default_data(session_factory):
    """Seed reference data. The API still starts if this fails."""
    from db.setup import setup_database_default_data

    logger = logging.getLogger("main")
    logger.info("Setting up default database data...")
    try:
        async with session_factory() as db:
            await setup_database_default_data(db)
    except Exception as e:
        logger.error(f"Error during default data setup: {type(e).__name__}: {e}")


async def shutdown_subscribers(app):
    """Close every WebSocket subscriber."""
    logger = logging.getLogger("main")
    broadcaster = getattr(app.state, "broadcaster", None)
    if broadcaster is None:
        return
    await broadcaster.close_all()
    logger.info("WebSocket subscribers closed")


async def shutdown_database():
    """Close database connections."""
    from core.database import close_db

    logger = logging.getLogger("main")
    await close_db()
    logger.info("Database connections closed")


async def shutdown_logging():
    """Stop the background file-logging listener."""
    from core.logging_config import stop_queue_listener

    stop_queue_listener()
