"""
Application lifespan manager.

This module provides the lifespan context manager that handles
startup and shutdown events for the FastAPI application.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from core.config import settings
from core.database import AsyncSessionLocal
from core.logging_config import LogConfig
from . import tasks


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Setup logging
    log_config = LogConfig(**settings.logging.log_config)
    await tasks.initialize_logging(settings, log_config)

    logger = logging.getLogger("main")

    # Startup
    await tasks.log_cors_configuration(settings, logger)

    # Initialize database
    if settings.database.create_tables_on_startup:
        await tasks.initialize_database()

    # Seed reference data (airports)
    await tasks.setup_default_data(AsyncSessionLocal)

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.api.app_name}...")

    # Close WebSocket subscribers
    await tasks.shutdown_subscribers(app)

    # Close database connections
    await tasks.shutdown_database()

    # Stop logging queue listener last so shutdown lines are written
    await tasks.shutdown_logging()
