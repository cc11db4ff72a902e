"""
Logging configuration for the Ground Ops application.
Provides console logging with colours and optional rotating file logs.

File handlers are driven by a QueueListener thread so log writes never block
the event loop; the console handler writes directly.
"""

import atexit
import logging
import logging.handlers
import queue
import sys
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from core.middleware.correlation import CorrelationIdFilter


# Global queue listener for cleanup
_queue_listener: Optional[logging.handlers.QueueListener] = None


class LogConfig(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    enable_file_logging: bool = False
    log_dir: str = "logs"
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5
    enable_console: bool = True


class ColoredFormatter(logging.Formatter):
    """Formatter with colours for console output."""

    grey = "\x1b[38;21m"
    yellow = "\x1b[33;21m"
    red = "\x1b[31;21m"
    bold_red = "\x1b[31;1m"
    blue = "\x1b[34;21m"
    reset = "\x1b[0m"

    COLORS = {
        logging.DEBUG: grey,
        logging.INFO: blue,
        logging.WARNING: yellow,
        logging.ERROR: red,
        logging.CRITICAL: bold_red,
    }

    def format(self, record):
        # Work on a copy so file handlers never see the escape codes
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelno, self.grey)
        record.levelname = f"{color}{record.levelname}{self.reset}"
        return f"{super().format(record)}{self.reset}"


def setup_logging(config: Optional[LogConfig] = None) -> None:
    """Setup application logging with configuration."""
    global _queue_listener

    if config is None:
        config = LogConfig()

    stop_queue_listener()

    level = getattr(logging, config.level.upper(), logging.INFO)
    correlation_filter = CorrelationIdFilter()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if config.enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.addFilter(correlation_filter)
        console_handler.setFormatter(
            ColoredFormatter(
                fmt="%(asctime)s | %(name)s | %(levelname)s | %(correlation_id)s | %(message)s",
                datefmt=config.date_format,
            )
        )
        root_logger.addHandler(console_handler)

    if config.enable_file_logging:
        log_path = Path(config.log_dir)
        log_path.mkdir(exist_ok=True)

        app_handler = logging.handlers.RotatingFileHandler(
            log_path / "app.log",
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        app_handler.setLevel(level)
        app_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(name)s | %(levelname)s | %(correlation_id)s | "
                "%(funcName)s:%(lineno)d | %(message)s",
                datefmt=config.date_format,
            )
        )

        # Filter on the queue handler: the correlation id lives in a
        # contextvar that is only readable on the calling thread.
        log_queue: queue.Queue = queue.Queue(-1)
        queue_handler = logging.handlers.QueueHandler(log_queue)
        queue_handler.addFilter(correlation_filter)
        root_logger.addHandler(queue_handler)

        _queue_listener = logging.handlers.QueueListener(
            log_queue, app_handler, respect_handler_level=True
        )
        _queue_listener.start()
        atexit.register(stop_queue_listener)

    # SQLAlchemy engine logs are noisy at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        f"Logging configured (level={config.level}, file={config.enable_file_logging})"
    )


def stop_queue_listener() -> None:
    """Stop the background file-logging listener if running."""
    global _queue_listener

    if _queue_listener is not None:
        _queue_listener.stop()
        _queue_listener = None
