"""
Centralized error handling decorators for database operations.

Service methods are wrapped so that persistence failures surface as domain
errors: connectivity problems become StoreUnavailableError, integrity
violations become ValidationError. Domain errors pass through untouched.
"""
import functools
import inspect
import logging
from typing import Any, Callable, Optional

from sqlalchemy.exc import (
    DataError,
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import GroundOpsError, StoreUnavailableError, ValidationError

logger = logging.getLogger(__name__)


class DatabaseErrorHandler:
    """Classifies database exceptions into domain errors."""

    CONNECTIVITY_EXCEPTIONS = (
        OperationalError,
        InterfaceError,
        DisconnectionError,
        PoolTimeoutError,
        ConnectionError,
        OSError,
    )

    @staticmethod
    def to_domain_error(exc: Exception, operation: str) -> GroundOpsError:
        """
        Map a low-level exception to the domain error reported to callers.

        Args:
            exc: The exception that occurred
            operation: Description of the database operation

        Returns:
            The GroundOpsError to raise in its place
        """
        if isinstance(exc, IntegrityError):
            logger.warning(f"Database integrity error during {operation}: {exc}")
            return ValidationError(
                f"{operation} conflicts with existing data or references a missing entity"
            )

        if isinstance(exc, DataError):
            logger.warning(f"Database rejected a value during {operation}: {exc}")
            return ValidationError(f"{operation} received a value the store cannot hold")

        if isinstance(exc, DatabaseErrorHandler.CONNECTIVITY_EXCEPTIONS):
            logger.error(
                f"Database unavailable during {operation}: {type(exc).__name__}: {exc}"
            )
            return StoreUnavailableError(
                "The data store is temporarily unavailable, please retry"
            )

        logger.error(
            f"Unexpected database error during {operation}: {type(exc).__name__}: {exc}",
            exc_info=True,
        )
        return StoreUnavailableError(f"Database error during {operation}")


def _find_session(args, kwargs) -> Optional[AsyncSession]:
    for value in list(args) + list(kwargs.values()):
        if isinstance(value, AsyncSession):
            return value
    return None


def handle_store_errors(operation_name: Optional[str] = None) -> Callable:
    """
    Decorator translating database failures of an async operation into
    domain errors, rolling back the session it was given.

    Args:
        operation_name: Name of the operation for logging (defaults to function name)
    """

    def decorator(func: Callable) -> Callable:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"handle_store_errors requires an async function, got {func!r}")

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs) -> Any:
            operation = operation_name or func.__name__
            try:
                return await func(*args, **kwargs)
            except GroundOpsError:
                raise
            except (SQLAlchemyError, DBAPIError, ConnectionError, OSError) as exc:
                db_session = _find_session(args, kwargs)
                if db_session is not None:
                    try:
                        await db_session.rollback()
                    except Exception as rollback_exc:
                        logger.error(f"Failed to rollback after {operation}: {rollback_exc}")
                raise DatabaseErrorHandler.to_domain_error(exc, operation) from exc

        return async_wrapper

    return decorator


def log_database_operation(operation: str, level: str = "debug") -> Callable:
    """
    Decorator to log the start, completion and failure of an async operation.

    Args:
        operation: Description of the operation
        level: Logging level for start/completion ('debug', 'info')
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs) -> Any:
            logger_method = getattr(logger, level)
            logger_method(f"Starting {operation}")
            try:
                result = await func(*args, **kwargs)
            except GroundOpsError as exc:
                logger.info(f"{operation} rejected: {exc.kind}: {exc.message}")
                raise
            except Exception as exc:
                logger.warning(f"Failed {operation}: {type(exc).__name__}: {exc}")
                raise
            logger_method(f"Completed {operation}")
            return result

        return async_wrapper

    return decorator
