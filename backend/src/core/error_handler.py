"""
Centralized error handling for the FieldDay competition store.
Provides decorators and utilities for consistent error management.
"""

import asyncio
import logging
import functools
from typing import Any, Callable, Optional, Dict, TypeVar, Awaitable
from datetime import datetime

from .exceptions import (
    FieldDayException, ErrorContext, DomainException, StorageIOError
)

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])
AF = TypeVar('AF', bound=Callable[..., Awaitable[Any]])


class ErrorHandler:
    """
    Centralized error handling with retry logic and failure bookkeeping.
    """

    def __init__(self, default_retries: int = 2, default_delay: float = 0.1):
        self.default_retries = default_retries
        self.default_delay = default_delay
        self.retry_history: Dict[str, Dict[str, Any]] = {}

    def with_retry(
        self,
        max_retries: Optional[int] = None,
        delay: Optional[float] = None,
        exponential_backoff: bool = True,
        retryable_exceptions: Optional[tuple] = None
    ):
        """
        Decorator for automatic retry with exponential backoff.

        Args:
            max_retries: Maximum number of retry attempts
            delay: Initial delay between retries
            exponential_backoff: Whether to use exponential backoff
            retryable_exceptions: Tuple of exception types to retry on
        """
        if retryable_exceptions is None:
            retryable_exceptions = (StorageIOError,)

        def decorator(func: AF) -> AF:
            @functools.wraps(func)
            async def wrapper(*args, **kwargs):
                retries = self.default_retries if max_retries is None else max_retries
                current_delay = self.default_delay if delay is None else delay
                operation_id = f"{func.__module__}.{func.__name__}"

                for attempt in range(retries + 1):
                    try:
                        result = await func(*args, **kwargs)

                        if attempt > 0:
                            logger.info(
                                f"Operation {operation_id} succeeded after {attempt} retries"
                            )

                        return result

                    except retryable_exceptions as e:
                        if attempt >= retries:
                            self._record_failure(operation_id, e, attempt + 1)
                            logger.error(
                                f"Operation {operation_id} failed after {attempt + 1} attempts: {e}"
                            )
                            raise

                        logger.warning(
                            f"Operation {operation_id} failed (attempt {attempt + 1}/{retries + 1}): {e}. "
                            f"Retrying in {current_delay}s..."
                        )

                        await asyncio.sleep(current_delay)

                        if exponential_backoff:
                            current_delay *= 2

            return wrapper
        return decorator

    def _record_failure(self, operation_id: str, error: Exception, attempts: int):
        """Record operation failure for monitoring."""
        if operation_id not in self.retry_history:
            self.retry_history[operation_id] = {
                'failures': 0,
                'last_failure': None,
                'last_error': None,
                'total_attempts': 0
            }

        history = self.retry_history[operation_id]
        history['failures'] += 1
        history['last_failure'] = datetime.utcnow()
        history['last_error'] = type(error).__name__
        history['total_attempts'] += attempts

    def get_failure_stats(self) -> Dict[str, Dict[str, Any]]:
        """Get failure statistics for monitoring."""
        return self.retry_history.copy()

    def reset_stats(self):
        """Reset failure statistics."""
        self.retry_history.clear()


# Global error handler instance
error_handler = ErrorHandler()


def with_domain_error_handling(func: F) -> F:
    """
    Decorator for synchronous domain operations.

    FieldDay exceptions propagate unchanged; anything else is logged and
    wrapped in a DomainException carrying the operation context.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FieldDayException:
            raise
        except Exception as e:
            operation = f"{func.__module__}.{func.__name__}"
            logger.error(f"Unexpected error in domain operation {operation}: {e}")
            raise DomainException(
                message=f"Unexpected error in {operation}",
                original_error=e,
                context=ErrorContext(operation=operation, parameters=kwargs or None)
            ) from e

    return wrapper


def with_storage_error_handling(operation: str):
    """
    Decorator for async file operations that maps OSError to StorageIOError.

    The wrapped coroutine must be a method of an object exposing a ``path``
    attribute, which is reported in the error.

    Args:
        operation: Verb describing the operation ("read", "write")
    """
    def decorator(func: AF) -> AF:
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            try:
                return await func(self, *args, **kwargs)
            except OSError as e:
                path = str(getattr(self, 'path', 'unknown'))
                logger.error(f"Storage {operation} failed for {path}: {e}")
                raise StorageIOError(
                    operation=operation,
                    path=path,
                    original_error=e,
                    context=ErrorContext(operation=f"storage.{operation}", path=path)
                ) from e

        return wrapper

    return decorator
