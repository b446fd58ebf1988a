"""
Error handling utilities for the Island Planner system.

This module provides the retry decorator and custom exception classes used
to handle errors consistently across the application. The planning core
itself degrades to safe defaults instead of raising; these classes are used
at the edges, mostly around reference-data loading.
"""

import functools
from collections.abc import Callable
from typing import Any, TypeVar, cast

from loguru import logger
from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

# Type variable for function decorator typing
F = TypeVar("F", bound=Callable[..., Any])


class PlannerError(Exception):
    """Base exception class for all Island Planner errors."""

    def __init__(self, message: str, original_error: Exception | None = None):
        """
        Initialize a PlannerError.

        Args:
            message: Error message
            original_error: The original exception that caused this error (optional)
        """
        self.original_error = original_error
        if original_error:
            message = f"{message} - Original error: {original_error!s}"
        super().__init__(message)


class ReferenceDataError(PlannerError):
    """Error raised when a reference data source cannot be read."""

    def __init__(
        self, message: str, source: str, original_error: Exception | None = None
    ):
        """
        Initialize a ReferenceDataError.

        Args:
            message: Error message
            source: Name or path of the data source
            original_error: The original exception that caused this error (optional)
        """
        self.source = source
        full_message = f"Error reading reference data '{source}': {message}"
        super().__init__(full_message, original_error)


class ValidationError(PlannerError):
    """Error raised when validation of input or data fails."""

    pass


def with_retry(
    max_attempts: int = 3,
    min_wait_seconds: float = 1.0,
    max_wait_seconds: float = 10.0,
    retry_exceptions: tuple = (ReferenceDataError,),
) -> Callable[[F], F]:
    """
    Decorator to retry a function with exponential backoff when specific
    exceptions occur.

    Args:
        max_attempts: Maximum number of attempts
        min_wait_seconds: Minimum wait time between retries
        max_wait_seconds: Maximum wait time between retries
        retry_exceptions: Tuple of exception types to retry on

    Returns:
        Decorated function
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            @retry(
                retry=retry_if_exception_type(retry_exceptions),
                stop=stop_after_attempt(max_attempts),
                wait=wait_exponential(
                    multiplier=1, min=min_wait_seconds, max=max_wait_seconds
                ),
            )
            def retry_func() -> Any:
                return func(*args, **kwargs)

            try:
                return retry_func()
            except RetryError as e:
                func_name = getattr(func, "__name__", str(func))
                original_error = e.last_attempt.exception()
                logger.error(
                    f"All retry attempts failed for {func_name}: {original_error!s}"
                )
                raise PlannerError(
                    f"Function {func_name} failed after {max_attempts} attempts",
                    original_error=original_error,
                ) from e

        return cast(F, wrapper)

    return decorator
