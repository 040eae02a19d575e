"""
Error handling utilities for the Itinerary Planner system.

This module provides the exception hierarchy used across the planning
pipeline, plus retry helpers for callers that want to re-attempt a failed
planning run.
"""

import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar, cast

from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

# Type variables for function decorator typing
F = TypeVar("F", bound=Callable[..., Awaitable[Any]])
T = TypeVar("T")


class ItineraryPlannerError(Exception):
    """Base exception class for all Itinerary Planner errors."""

    def __init__(self, message: str, original_error: Exception | None = None):
        """
        Initialize an ItineraryPlannerError.

        Args:
            message: Error message
            original_error: The original exception that caused this error (optional)
        """
        self.original_error = original_error
        if original_error:
            message = f"{message} - Original error: {original_error!s}"
        super().__init__(message)


class APIError(ItineraryPlannerError):
    """Error raised when an external API request fails."""

    def __init__(
        self,
        message: str,
        service_name: str,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ):
        """
        Initialize an APIError.

        Args:
            message: Error message
            service_name: Name of the API service
            status_code: HTTP status code (optional)
            original_error: The original exception that caused this error (optional)
        """
        self.service_name = service_name
        self.status_code = status_code
        status_str = f" (status: {status_code})" if status_code else ""
        full_message = f"Error in {service_name} API{status_str}: {message}"
        super().__init__(full_message, original_error)


class ValidationError(ItineraryPlannerError):
    """Error raised when validation of input or data fails."""

    pass


class ResourceNotFoundError(ItineraryPlannerError):
    """Error raised when a requested resource is not found."""

    pass


class AgentExecutionError(ItineraryPlannerError):
    """Error raised when an agent fails to produce a usable result."""

    def __init__(
        self,
        message: str,
        agent_name: str,
        destination: str = "",
        original_error: Exception | None = None,
    ):
        """
        Initialize an AgentExecutionError.

        Args:
            message: Error message
            agent_name: Name of the agent that failed
            destination: Destination being planned, for diagnostics
            original_error: The original exception that caused this error (optional)
        """
        self.agent_name = agent_name
        self.destination = destination
        self.reason = message
        target = f" for {destination}" if destination else ""
        full_message = f"Agent '{agent_name}' {message}{target}"
        super().__init__(full_message, original_error)


class EmptyResultError(AgentExecutionError):
    """The generation client returned no usable output."""

    pass


class SchemaValidationError(AgentExecutionError):
    """The generation client returned output that does not match the schema."""

    def __init__(
        self,
        message: str,
        agent_name: str,
        destination: str = "",
        details: list[str] | None = None,
        original_error: Exception | None = None,
    ):
        self.details = details or []
        super().__init__(message, agent_name, destination, original_error)


class OrchestrationError(ItineraryPlannerError):
    """Error raised when a planning run cannot produce an itinerary bundle."""

    def __init__(
        self,
        message: str,
        destination: str = "",
        original_error: Exception | None = None,
    ):
        self.destination = destination
        super().__init__(message, original_error)


class PhaseError(OrchestrationError):
    """A single orchestration phase failed, aborting the whole run."""

    def __init__(
        self,
        phase: str,
        destination: str,
        original_error: Exception | None = None,
    ):
        """
        Initialize a PhaseError.

        Args:
            phase: Name of the failing phase
            destination: Destination being planned
            original_error: The agent error that aborted the phase
        """
        self.phase = phase
        super().__init__(
            f"Phase '{phase}' failed for {destination}",
            destination=destination,
            original_error=original_error,
        )


def with_retry(
    max_attempts: int = 3,
    min_wait_seconds: float = 1.0,
    max_wait_seconds: float = 10.0,
    retry_exceptions: tuple = (APIError,),
) -> Callable[[F], F]:
    """
    Decorator to retry an async function with exponential backoff when
    specific exceptions occur.

    The last exception is re-raised unchanged once attempts are exhausted,
    so callers keep the original tagged error.

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
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            return await retry_async(
                func,
                *args,
                max_attempts=max_attempts,
                min_wait_seconds=min_wait_seconds,
                max_wait_seconds=max_wait_seconds,
                retry_exceptions=retry_exceptions,
                **kwargs,
            )

        return cast(F, wrapper)

    return decorator


async def retry_async(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_attempts: int = 3,
    min_wait_seconds: float = 1.0,
    max_wait_seconds: float = 10.0,
    retry_exceptions: tuple = (APIError,),
    **kwargs: Any,
) -> T:
    """
    Await ``func`` with tenacity-driven retries.

    Args:
        func: Coroutine function to call
        *args: Positional arguments for ``func``
        max_attempts: Maximum number of attempts (1 disables retrying)
        min_wait_seconds: Minimum wait time between retries
        max_wait_seconds: Maximum wait time between retries
        retry_exceptions: Tuple of exception types to retry on
        **kwargs: Keyword arguments for ``func``

    Returns:
        The result of the first successful call
    """
    func_name = getattr(func, "__name__", str(func))
    retrying = AsyncRetrying(
        retry=retry_if_exception_type(retry_exceptions),
        stop=stop_after_attempt(max(1, max_attempts)),
        wait=wait_exponential(multiplier=1, min=min_wait_seconds, max=max_wait_seconds),
        reraise=True,
    )
    async for attempt in retrying:
        with attempt:
            if attempt.retry_state.attempt_number > 1:
                logger.warning(
                    f"Retrying {func_name} "
                    f"(attempt {attempt.retry_state.attempt_number}/{max_attempts})"
                )
            return await func(*args, **kwargs)
    raise ItineraryPlannerError(f"Function {func_name} produced no result")
