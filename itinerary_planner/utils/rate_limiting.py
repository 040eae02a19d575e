"""
Rate limiting for calls to the generation API.

Every structured generation request goes through a per-service
``AsyncLimiter`` so that the parallel discovery phase stays under the
model provider's request quota. An ``AsyncLimiter`` must not be shared
between event loops, and the Lambda handler starts a new loop on every
invocation, so limiters are created per running loop from the
registered service configuration.
"""

import asyncio
import weakref
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import wraps
from typing import Any, TypeVar, cast

from aiolimiter import AsyncLimiter
from loguru import logger

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


@dataclass
class RateLimitConfig:
    """Configuration for a service's rate limits."""

    service_name: str
    requests_per_minute: int


class RateLimitManager:
    """Holds the rate limit of each external service and its limiters."""

    def __init__(self, default_requests_per_minute: int = 30):
        self.default_requests_per_minute = default_requests_per_minute
        self.configs: dict[str, RateLimitConfig] = {}
        # one set of limiters per event loop, dropped with the loop
        self._limiters: weakref.WeakKeyDictionary[
            asyncio.AbstractEventLoop, dict[str, AsyncLimiter]
        ] = weakref.WeakKeyDictionary()

    def register_service(self, config: RateLimitConfig) -> None:
        """
        Register (or replace) the rate limit for a service.

        Limiters already created for the service are discarded so the next
        call picks up the new rate.

        Args:
            config: Rate limit configuration for the service
        """
        self.configs[config.service_name] = config
        for limiters in self._limiters.values():
            limiters.pop(config.service_name, None)
        logger.info(
            f"Initialized rate limiter for {config.service_name} "
            f"({config.requests_per_minute}/min)"
        )

    def get_limiter(self, service_name: str) -> AsyncLimiter:
        """
        Get the service's limiter for the running event loop.

        Falls back to the default rate for services nobody registered.
        Must be called from inside a coroutine.
        """
        if service_name not in self.configs:
            logger.warning(
                f"No rate limiter configured for {service_name}, "
                f"using default of {self.default_requests_per_minute}/min."
            )
            self.register_service(
                RateLimitConfig(service_name, self.default_requests_per_minute)
            )

        limiters = self._limiters.setdefault(asyncio.get_running_loop(), {})
        if service_name not in limiters:
            # minimum of 1 request per minute
            rate = max(1, self.configs[service_name].requests_per_minute)
            limiters[service_name] = AsyncLimiter(rate, 60)
        return limiters[service_name]


# Global instance shared by all generation clients
rate_limit_manager = RateLimitManager()


def configure_rate_limits(service_configs: list[RateLimitConfig]) -> None:
    """
    Configure rate limits for multiple services.

    Args:
        service_configs: List of rate limit configurations for services
    """
    for config in service_configs:
        rate_limit_manager.register_service(config)


def rate_limited(service_name: str) -> Callable[[F], F]:
    """
    Decorator that waits for a slot on the service's limiter before calling.

    Args:
        service_name: Name of the rate-limited service

    Returns:
        Decorated coroutine function
    """

    def decorator(func: F) -> F:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            async with rate_limit_manager.get_limiter(service_name):
                return await func(*args, **kwargs)

        return cast(F, wrapper)

    return decorator
