"""Tests for the generation API rate limits."""

import asyncio
import warnings

import pytest

from itinerary_planner.utils.rate_limiting import (
    RateLimitConfig,
    RateLimitManager,
    rate_limited,
)


@pytest.fixture
def manager():
    manager = RateLimitManager(default_requests_per_minute=12)
    manager.register_service(RateLimitConfig("gemini", 30))
    return manager


def test_limiter_reused_within_a_loop(manager):
    async def limiters():
        return manager.get_limiter("gemini"), manager.get_limiter("gemini")

    first, second = asyncio.run(limiters())

    assert first is second
    assert first.max_rate == 30


def test_each_loop_gets_its_own_limiter(manager):
    async def limiter():
        return manager.get_limiter("gemini")

    first = asyncio.run(limiter())
    second = asyncio.run(limiter())

    assert first is not second
    assert second.max_rate == 30


def test_register_service_replaces_existing_limiter(manager):
    async def replace():
        before = manager.get_limiter("gemini")
        manager.register_service(RateLimitConfig("gemini", 5))
        return before, manager.get_limiter("gemini")

    before, after = asyncio.run(replace())

    assert before is not after
    assert after.max_rate == 5


def test_unregistered_service_uses_default_rate(manager):
    async def limiter():
        return manager.get_limiter("maps")

    assert asyncio.run(limiter()).max_rate == 12
    assert manager.configs["maps"].requests_per_minute == 12


def test_zero_rate_clamped_to_one(manager):
    manager.register_service(RateLimitConfig("gemini", 0))

    async def limiter():
        return manager.get_limiter("gemini")

    assert asyncio.run(limiter()).max_rate == 1


def test_decorated_calls_across_loops_do_not_warn():
    # Same pattern as the Lambda handler: a fresh event loop per invocation
    @rate_limited("loop-check")
    async def call(value):
        return value

    with warnings.catch_warnings():
        warnings.simplefilter("error", RuntimeWarning)
        results = [asyncio.run(call(n)) for n in range(3)]

    assert results == [0, 1, 2]
