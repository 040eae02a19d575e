"""
Itinerary provider strategies.

Callers obtain itinerary bundles through an ``ItineraryProvider`` chosen by
configuration: live multi-agent generation, static fixtures, or live
generation that falls back to fixtures when the caller opts in. The
orchestrator itself never branches on any of this.
"""

from abc import ABC, abstractmethod

from itinerary_planner.config import PlannerConfig, ProviderKind
from itinerary_planner.data.models import ItineraryBundle, TripRequest
from itinerary_planner.orchestration.workflow import MasterOrchestrator
from itinerary_planner.services.fixtures import build_fixture_bundle
from itinerary_planner.utils.error_handling import (
    ItineraryPlannerError,
    OrchestrationError,
    retry_async,
)
from itinerary_planner.utils.logging import get_logger

logger = get_logger(__name__)


class ItineraryProvider(ABC):
    """Produces an itinerary bundle for a trip request."""

    name: str = "provider"

    @abstractmethod
    async def provide(self, request: TripRequest) -> ItineraryBundle:
        """
        Produce a bundle of exactly three itineraries.

        Raises:
            ItineraryPlannerError: If no bundle can be produced
        """


class LiveGenerationProvider(ItineraryProvider):
    """Plans with the multi-agent orchestrator, retrying whole runs on failure."""

    name = "live"

    def __init__(
        self,
        orchestrator: MasterOrchestrator,
        max_attempts: int = 1,
        min_wait_seconds: float = 1.0,
        max_wait_seconds: float = 10.0,
    ):
        self.orchestrator = orchestrator
        self.max_attempts = max(1, max_attempts)
        self.min_wait_seconds = min_wait_seconds
        self.max_wait_seconds = max_wait_seconds

    async def provide(self, request: TripRequest) -> ItineraryBundle:
        return await retry_async(
            self.orchestrator.plan,
            request,
            max_attempts=self.max_attempts,
            min_wait_seconds=self.min_wait_seconds,
            max_wait_seconds=self.max_wait_seconds,
            retry_exceptions=(OrchestrationError,),
        )


class StaticFixtureProvider(ItineraryProvider):
    """Serves the bundled fixture itineraries; never fails for a valid request."""

    name = "fixture"

    async def provide(self, request: TripRequest) -> ItineraryBundle:
        logger.info(f"Serving fixture itineraries for {request.destination}")
        return build_fixture_bundle(request)


class FallbackProvider(ItineraryProvider):
    """Tries ``primary`` and serves ``fallback`` if it fails."""

    name = "fallback"

    def __init__(self, primary: ItineraryProvider, fallback: ItineraryProvider):
        self.primary = primary
        self.fallback = fallback

    async def provide(self, request: TripRequest) -> ItineraryBundle:
        try:
            return await self.primary.provide(request)
        except ItineraryPlannerError as e:
            logger.warning(
                f"{self.primary.name} provider failed for {request.destination}, "
                f"using {self.fallback.name}: {e!s}"
            )
            return await self.fallback.provide(request)


def create_provider(
    config: PlannerConfig,
    orchestrator: MasterOrchestrator | None = None,
) -> ItineraryProvider:
    """
    Select the provider named by configuration.

    Args:
        config: Planner configuration
        orchestrator: Orchestrator for live generation; built from the
            configuration when omitted

    Returns:
        The configured provider
    """
    if config.system.provider == ProviderKind.FIXTURE:
        return StaticFixtureProvider()

    live = LiveGenerationProvider(
        orchestrator or MasterOrchestrator.from_config(config),
        max_attempts=config.system.planning_max_attempts,
    )
    if config.system.fallback_to_fixture:
        return FallbackProvider(live, StaticFixtureProvider())
    return live
