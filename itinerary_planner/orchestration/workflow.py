"""
Master orchestrator for the itinerary planner system.

This module runs the planning graph for a trip request under a timeout and
turns the final graph state into an ItineraryBundle. A run either returns a
complete bundle or raises; there is no partial result.
"""

import asyncio
import time

from itinerary_planner.config import PlannerConfig
from itinerary_planner.data.models import ItineraryBundle, TripRequest
from itinerary_planner.generation.client import (
    GEMINI_SERVICE,
    GeminiGenerationClient,
    StructuredGenerationClient,
)
from itinerary_planner.orchestration.core.agent_registry import AgentRegistry
from itinerary_planner.orchestration.core.graph_builder import create_planning_graph
from itinerary_planner.orchestration.states.planning_state import initial_state
from itinerary_planner.utils.error_handling import OrchestrationError, PhaseError
from itinerary_planner.utils.logging import get_logger
from itinerary_planner.utils.rate_limiting import RateLimitConfig, configure_rate_limits

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 180.0


class MasterOrchestrator:
    """
    Coordinates the multi-agent planning workflow.

    This class is responsible for:
    1. Building the planning graph from the agent registry
    2. Running it for one trip request under a timeout
    3. Returning the synthesized bundle with its derived costs cleared
    """

    def __init__(
        self,
        agents: AgentRegistry,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Initialize the orchestrator.

        Args:
            agents: Registry with an agent for every planning phase
            timeout_seconds: Budget for one whole planning run
        """
        self.agents = agents
        self.timeout_seconds = timeout_seconds
        self.graph = create_planning_graph(agents)

    @classmethod
    def from_config(
        cls,
        config: PlannerConfig,
        client: StructuredGenerationClient | None = None,
    ) -> "MasterOrchestrator":
        """Build an orchestrator with the default agents and configured models."""
        if client is None:
            configure_rate_limits(
                [RateLimitConfig(GEMINI_SERVICE, config.system.gemini_requests_per_minute)]
            )
            client = GeminiGenerationClient(model_configs=config.agent_models)
        return cls(
            AgentRegistry.with_defaults(client),
            timeout_seconds=config.system.orchestration_timeout,
        )

    async def plan(self, request: TripRequest) -> ItineraryBundle:
        """
        Plan three itineraries for a trip request.

        Args:
            request: Validated trip request

        Returns:
            Bundle of exactly three itineraries with stale derived costs

        Raises:
            PhaseError: If any phase fails
            OrchestrationError: If the run times out or ends without a bundle
        """
        destination = request.destination
        logger.info(f"Starting multi-agent itinerary planning for {destination}")
        started = time.monotonic()

        try:
            async with asyncio.timeout(self.timeout_seconds):
                final_state = await self.graph.ainvoke(initial_state(request))
        except TimeoutError as e:
            logger.error(
                f"Planning for {destination} timed out after {self.timeout_seconds}s"
            )
            raise OrchestrationError(
                f"Planning timed out after {self.timeout_seconds}s",
                destination=destination,
                original_error=e,
            ) from e
        except PhaseError as e:
            logger.error(f"Planning failed in phase '{e.phase}': {e!s}")
            raise

        bundle = final_state.get("bundle")
        if bundle is None:
            raise OrchestrationError(
                "Planning finished without an itinerary bundle", destination=destination
            )

        adjustment = final_state.get("formal_adjustment")
        if adjustment is not None:
            bundle = bundle.model_copy(update={"formal_adjustment": adjustment})

        logger.info(
            f"Planning for {destination} completed in {time.monotonic() - started:.1f}s "
            f"(phases: {', '.join(final_state.get('completed_phases', []))})"
        )
        return bundle.with_stale_costs()
