"""
Agent registry for the itinerary planner workflow.

The planning graph looks agents up by phase, so tests can register fakes
for individual phases without touching the graph wiring.
"""

from itinerary_planner.agents import (
    AccommodationBookingAgent,
    ActivityDiscoveryAgent,
    BaseAgent,
    CostEstimationAgent,
    DestinationIntelligenceAgent,
    FormalTripAgent,
    ItinerarySynthesisAgent,
)
from itinerary_planner.generation.client import StructuredGenerationClient
from itinerary_planner.orchestration.states.workflow_stages import (
    PHASE_ORDER,
    PlanningPhase,
)
from itinerary_planner.utils.logging import get_logger

logger = get_logger(__name__)


class AgentRegistry:
    """
    Maps each planning phase to the agent that runs it.

    The registry itself holds no per-run state; one registry can back any
    number of concurrent planning runs.
    """

    def __init__(self):
        """Initialize the agent registry."""
        self._agents: dict[PlanningPhase, BaseAgent] = {}

    def register(self, phase: PlanningPhase, agent: BaseAgent) -> None:
        """
        Register the agent for a phase.

        Args:
            phase: The phase the agent runs
            agent: The agent instance to register
        """
        logger.debug(f"Registering agent: {phase.value} ({agent.__class__.__name__})")
        self._agents[phase] = agent

    def get(self, phase: PlanningPhase) -> BaseAgent:
        """
        Get the agent for a phase.

        Raises:
            ValueError: If no agent is registered for the phase
        """
        if phase not in self._agents:
            raise ValueError(f"No agent registered for phase '{phase.value}'")
        return self._agents[phase]

    def has(self, phase: PlanningPhase) -> bool:
        return phase in self._agents

    def missing_phases(self) -> list[PlanningPhase]:
        return [phase for phase in PHASE_ORDER if phase not in self._agents]

    def register_defaults(self, client: StructuredGenerationClient) -> "AgentRegistry":
        """Register the standard agent for every phase, sharing one client."""
        self.register(
            PlanningPhase.DESTINATION_INTELLIGENCE, DestinationIntelligenceAgent(client)
        )
        self.register(PlanningPhase.ACTIVITY_DISCOVERY, ActivityDiscoveryAgent(client))
        self.register(
            PlanningPhase.ACCOMMODATION_BOOKING, AccommodationBookingAgent(client)
        )
        self.register(PlanningPhase.COST_ESTIMATION, CostEstimationAgent(client))
        self.register(PlanningPhase.SYNTHESIS, ItinerarySynthesisAgent(client))
        self.register(PlanningPhase.FORMAL_ADJUSTMENT, FormalTripAgent(client))

        logger.info("Default agents registered")
        return self

    @classmethod
    def with_defaults(cls, client: StructuredGenerationClient) -> "AgentRegistry":
        return cls().register_defaults(client)
