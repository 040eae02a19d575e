"""
Graph builder for the itinerary planner workflow.

This module builds the planning state graph with LangGraph. Each node runs
one agent, unwraps its result and records the phase as completed. A failed
result raises PhaseError, which aborts the whole graph run.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from langgraph.graph import END, START, StateGraph

from itinerary_planner.agents import (
    AccommodationBookingInput,
    ActivityDiscoveryInput,
    AgentInput,
    AgentResult,
    CostEstimationInput,
    DestinationIntelligenceInput,
    FormalTripInput,
    ItinerarySynthesisInput,
)
from itinerary_planner.orchestration.core.agent_registry import AgentRegistry
from itinerary_planner.orchestration.states.planning_state import PlanningState
from itinerary_planner.orchestration.states.workflow_stages import (
    PARALLEL_PHASES,
    PlanningPhase,
)
from itinerary_planner.utils.error_handling import PhaseError, ValidationError
from itinerary_planner.utils.logging import get_logger, phase_context

logger = get_logger(__name__)

NodeFunction = Callable[[PlanningState], Awaitable[dict[str, Any]]]


def _unwrap(phase: PlanningPhase, destination: str, result: AgentResult) -> Any:
    if not result.is_ok:
        raise PhaseError(phase.value, destination, original_error=result.error)
    return result.unwrap()


def _phase_node(
    agents: AgentRegistry,
    phase: PlanningPhase,
    output_key: str,
    build_input: Callable[[PlanningState], AgentInput],
) -> NodeFunction:
    """Create the node function that runs the agent registered for ``phase``."""
    agent = agents.get(phase)

    async def node(state: PlanningState) -> dict[str, Any]:
        destination = state["request"].destination
        with phase_context(phase.value, destination):
            try:
                result = await agent.run(build_input(state))
            except ValidationError as e:
                raise PhaseError(phase.value, destination, original_error=e) from e
            output = _unwrap(phase, destination, result)
        return {output_key: output, "completed_phases": [phase.value]}

    node.__name__ = phase.value
    return node


def route_after_synthesis(state: PlanningState) -> str:
    """Send formal trips with meeting details on to the formal adjustment."""
    if state["request"].has_meeting:
        return PlanningPhase.FORMAL_ADJUSTMENT.value
    return END


def create_planning_graph(agents: AgentRegistry):
    """
    Create the state graph for itinerary planning.

    The graph implements this flow:
        START -> destination_intelligence
        destination_intelligence -> activity_discovery, accommodation_booking
        [activity_discovery, accommodation_booking] -> cost_estimation
        cost_estimation -> synthesis
        synthesis -> formal_adjustment -> END  (formal trips with a meeting)
        synthesis -> END                       (everything else)

    The two discovery nodes run in the same superstep; cost_estimation waits
    for both. The formal adjustment node exists only when an agent is
    registered for it.

    Args:
        agents: Registry with an agent for every planning phase

    Returns:
        Compiled graph ready for ``ainvoke``

    Raises:
        ValueError: If a phase has no registered agent
    """
    missing = agents.missing_phases()
    if missing:
        raise ValueError(
            f"Missing agents for phases: {', '.join(p.value for p in missing)}"
        )

    logger.info("Creating planning graph")
    workflow = StateGraph(PlanningState)

    workflow.add_node(
        PlanningPhase.DESTINATION_INTELLIGENCE.value,
        _phase_node(
            agents,
            PlanningPhase.DESTINATION_INTELLIGENCE,
            "profile",
            lambda s: DestinationIntelligenceInput(request=s["request"]),
        ),
    )
    workflow.add_node(
        PlanningPhase.ACTIVITY_DISCOVERY.value,
        _phase_node(
            agents,
            PlanningPhase.ACTIVITY_DISCOVERY,
            "activities",
            lambda s: ActivityDiscoveryInput(request=s["request"], profile=s["profile"]),
        ),
    )
    workflow.add_node(
        PlanningPhase.ACCOMMODATION_BOOKING.value,
        _phase_node(
            agents,
            PlanningPhase.ACCOMMODATION_BOOKING,
            "accommodation",
            lambda s: AccommodationBookingInput(
                request=s["request"], profile=s["profile"]
            ),
        ),
    )
    workflow.add_node(
        PlanningPhase.COST_ESTIMATION.value,
        _phase_node(
            agents,
            PlanningPhase.COST_ESTIMATION,
            "costs",
            lambda s: CostEstimationInput(
                request=s["request"],
                profile=s["profile"],
                activities=s["activities"],
                accommodation=s["accommodation"],
            ),
        ),
    )
    workflow.add_node(
        PlanningPhase.SYNTHESIS.value,
        _phase_node(
            agents,
            PlanningPhase.SYNTHESIS,
            "bundle",
            lambda s: ItinerarySynthesisInput(
                request=s["request"],
                profile=s["profile"],
                activities=s["activities"],
                accommodation=s["accommodation"],
                costs=s["costs"],
            ),
        ),
    )

    workflow.add_edge(START, PlanningPhase.DESTINATION_INTELLIGENCE.value)

    # Fork: both discovery phases start once the destination is known
    for phase in PARALLEL_PHASES:
        workflow.add_edge(PlanningPhase.DESTINATION_INTELLIGENCE.value, phase.value)

    # Join: cost estimation waits for both
    workflow.add_edge(
        [phase.value for phase in PARALLEL_PHASES],
        PlanningPhase.COST_ESTIMATION.value,
    )

    workflow.add_edge(PlanningPhase.COST_ESTIMATION.value, PlanningPhase.SYNTHESIS.value)
    if agents.has(PlanningPhase.FORMAL_ADJUSTMENT):
        workflow.add_node(
            PlanningPhase.FORMAL_ADJUSTMENT.value,
            _phase_node(
                agents,
                PlanningPhase.FORMAL_ADJUSTMENT,
                "formal_adjustment",
                lambda s: FormalTripInput(request=s["request"], bundle=s["bundle"]),
            ),
        )
        workflow.add_conditional_edges(
            PlanningPhase.SYNTHESIS.value,
            route_after_synthesis,
            [PlanningPhase.FORMAL_ADJUSTMENT.value, END],
        )
        workflow.add_edge(PlanningPhase.FORMAL_ADJUSTMENT.value, END)
    else:
        workflow.add_edge(PlanningPhase.SYNTHESIS.value, END)

    logger.info("Planning graph created and compiled")
    return workflow.compile()
