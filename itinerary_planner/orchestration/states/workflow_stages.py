"""
Planning phase definitions for the itinerary planner workflow.

Each phase is one node of the planning graph. Phases run in a fixed order
with a single fork-join: activity discovery and accommodation booking run
together once destination intelligence is complete. Formal trips with
meeting details get one more phase after synthesis.
"""

from enum import Enum


class PlanningPhase(str, Enum):
    """Enum representing phases of the planning workflow."""

    DESTINATION_INTELLIGENCE = "destination_intelligence"
    ACTIVITY_DISCOVERY = "activity_discovery"
    ACCOMMODATION_BOOKING = "accommodation_booking"
    COST_ESTIMATION = "cost_estimation"
    SYNTHESIS = "synthesis"
    # Runs after synthesis only for formal trips with meeting details
    FORMAL_ADJUSTMENT = "formal_adjustment"


# Phases in execution order; the two discovery phases share a superstep
PHASE_ORDER = (
    PlanningPhase.DESTINATION_INTELLIGENCE,
    PlanningPhase.ACTIVITY_DISCOVERY,
    PlanningPhase.ACCOMMODATION_BOOKING,
    PlanningPhase.COST_ESTIMATION,
    PlanningPhase.SYNTHESIS,
)

PARALLEL_PHASES = (
    PlanningPhase.ACTIVITY_DISCOVERY,
    PlanningPhase.ACCOMMODATION_BOOKING,
)
