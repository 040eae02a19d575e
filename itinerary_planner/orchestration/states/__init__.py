"""
State models for the itinerary planner workflow.

This package contains the state passed through the planning graph and the
PlanningPhase enum naming its nodes.
"""

from itinerary_planner.orchestration.states.planning_state import (
    PlanningState,
    initial_state,
)
from itinerary_planner.orchestration.states.workflow_stages import (
    PARALLEL_PHASES,
    PHASE_ORDER,
    PlanningPhase,
)

__all__ = [
    "PARALLEL_PHASES",
    "PHASE_ORDER",
    "PlanningPhase",
    "PlanningState",
    "initial_state",
]
