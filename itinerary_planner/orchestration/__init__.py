"""
Orchestration package for the itinerary planner system.

This package connects the specialized agents through a LangGraph state graph
with a single fork-join point, and exposes the MasterOrchestrator entry point.
"""

from itinerary_planner.orchestration.core import AgentRegistry, create_planning_graph
from itinerary_planner.orchestration.states import (
    PlanningPhase,
    PlanningState,
)
from itinerary_planner.orchestration.workflow import MasterOrchestrator

__all__ = [
    "AgentRegistry",
    "MasterOrchestrator",
    "PlanningPhase",
    "PlanningState",
    "create_planning_graph",
]
