"""
Core orchestration components for the itinerary planner workflow.

This package contains the graph builder and the agent registry the graph
resolves its agents from.
"""

from itinerary_planner.orchestration.core.agent_registry import AgentRegistry
from itinerary_planner.orchestration.core.graph_builder import create_planning_graph

__all__ = [
    "AgentRegistry",
    "create_planning_graph",
]
