"""
Derived-state engine for the Itinerary Planner system.
"""

from itinerary_planner.engine.recalculation import (
    apply_summary,
    night_count,
    recalculate,
    recalculate_for,
)

__all__ = ["apply_summary", "night_count", "recalculate", "recalculate_for"]
