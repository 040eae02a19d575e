"""
Cost and safety recalculation for an itinerary.

``recalculate`` is a pure function of the itinerary and the current
selections. It is re-run after every selection change and never mutates its
inputs, so repeated calls with the same inputs give identical summaries
regardless of the order in which the selections were made.
"""

from collections.abc import Iterable, Mapping
from statistics import fmean

from itinerary_planner.data.models import (
    Activity,
    CostSummary,
    Itinerary,
    SelectionState,
)


def night_count(duration_days: int) -> int:
    """Nights of accommodation for a trip; never less than one."""
    return max(duration_days - 1, 1)


def is_selected(activity: Activity, activity_selections: Mapping[str, bool]) -> bool:
    """Effective selection: an explicit flag wins over the generated default."""
    return activity_selections.get(activity.id, activity.selected)


def selected_activities(
    itinerary: Itinerary, activity_selections: Mapping[str, bool]
) -> list[Activity]:
    return [a for a in itinerary.activities() if is_selected(a, activity_selections)]


def average_safety(scores: Iterable[float]) -> float:
    """Mean of the positive scores, or 0 when none remain."""
    positive = [score for score in scores if score > 0]
    if not positive:
        return 0.0
    return fmean(positive)


def recalculate(
    itinerary: Itinerary,
    selected_hotel_id: str | None,
    selected_commute_id: str | None,
    activity_selections: Mapping[str, bool],
    duration_days: int,
    budget_ceiling: float,
) -> CostSummary:
    """
    Derive live costs and the overall safety score from the selections.

    Unknown or missing hotel and commute ids count as no selection, so their
    cost component is 0. The remaining budget may be negative.

    Args:
        itinerary: The active itinerary
        selected_hotel_id: Id of the chosen hotel, if any
        selected_commute_id: Id of the chosen commute option, if any
        activity_selections: Explicit per-activity flags; activities without
            an entry keep their generated ``selected`` value
        duration_days: Trip length in days
        budget_ceiling: The request's budget

    Returns:
        The derived cost summary
    """
    nights = night_count(duration_days)
    hotel = itinerary.find_hotel(selected_hotel_id)
    commute = itinerary.find_commute(selected_commute_id)
    chosen = selected_activities(itinerary, activity_selections)

    accommodation = hotel.cost_per_night * nights if hotel else 0.0
    activities = sum((activity.cost for activity in chosen), 0.0)
    commute_cost = commute.cost * duration_days if commute else 0.0
    food = itinerary.cost.food * duration_days
    flights = itinerary.cost.flights
    total = flights + accommodation + activities + commute_cost + food

    scores = [activity.safety_score for activity in chosen]
    if hotel:
        scores.insert(0, hotel.safety_score)

    return CostSummary(
        accommodation=accommodation,
        activities=activities,
        commute=commute_cost,
        food=food,
        flights=flights,
        total=total,
        remaining_budget=budget_ceiling - total,
        overall_safety_score=average_safety(scores),
        night_count=nights,
    )


def recalculate_for(
    itinerary: Itinerary,
    selection: SelectionState,
    duration_days: int,
    budget_ceiling: float,
) -> CostSummary:
    """``recalculate`` driven by a session's selection snapshot."""
    return recalculate(
        itinerary,
        selection.hotel_id,
        selection.commute_id,
        selection.activity_selections,
        duration_days,
        budget_ceiling,
    )


def apply_summary(itinerary: Itinerary, summary: CostSummary) -> Itinerary:
    """Return a copy of the itinerary with its derived cost fields filled in."""
    cost = itinerary.cost.model_copy(
        update={
            "accommodation": summary.accommodation,
            "activities": summary.activities,
            "commute": summary.commute,
            "total": summary.total,
        }
    )
    return itinerary.model_copy(
        update={"cost": cost, "overall_safety_score": summary.overall_safety_score}
    )
