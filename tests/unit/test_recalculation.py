"""
Unit tests for the cost and safety recalculation engine.
"""

import pytest

from itinerary_planner.data.models import Itinerary, SelectionState
from itinerary_planner.engine import (
    apply_summary,
    night_count,
    recalculate,
    recalculate_for,
)
from itinerary_planner.engine.recalculation import average_safety

BUDGET = 50000.0


def goa_summary(itinerary, selections=None, duration_days=3):
    return recalculate(
        itinerary,
        "goa-relaxed-h1",
        "goa-relaxed-c1",
        selections or {},
        duration_days,
        BUDGET,
    )


def test_goa_scenario(goa_itinerary):
    """Hotel 5000/night, activities 4500, commute 400/day, food 1500/day."""
    summary = goa_summary(goa_itinerary)

    assert summary.night_count == 2
    assert summary.accommodation == 10000
    assert summary.activities == 4500
    assert summary.commute == 1200
    assert summary.food == 4500
    assert summary.flights == 12000
    assert summary.total == 32200
    assert summary.remaining_budget == 17800


def test_deselect_all_activities_drops_total_by_activity_cost(goa_itinerary):
    before = goa_summary(goa_itinerary)
    selections = {activity.id: False for activity in goa_itinerary.activities()}
    after = goa_summary(goa_itinerary, selections)

    assert after.activities == 0
    assert before.total - after.total == 4500
    assert after.accommodation == before.accommodation
    assert after.commute == before.commute
    assert after.food == before.food
    assert after.flights == before.flights


def test_recalculation_is_idempotent(goa_itinerary):
    selections = {"goa-relaxed-d2-a2": False}
    assert goa_summary(goa_itinerary, selections) == goa_summary(
        goa_itinerary, selections
    )


def test_selection_order_does_not_matter(goa_itinerary):
    state = SelectionState(itinerary_id=goa_itinerary.id)
    first = (
        state.with_hotel("goa-relaxed-h2")
        .with_activity("goa-relaxed-d1-a1", False)
        .with_commute("goa-relaxed-c2")
    )
    second = (
        state.with_commute("goa-relaxed-c2")
        .with_activity("goa-relaxed-d1-a1", False)
        .with_hotel("goa-relaxed-h2")
    )

    assert recalculate_for(goa_itinerary, first, 3, BUDGET) == recalculate_for(
        goa_itinerary, second, 3, BUDGET
    )


def test_inputs_are_not_mutated(goa_itinerary):
    selections = {"goa-relaxed-d1-a1": False}
    snapshot = goa_itinerary.model_dump()

    goa_summary(goa_itinerary, selections)

    assert goa_itinerary.model_dump() == snapshot
    assert selections == {"goa-relaxed-d1-a1": False}


def test_one_day_trip_still_pays_one_night(goa_itinerary):
    summary = goa_summary(goa_itinerary, duration_days=1)

    assert summary.night_count == 1
    assert summary.accommodation == 5000
    assert summary.commute == 400
    assert summary.food == 1500


@pytest.mark.parametrize("hotel_id", [None, "no-such-hotel"])
def test_missing_or_unknown_hotel_costs_nothing(goa_itinerary, hotel_id):
    summary = recalculate(goa_itinerary, hotel_id, "goa-relaxed-c1", {}, 3, BUDGET)

    assert summary.accommodation == 0
    assert summary.total == 32200 - 10000
    # Safety only averages the selected activities
    assert summary.overall_safety_score == pytest.approx((80 + 70 + 90) / 3)


def test_unknown_commute_costs_nothing(goa_itinerary):
    summary = recalculate(goa_itinerary, "goa-relaxed-h1", "bogus", {}, 3, BUDGET)
    assert summary.commute == 0


def test_safety_averages_hotel_and_selected_activities(goa_itinerary):
    summary = goa_summary(goa_itinerary)
    assert summary.overall_safety_score == pytest.approx((90 + 80 + 70 + 90) / 4)


def test_safety_ignores_unscored_items(goa_itinerary):
    # The hostel has no safety score
    summary = recalculate(goa_itinerary, "goa-relaxed-h3", None, {}, 3, BUDGET)
    assert summary.overall_safety_score == pytest.approx((80 + 70 + 90) / 3)


def test_safety_is_zero_with_nothing_scored(goa_itinerary):
    selections = {activity.id: False for activity in goa_itinerary.activities()}
    summary = recalculate(goa_itinerary, "goa-relaxed-h3", None, selections, 3, BUDGET)
    assert summary.overall_safety_score == 0


def test_explicit_selection_overrides_generated_default(bundle_factory):
    data = bundle_factory(days=3)["itineraries"][0]
    data["daily_plan"][0]["activities"][0]["selected"] = False
    itinerary = Itinerary.model_validate(data)

    assert goa_summary(itinerary).activities == 3000
    assert goa_summary(itinerary, {"goa-relaxed-d1-a1": True}).activities == 4500


def test_remaining_budget_can_go_negative(goa_itinerary):
    summary = recalculate(
        goa_itinerary, "goa-relaxed-h1", "goa-relaxed-c1", {}, 3, 20000
    )
    assert summary.remaining_budget == -12200


def test_night_count():
    assert night_count(1) == 1
    assert night_count(2) == 1
    assert night_count(7) == 6


def test_average_safety():
    assert average_safety([]) == 0
    assert average_safety([0, 0]) == 0
    assert average_safety([80, 0, 100]) == 90


def test_apply_summary_fills_derived_fields(goa_itinerary):
    summary = goa_summary(goa_itinerary)
    updated = apply_summary(goa_itinerary, summary)

    assert updated.cost.total == 32200
    assert updated.cost.accommodation == 10000
    assert updated.cost.flights == goa_itinerary.cost.flights
    assert updated.overall_safety_score == summary.overall_safety_score
    # The original is untouched
    assert goa_itinerary.cost.total == 999
