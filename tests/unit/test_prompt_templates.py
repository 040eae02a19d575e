"""Tests for the capability prompt templates."""

import pytest

from itinerary_planner.generation.client import CAPABILITY_MODEL_KEYS
from itinerary_planner.prompts.templates import (
    CAPABILITY_PROMPTS,
    PromptTemplate,
    get_prompt,
    render_template,
)


def test_render_template_basic():
    template = "Plan {days} days in {place}"
    assert render_template(template, days="3", place="Goa") == "Plan 3 days in Goa"


def test_render_template_missing_var():
    result = render_template("Hello {name}, you are in {place}!", name="Asha")
    assert "{place}" in result  # unresolved vars stay as-is


def test_prompt_template_default_layout():
    prompt = PromptTemplate(capability="test", system="You are a test.")
    result = prompt.render(payload='{"a": 1}', schema='{"type": "object"}')

    assert result.startswith('INPUT:\n{"a": 1}')
    assert result.endswith('SCHEMA:\n{"type": "object"}')


def test_every_capability_has_a_prompt_and_model():
    assert set(CAPABILITY_PROMPTS) == set(CAPABILITY_MODEL_KEYS)
    for capability, prompt in CAPABILITY_PROMPTS.items():
        assert prompt.capability == capability
        assert prompt.system
        assert "{payload}" in prompt.template
        assert "{schema}" in prompt.template


def test_synthesis_prompt_asks_for_three_vibes():
    system = get_prompt("itinerary_synthesis").system
    assert "exactly 3 itineraries" in system


def test_get_prompt_unknown_capability():
    with pytest.raises(KeyError, match="flight_search"):
        get_prompt("flight_search")
