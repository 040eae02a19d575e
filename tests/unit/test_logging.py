"""Tests for logging helpers."""

import json

from loguru import logger

from itinerary_planner.utils.logging import (
    MAX_LOGGED_CHARS,
    AgentLogger,
    phase_context,
)


def capture():
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    return records, sink_id


def test_phase_context_tags_records():
    records, sink_id = capture()
    try:
        with phase_context("cost_estimation", "Goa"):
            logger.info("inside")
        logger.info("outside")
    finally:
        logger.remove(sink_id)

    by_message = {record["message"]: record for record in records}
    assert by_message["inside"]["extra"]["phase"] == "cost_estimation"
    assert by_message["inside"]["extra"]["destination"] == "Goa"
    assert "phase" not in by_message["outside"]["extra"]
    assert any(
        message.startswith("Phase 'cost_estimation' completed for Goa")
        for message in by_message
    )


def test_agent_logger_binds_capability():
    records, sink_id = capture()
    try:
        AgentLogger("cost_estimation", capability="estimateCosts").info("hello")
    finally:
        logger.remove(sink_id)

    extra = records[-1]["extra"]
    assert extra["agent_name"] == "cost_estimation"
    assert extra["capability"] == "estimateCosts"


def test_safe_json_truncates_long_payloads():
    agent_logger = AgentLogger("generation")

    short = agent_logger._safe_json({"city": "Goa"})
    long = agent_logger._safe_json({"notes": "x" * (MAX_LOGGED_CHARS * 2)})

    assert json.loads(short) == {"city": "Goa"}
    assert len(long) == MAX_LOGGED_CHARS
    assert long.endswith("...")
    assert agent_logger._safe_json(None) is None
