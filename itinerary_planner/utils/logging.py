"""
Logging framework for the Itinerary Planner system.

Console and file sinks for the CLI, JSON lines for Lambda, and context
helpers that tag records with the agent, capability or planning phase
they belong to.
"""

import json
import os
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger

from itinerary_planner.config import LogLevel
from itinerary_planner.utils.helpers import safe_serialize, truncate_text

# Longest payload or response written to the log
MAX_LOGGED_CHARS = 4000

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{name}:{function}:{line} - {message}"
)


def get_logger(name: str):
    """Get a logger bound to the given module name."""
    return logger.bind(name=name)


def setup_logging(
    log_level: LogLevel | str = LogLevel.INFO,
    log_file: str | None = None,
    serialize: bool = False,
):
    """
    Set up the logging configuration for the application.

    Args:
        log_level: The logging level to use (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs to
        serialize: Emit one JSON record per line on stderr (for CloudWatch)
    """
    if isinstance(log_level, str):
        log_level = LogLevel(log_level.upper())

    logger.remove()

    if serialize:
        logger.add(sys.stderr, level=log_level.value, serialize=True)
    else:
        logger.add(
            sys.stderr, format=CONSOLE_FORMAT, level=log_level.value, colorize=True
        )

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=log_level.value,
            rotation="10 MB",
            compression="zip",
        )

    logger.info(f"Logging initialized with level {log_level.value}")


@contextmanager
def phase_context(phase: str, destination: str) -> Iterator[None]:
    """
    Tag every record emitted inside the block with the planning phase.

    Logs the start of the phase and, when the block exits cleanly, its
    completion with the elapsed time.
    """
    started = time.perf_counter()
    with logger.contextualize(phase=phase, destination=destination):
        logger.info(f"Phase '{phase}' started for {destination}")
        yield
        elapsed = time.perf_counter() - started
        logger.info(f"Phase '{phase}' completed for {destination} in {elapsed:.2f}s")


class AgentLogger:
    """
    Logger for agents and the generation client, carrying the agent name
    and, once known, the capability being invoked.
    """

    def __init__(self, agent_name: str, capability: str | None = None):
        self.agent_name = agent_name
        self.capability = capability
        self.logger = logger.bind(agent_name=agent_name, capability=capability)

    def info(self, message: str, **kwargs):
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(message, **kwargs)

    def log_llm_input(self, model: str, capability: str, payload: dict[str, Any]):
        """
        Log a structured generation request.

        Args:
            model: Name of the model
            capability: Capability (prompt) being invoked
            payload: Input payload sent with the prompt
        """
        self.logger.debug(
            f"LLM Request: {model} - {capability}",
            model=model,
            capability=capability,
            payload=self._safe_json(payload),
        )

    def log_llm_output(self, model: str, capability: str, response: Any):
        """
        Log the decoded output of a structured generation call.

        Args:
            model: Name of the model
            capability: Capability (prompt) that produced the output
            response: Decoded model response
        """
        self.logger.debug(
            f"LLM Response: {model} - {capability}",
            model=model,
            capability=capability,
            response=self._safe_json(response),
        )

    def _safe_json(self, obj: Any) -> str | None:
        """JSON for the log record, cut to MAX_LOGGED_CHARS."""
        if obj is None:
            return None

        try:
            return truncate_text(json.dumps(safe_serialize(obj)), MAX_LOGGED_CHARS)
        except (TypeError, ValueError) as e:
            self.warning(f"Failed to serialize object to JSON: {e!s}")
            return str(obj)
