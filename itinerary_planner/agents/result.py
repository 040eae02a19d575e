"""
Tagged result type returned by every agent.

Agents never raise for generation failures; they return ``Err`` carrying the
tagged error so callers can branch on the outcome explicitly.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from itinerary_planner.utils.error_handling import AgentExecutionError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful agent result."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """A failed agent result."""

    error: AgentExecutionError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.error


AgentResult = Ok[T] | Err
