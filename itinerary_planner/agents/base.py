"""
Base agent class for the itinerary planner system.

This module implements the foundational agent that every specialized data
agent inherits from. An agent validates its input, asks the structured
generation client for one slice of travel data, validates the response and
returns a tagged ``AgentResult``.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from itinerary_planner.agents.result import AgentResult, Err, Ok
from itinerary_planner.data.models import TripRequest
from itinerary_planner.generation.client import StructuredGenerationClient
from itinerary_planner.utils import (
    AgentExecutionError,
    AgentLogger,
    APIError,
    EmptyResultError,
    SchemaValidationError,
    ValidationError,
)


class AgentInput(BaseModel):
    """Base class for agent inputs; every input carries the trip request."""

    model_config = ConfigDict(frozen=True)

    request: TripRequest


InputT = TypeVar("InputT", bound=AgentInput)
OutputT = TypeVar("OutputT", bound=BaseModel)


@dataclass
class AgentConfig:
    """Configuration for an agent."""

    name: str
    capability: str
    failure_message: str


def request_payload(request: TripRequest) -> dict[str, Any]:
    """The request fields every capability prompt receives."""
    payload = request.model_dump(mode="json", exclude_none=True)
    payload["night_count"] = request.night_count
    return payload


def describe_validation_error(error: PydanticValidationError) -> list[str]:
    """Flatten pydantic errors into ``loc: message`` strings."""
    return [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    ]


class BaseAgent(Generic[InputT, OutputT]):
    """
    Base class for all data agents.

    Subclasses set ``input_type`` and ``output_schema`` and implement
    ``build_payload``. They may override ``check_input`` and ``check_output``
    for domain rules the schema cannot express.

    Agents hold no per-call state, so one instance can serve concurrent
    calls. They never retry; retrying is up to the caller.
    """

    input_type: ClassVar[type[AgentInput]] = AgentInput
    output_schema: ClassVar[type[BaseModel]]

    def __init__(self, client: StructuredGenerationClient, config: AgentConfig):
        """
        Initialize a base agent.

        Args:
            client: Structured generation client to call
            config: Configuration for the agent
        """
        self.client = client
        self.config = config
        self.logger = AgentLogger(config.name, capability=config.capability)

    @property
    def name(self) -> str:
        """Get the name of the agent."""
        return self.config.name

    def validate_input(self, agent_input: InputT) -> None:
        """
        Validate the agent input before any generation call.

        Raises:
            ValidationError: If the input is of the wrong type or fails a
                domain check
        """
        if not isinstance(agent_input, self.input_type):
            raise ValidationError(
                f"{self.name} expects {self.input_type.__name__}, "
                f"got {type(agent_input).__name__}"
            )
        try:
            self.check_input(agent_input)
        except ValueError as e:
            raise ValidationError(f"Invalid input for {self.name}: {e!s}") from e

    def check_input(self, agent_input: InputT) -> None:
        """Domain checks on the input; raise ValueError to reject it."""

    def build_payload(self, agent_input: InputT) -> dict[str, Any]:
        """Build the payload sent with the capability prompt."""
        raise NotImplementedError("Subclasses must implement build_payload")

    def check_output(self, output: OutputT, agent_input: InputT) -> OutputT:
        """
        Domain checks on the validated output.

        Returns the output, possibly normalized. Raise ValueError to reject it.
        """
        return output

    async def run(self, agent_input: InputT) -> AgentResult[OutputT]:
        """
        Run the agent.

        Args:
            agent_input: Validated request plus the slices this agent consumes

        Returns:
            ``Ok(output)`` on success, otherwise ``Err`` with a tagged error

        Raises:
            ValidationError: If the input itself is invalid
        """
        self.validate_input(agent_input)
        destination = agent_input.request.destination
        self.logger.info(f"Running {self.name} for {destination}")

        try:
            raw = await self.client.generate(
                self.config.capability,
                self.build_payload(agent_input),
                self.output_schema,
            )
        except APIError as e:
            return self._fail(
                AgentExecutionError(
                    self.config.failure_message, self.name, destination, original_error=e
                )
            )

        if raw is None:
            return self._fail(
                EmptyResultError(self.config.failure_message, self.name, destination)
            )

        try:
            output = self.output_schema.model_validate(raw)
        except PydanticValidationError as e:
            return self._fail(
                SchemaValidationError(
                    self.config.failure_message,
                    self.name,
                    destination,
                    details=describe_validation_error(e),
                    original_error=e,
                )
            )

        try:
            output = self.check_output(output, agent_input)
        except (ValueError, ValidationError) as e:
            return self._fail(
                SchemaValidationError(
                    self.config.failure_message,
                    self.name,
                    destination,
                    details=[str(e)],
                    original_error=e,
                )
            )

        self.logger.info(f"{self.name} completed for {destination}")
        return Ok(output)

    def _fail(self, error: AgentExecutionError) -> Err:
        self.logger.error(str(error))
        return Err(error)
