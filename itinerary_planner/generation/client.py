"""
Structured generation client.

Agents see generation as an opaque capability: given a capability name, an
input payload and an output schema, return a decoded JSON object or None.
``GeminiGenerationClient`` implements it on top of the Google GenAI SDK.
"""

import json
from abc import ABC, abstractmethod
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import BaseModel

from itinerary_planner.config import AgentModelConfig
from itinerary_planner.prompts.templates import get_prompt
from itinerary_planner.utils.error_handling import APIError, with_retry
from itinerary_planner.utils.helpers import safe_load_json
from itinerary_planner.utils.logging import AgentLogger
from itinerary_planner.utils.rate_limiting import rate_limited

GEMINI_SERVICE = "gemini"

# Which agent model configuration serves each capability
CAPABILITY_MODEL_KEYS = {
    "destination_intelligence": "destination",
    "activity_discovery": "activity",
    "accommodation_booking": "accommodation",
    "cost_estimation": "cost",
    "itinerary_synthesis": "synthesis",
    "formal_adjustment": "formal",
}


class StructuredGenerationClient(ABC):
    """Produces JSON objects that are meant to conform to a schema."""

    @abstractmethod
    async def generate(
        self,
        capability: str,
        payload: dict[str, Any],
        schema: type[BaseModel],
    ) -> dict[str, Any] | None:
        """
        Generate an object for ``capability``.

        Returns:
            The decoded object, or None when the model produced nothing usable.
            Conformance to ``schema`` is the caller's job to check.
        """


class GeminiGenerationClient(StructuredGenerationClient):
    """Generation client backed by Gemini JSON-mode responses."""

    def __init__(
        self,
        model_configs: dict[str, AgentModelConfig] | None = None,
        client: genai.Client | None = None,
    ):
        """
        Initialize the client.

        Args:
            model_configs: Model settings keyed by agent type
                (destination, activity, accommodation, cost, synthesis)
            client: Pre-built GenAI client (optional)
        """
        self.model_configs = model_configs or {}
        self.client = client or genai.Client()
        self.logger = AgentLogger("generation")

    def model_for(self, capability: str) -> AgentModelConfig:
        """Model settings for a capability, falling back to the default model."""
        key = CAPABILITY_MODEL_KEYS.get(capability, capability)
        return self.model_configs.get(key) or AgentModelConfig(name="gemini-2.5-flash")

    async def generate(
        self,
        capability: str,
        payload: dict[str, Any],
        schema: type[BaseModel],
    ) -> dict[str, Any] | None:
        prompt = get_prompt(capability)
        model_config = self.model_for(capability)
        user_prompt = prompt.render(
            payload=json.dumps(payload, indent=2, ensure_ascii=False, default=str),
            schema=json.dumps(schema.model_json_schema()),
        )

        self.logger.log_llm_input(model_config.name, capability, payload)
        text = await self._call_model(model_config, prompt.system, user_prompt)
        data = safe_load_json(text)
        self.logger.log_llm_output(model_config.name, capability, data)

        if not isinstance(data, dict):
            self.logger.warning(f"No usable JSON object returned for {capability}")
            return None
        return data

    @with_retry(max_attempts=3)
    @rate_limited(GEMINI_SERVICE)
    async def _call_model(
        self,
        model_config: AgentModelConfig,
        system_instruction: str,
        user_prompt: str,
    ) -> str | None:
        """
        Call the Gemini API once.

        Raises:
            APIError: If the API rejects or fails the request
        """
        config = types.GenerateContentConfig(
            temperature=model_config.temperature,
            max_output_tokens=model_config.max_tokens,
            system_instruction=system_instruction,
            response_mime_type="application/json",
        )
        contents = [
            types.Content(role="user", parts=[types.Part.from_text(text=user_prompt)])
        ]

        try:
            response = await self.client.aio.models.generate_content(
                model=model_config.name,
                contents=contents,
                config=config,
            )
        except genai_errors.APIError as e:
            self.logger.error(f"Error calling model: {e!s}")
            raise APIError(
                str(e), GEMINI_SERVICE, status_code=e.code, original_error=e
            ) from e

        return response.text
