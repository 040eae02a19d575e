"""
Configuration management for the Itinerary Planner system.

This module handles loading and managing configuration for the entire
planning system, including environment variables, API keys, and default
settings for agents, the orchestrator and the session store.
"""

import os
from dataclasses import dataclass, field
from enum import Enum

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

# Agent types with their own model configuration
AGENT_TYPES = (
    "destination",
    "activity",
    "accommodation",
    "cost",
    "synthesis",
    "formal",
)


class LogLevel(str, Enum):
    """Log levels supported by the system."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ProviderKind(str, Enum):
    """Where itinerary bundles come from."""

    LIVE = "live"
    FIXTURE = "fixture"


class SessionStoreKind(str, Enum):
    """Backends for planning session state."""

    MEMORY = "memory"
    DYNAMODB = "dynamodb"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class AgentModelConfig(BaseModel):
    """Configuration for an agent's LLM model."""

    name: str = Field(..., description="Model name to use")
    temperature: float = Field(default=0.7, description="Model temperature")
    max_tokens: int | None = Field(default=None, description="Max tokens to generate")

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, value: float) -> float:
        """Validate temperature is within reasonable bounds."""
        if not (0.0 <= value <= 1.0):
            raise ValueError(f"Temperature must be between 0.0 and 1.0, got {value}")
        return value

    @classmethod
    def from_env(cls, prefix: str = "") -> "AgentModelConfig":
        """Create an AgentModelConfig from environment variables."""
        prefix = f"{prefix}_" if prefix else ""
        return cls(
            name=os.getenv(f"{prefix}MODEL", "gemini-2.5-flash"),
            temperature=float(os.getenv(f"{prefix}TEMPERATURE", "0.7")),
            max_tokens=int(os.getenv(f"{prefix}MAX_TOKENS", "0")) or None,
        )


class APIConfig(BaseModel):
    """Configuration for external APIs."""

    gemini_api_key: str = Field(default="", description="Gemini API key")
    aws_region: str = Field(default="ap-south-1", description="AWS region")
    dynamodb_table_name: str = Field(
        default="itinerary-planner", description="DynamoDB table name"
    )
    dynamodb_endpoint: str | None = Field(
        default=None, description="DynamoDB endpoint URL (for local dev)"
    )

    class ValidationError(Exception):
        """Exception raised for API configuration validation errors."""

        def __init__(self, missing_keys: list[str]):
            self.missing_keys = missing_keys
            super().__init__(f"Missing required API keys: {', '.join(missing_keys)}")

    @classmethod
    def from_env(cls) -> "APIConfig":
        """Create an APIConfig from environment variables."""
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            aws_region=os.getenv("AWS_REGION", "ap-south-1"),
            dynamodb_table_name=os.getenv("DYNAMODB_TABLE_NAME", "itinerary-planner"),
            dynamodb_endpoint=os.getenv("DYNAMODB_ENDPOINT"),
        )

    def validate(
        self,
        require_gemini: bool = True,
        require_dynamodb: bool = False,
        raise_error: bool = False,
    ) -> bool:
        """
        Validate that the keys needed by the selected backends are present.

        Args:
            require_gemini: Whether live generation is enabled
            require_dynamodb: Whether the DynamoDB session store is enabled
            raise_error: If True, raise ValidationError instead of returning False

        Returns:
            True if all required keys are present, False otherwise
        """
        missing_keys = []
        if require_gemini and not self.gemini_api_key:
            missing_keys.append("GEMINI_API_KEY")
        if require_dynamodb and not self.dynamodb_table_name:
            missing_keys.append("DYNAMODB_TABLE_NAME")

        if missing_keys:
            logger.error(f"Missing required API keys: {', '.join(missing_keys)}")
            if raise_error:
                raise self.ValidationError(missing_keys)
            return False

        return True


class SystemConfig(BaseModel):
    """System-wide configuration."""

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    environment: str = Field(
        default="development",
        description="Environment (development, staging, production)",
    )
    default_currency: str = Field(default="INR", description="Default currency")
    orchestration_timeout: float = Field(
        default=180.0, description="Timeout in seconds for one planning run"
    )
    provider: ProviderKind = Field(
        default=ProviderKind.LIVE, description="Itinerary provider strategy"
    )
    fallback_to_fixture: bool = Field(
        default=False,
        description="Serve fixture itineraries when live generation fails",
    )
    planning_max_attempts: int = Field(
        default=1, description="Attempts per planning run (1 disables retrying)"
    )
    session_store: SessionStoreKind = Field(
        default=SessionStoreKind.MEMORY, description="Session state backend"
    )
    session_ttl: int = Field(
        default=86400, description="Seconds before stored session state expires"
    )
    gemini_requests_per_minute: int = Field(
        default=30, description="Rate limit for Gemini generation calls"
    )

    @classmethod
    def from_env(cls) -> "SystemConfig":
        """Create a SystemConfig from environment variables."""
        return cls(
            log_level=LogLevel(os.getenv("LOG_LEVEL", "INFO").upper()),
            environment=os.getenv("ENVIRONMENT", "development"),
            default_currency=os.getenv("DEFAULT_CURRENCY", "INR"),
            orchestration_timeout=float(os.getenv("ORCHESTRATION_TIMEOUT", "180")),
            provider=ProviderKind(os.getenv("ITINERARY_PROVIDER", "live").lower()),
            fallback_to_fixture=_env_flag("FALLBACK_TO_FIXTURE"),
            planning_max_attempts=int(os.getenv("PLANNING_MAX_ATTEMPTS", "1")),
            session_store=SessionStoreKind(os.getenv("SESSION_STORE", "memory").lower()),
            session_ttl=int(os.getenv("SESSION_TTL", "86400")),
            gemini_requests_per_minute=int(
                os.getenv("GEMINI_REQUESTS_PER_MINUTE", "30")
            ),
        )


@dataclass
class PlannerConfig:
    """Main configuration class for the Itinerary Planner system."""

    api: APIConfig = field(default_factory=APIConfig.from_env)
    system: SystemConfig = field(default_factory=SystemConfig.from_env)
    agent_models: dict[str, AgentModelConfig] = field(default_factory=dict)

    def __post_init__(self):
        """Initialize agent models if not provided."""
        if not self.agent_models:
            self.agent_models = {
                agent_type: AgentModelConfig.from_env(agent_type.upper())
                for agent_type in AGENT_TYPES
            }

    class ConfigurationError(Exception):
        """Exception raised for configuration validation errors."""

        pass

    def validate(self, raise_error: bool = False) -> bool:
        """
        Validate the entire configuration.

        Args:
            raise_error: If True, raise ConfigurationError instead of returning False

        Returns:
            True if configuration is valid, False otherwise
        """
        try:
            self.api.validate(
                require_gemini=self.system.provider == ProviderKind.LIVE,
                require_dynamodb=self.system.session_store == SessionStoreKind.DYNAMODB,
                raise_error=True,
            )

            if self.system.orchestration_timeout <= 0:
                raise ValueError("Orchestration timeout must be positive")

            if self.system.planning_max_attempts < 1:
                raise ValueError("Planning max attempts must be at least 1")

            return True

        except (APIConfig.ValidationError, ValueError) as e:
            if not isinstance(e, APIConfig.ValidationError):
                logger.error(f"Configuration validation failed: {e!s}")

            if raise_error:
                raise self.ConfigurationError(
                    f"Configuration validation failed: {e!s}"
                ) from e

            return False


# Global configuration instance
config = PlannerConfig()


def initialize_config(
    custom_config_path: str | None = None,
    validate: bool = True,
    raise_on_error: bool = False,
) -> PlannerConfig:
    """
    Initialize and validate the configuration.

    Args:
        custom_config_path: Path to a custom .env file to load
        validate: Whether to validate the configuration
        raise_on_error: Whether to raise an exception on validation failure

    Returns:
        Initialized and validated configuration object

    Raises:
        PlannerConfig.ConfigurationError: If validation fails and
            raise_on_error is True
        FileNotFoundError: If custom_config_path is provided but does not exist
    """
    if custom_config_path:
        if not os.path.exists(custom_config_path):
            error_msg = f"Custom configuration file not found: {custom_config_path}"
            logger.error(error_msg)
            raise FileNotFoundError(error_msg)

        logger.info(f"Loading custom configuration from {custom_config_path}")
        load_dotenv(custom_config_path, override=True)

        # Reload into the existing global object so importers see the update
        config.api = APIConfig.from_env()
        config.system = SystemConfig.from_env()
        config.agent_models = {}
        config.__post_init__()

    if validate:
        is_valid = config.validate(raise_error=raise_on_error)
        if not is_valid:
            logger.warning(
                "Configuration validation failed. Set GEMINI_API_KEY for live "
                "generation, or ITINERARY_PROVIDER=fixture to plan offline."
            )

    return config
