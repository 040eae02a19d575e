"""
Session-state storage for planning sessions.

A session holds up to four records, one per ``SessionKey``. Records are
whole pydantic models that are replaced, never patched, so every reader
sees a complete snapshot.
"""

import time
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel

from itinerary_planner.config import PlannerConfig, SessionStoreKind
from itinerary_planner.data.dynamodb import DynamoDBClient
from itinerary_planner.data.models import (
    FinalSelection,
    ItineraryBundle,
    SelectionState,
    TripRequest,
)
from itinerary_planner.utils.logging import get_logger

logger = get_logger(__name__)


class SessionKey(str, Enum):
    """Record slots within a session."""

    REQUEST = "REQUEST"
    BUNDLE = "BUNDLE"
    SELECTION = "SELECTION"
    FINAL = "FINAL"


SESSION_SCHEMA: dict[SessionKey, type[BaseModel]] = {
    SessionKey.REQUEST: TripRequest,
    SessionKey.BUNDLE: ItineraryBundle,
    SessionKey.SELECTION: SelectionState,
    SessionKey.FINAL: FinalSelection,
}


def _check_type(key: SessionKey, value: BaseModel) -> None:
    expected = SESSION_SCHEMA[key]
    if not isinstance(value, expected):
        raise TypeError(
            f"Session key {key.value} holds {expected.__name__}, "
            f"got {type(value).__name__}"
        )


class SessionStore(ABC):
    """Storage backend for session records."""

    @abstractmethod
    def save(self, session_id: str, key: SessionKey, value: BaseModel) -> None:
        """Store (or replace) the record under ``key``."""

    @abstractmethod
    def load(self, session_id: str, key: SessionKey) -> BaseModel | None:
        """Return the record under ``key``, or None if absent."""

    @abstractmethod
    def clear(self, session_id: str) -> None:
        """Drop every record of the session."""


class InMemorySessionStore(SessionStore):
    """Process-local store, used for the CLI and tests."""

    def __init__(self):
        self._sessions: dict[str, dict[SessionKey, BaseModel]] = {}

    def save(self, session_id: str, key: SessionKey, value: BaseModel) -> None:
        _check_type(key, value)
        self._sessions.setdefault(session_id, {})[key] = value

    def load(self, session_id: str, key: SessionKey) -> BaseModel | None:
        return self._sessions.get(session_id, {}).get(key)

    def clear(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions


class DynamoDBSessionStore(SessionStore):
    """
    DynamoDB-backed store.

    Item layout: ``PK = SESSION#<id>``, ``SK = <key>``, the record serialized
    as a JSON string under ``Data`` and an expiry under ``TTL``. JSON strings
    avoid DynamoDB's lack of float support.
    """

    def __init__(self, db: DynamoDBClient, ttl_seconds: int = 86400):
        self.db = db
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def _pk(session_id: str) -> str:
        return f"SESSION#{session_id}"

    def save(self, session_id: str, key: SessionKey, value: BaseModel) -> None:
        _check_type(key, value)
        self.db.put_item(
            {
                "PK": self._pk(session_id),
                "SK": key.value,
                "EntityType": SESSION_SCHEMA[key].__name__,
                "Data": value.model_dump_json(),
                "UpdatedAt": datetime.now(UTC).isoformat(),
                "TTL": int(time.time()) + self.ttl_seconds,
            }
        )

    def load(self, session_id: str, key: SessionKey) -> BaseModel | None:
        item = self.db.get_item(self._pk(session_id), key.value)
        if not item:
            return None
        return SESSION_SCHEMA[key].model_validate_json(item["Data"])

    def clear(self, session_id: str) -> None:
        removed = self.db.delete_partition(self._pk(session_id))
        logger.debug(f"Cleared {removed} records for session {session_id}")


def create_session_store(config: PlannerConfig) -> SessionStore:
    """Build the session store named by configuration."""
    if config.system.session_store == SessionStoreKind.DYNAMODB:
        db = DynamoDBClient(
            table_name=config.api.dynamodb_table_name,
            region=config.api.aws_region,
            endpoint_url=config.api.dynamodb_endpoint,
        )
        return DynamoDBSessionStore(db, ttl_seconds=config.system.session_ttl)
    return InMemorySessionStore()
