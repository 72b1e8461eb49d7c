import time
import uuid
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field
from rule_engine.models.enums import EntityType


def _now_ms() -> int:
    return int(time.time() * 1000)


class EntityId(BaseModel):
    """Reference to the entity a message concerns."""
    entity_type: EntityType
    id: uuid.UUID

    model_config = ConfigDict(frozen=True)


class Message(BaseModel):
    """
    Immutable rule-engine message.

    `payload` is the JSON-encoded body; `metadata` is a flat str -> str map
    that travels alongside it. Nodes never modify a message in place: they
    either forward the same instance or derive a new one via `transform`.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    type: str = Field(..., min_length=1)
    originator: EntityId
    metadata: Dict[str, str] = Field(default_factory=dict)
    payload: str = "{}"
    ts: int = Field(default_factory=_now_ms)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def new(
        cls,
        type: str,
        originator: EntityId,
        metadata: Optional[Dict[str, str]] = None,
        payload: str = "{}",
    ) -> "Message":
        return cls(type=type, originator=originator, metadata=dict(metadata or {}), payload=payload)

    def transform(
        self,
        metadata: Optional[Dict[str, str]] = None,
        payload: Optional[str] = None,
    ) -> "Message":
        """
        Returns a copy sharing id, type, originator and ts with this message.
        Parts that are not given are carried over unchanged.
        """
        update = {}
        if metadata is not None:
            update["metadata"] = dict(metadata)
        if payload is not None:
            update["payload"] = payload
        return self.model_copy(update=update)
