from __future__ import annotations

import uuid
from unittest.mock import MagicMock

import pytest

import rule_engine.engine.nodes.impl  # noqa: F401  registers nodes
from rule_engine.engine.context import NodeContext
from rule_engine.models.enums import EntityType
from rule_engine.schemas.message import EntityId, Message


@pytest.fixture()
def ctx() -> MagicMock:
    """Spy standing in for the pipeline's outcome channel."""
    return MagicMock(spec=NodeContext)


@pytest.fixture()
def device_id() -> EntityId:
    return EntityId(entity_type=EntityType.DEVICE, id=uuid.uuid4())


@pytest.fixture()
def make_msg(device_id: EntityId):
    def _make(payload: str, metadata: dict[str, str] | None = None) -> Message:
        if metadata is None:
            metadata = {"TestKey_1": "Test", "country": "US", "city": "NY"}
        return Message.new("POST_ATTRIBUTES_REQUEST", device_id, metadata, payload)

    return _make
