from __future__ import annotations

import pytest
from pydantic import ValidationError

from rule_engine.schemas.message import Message


def test_new_assigns_identity(device_id):
    first = Message.new("POST_TELEMETRY_REQUEST", device_id, {"a": "1"}, '{"t":1}')
    second = Message.new("POST_TELEMETRY_REQUEST", device_id, {"a": "1"}, '{"t":1}')

    assert first.id != second.id
    assert first.ts > 0
    assert first.originator == device_id


def test_new_copies_metadata(device_id):
    metadata = {"a": "1"}
    msg = Message.new("POST_TELEMETRY_REQUEST", device_id, metadata)
    metadata["b"] = "2"

    assert msg.metadata == {"a": "1"}
    assert msg.payload == "{}"


def test_frozen(make_msg):
    msg = make_msg("{}")
    with pytest.raises(ValidationError):
        msg.payload = "[]"


def test_transform_payload_keeps_rest(make_msg):
    msg = make_msg('{"a":1}')
    new_msg = msg.transform(payload='{"b":1}')

    assert new_msg is not msg
    assert new_msg.payload == '{"b":1}'
    assert new_msg.metadata == msg.metadata
    assert (new_msg.id, new_msg.type, new_msg.originator, new_msg.ts) == (msg.id, msg.type, msg.originator, msg.ts)
    assert msg.payload == '{"a":1}'


def test_transform_metadata_keeps_payload(make_msg):
    msg = make_msg('{"a":1}')
    new_metadata = {"x": "y"}
    new_msg = msg.transform(metadata=new_metadata)
    new_metadata["z"] = "w"

    assert new_msg.metadata == {"x": "y"}
    assert new_msg.payload == msg.payload
    assert msg.metadata == {"TestKey_1": "Test", "country": "US", "city": "NY"}


def test_empty_type_rejected(device_id):
    with pytest.raises(ValidationError):
        Message.new("", device_id)
