"""Tests for node registration and creation."""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from rule_engine.core.errors import ConfigurationError
from rule_engine.engine.nodes.base import BaseNode, NodeConfiguration
from rule_engine.engine.nodes.factory import NodeFactory
from rule_engine.engine.nodes.impl.rename_keys_node import RenameKeysNode
from rule_engine.models.enums import NodeState, NodeType


class _EmptyConfig(BaseModel):
    pass


class _ExplodingNode(BaseNode):
    name = "exploding"
    config_class = _EmptyConfig

    def validate_config(self, config):
        raise RuntimeError("boom")

    def on_msg(self, ctx, msg):
        ctx.tell_success(msg)


@pytest.fixture()
def isolated_registry(monkeypatch):
    monkeypatch.setattr(NodeFactory, "_registry", dict(NodeFactory._registry))


def test_rename_keys_registered():
    assert "rename_keys" in NodeFactory.available()


@pytest.mark.parametrize("node_type", [NodeType.RENAME_KEYS, "rename_keys", "RENAME_KEYS"])
def test_get_node_lookup(node_type):
    node = NodeFactory.get_node(node_type, configuration=NodeConfiguration({"fromMetadata": True}))
    assert isinstance(node, RenameKeysNode)
    assert node.state == NodeState.READY
    assert node.config.from_metadata is True


def test_get_node_positional_ctx_then_configuration(ctx):
    node = NodeFactory.get_node("rename_keys", ctx, NodeConfiguration({"fromMetadata": True}))
    assert node.state == NodeState.READY
    assert node.config.from_metadata is True
    ctx.tell_success.assert_not_called()
    ctx.tell_failure.assert_not_called()


def test_get_node_with_defaults():
    node = NodeFactory.get_node("rename_keys")
    assert node.config.rename_keys_mapping == {"temp": "temperature"}


def test_unknown_type():
    with pytest.raises(ConfigurationError, match="not registered"):
        NodeFactory.get_node("split_array", configuration={})


def test_invalid_configuration_propagates():
    with pytest.raises(ConfigurationError, match="Invalid rename keys configuration"):
        NodeFactory.get_node("rename_keys", configuration={"renameKeysMapping": [1, 2]})


def test_register_rejects_non_node(isolated_registry):
    with pytest.raises(TypeError):
        NodeFactory.register_node("bogus", dict)


def test_init_failure_wrapped(isolated_registry):
    NodeFactory.register_node("exploding", _ExplodingNode)

    with pytest.raises(ConfigurationError, match="Error instantiating node type 'exploding'") as exc_info:
        NodeFactory.get_node("Exploding", configuration={})
    assert isinstance(exc_info.value.original_error, RuntimeError)


def test_describe():
    info = NodeFactory.describe(NodeType.RENAME_KEYS)
    assert info["type"] == "rename_keys"
    assert info["name"] == "rename keys"
    assert info["default_configuration"] == {
        "renameKeysMapping": {"temp": "temperature"},
        "fromMetadata": False,
    }
