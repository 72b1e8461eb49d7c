import json
from typing import Any, Dict, Mapping
from pydantic import BaseModel, ConfigDict, Field
from rule_engine.core.logging import get_logger
from rule_engine.engine.context import NodeContext
from rule_engine.engine.nodes.base import BaseNode
from rule_engine.models.enums import NodeType
from rule_engine.schemas.message import Message

logger = get_logger(__name__)


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON
    raise ValueError(f"Non-standard JSON constant: {name}")


def rename_keys(mapping: Mapping[str, str], source: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Copy `source`, re-keying every key found in `mapping`.

    A renamed entry keeps the position of the original. When two entries end
    up under the same key the later one wins and the key stays where it was
    first inserted.
    """
    renamed: Dict[str, Any] = {}
    for key, value in source.items():
        renamed[mapping.get(key, key)] = value
    return renamed


class RenameKeysNodeConfig(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True, populate_by_name=True, extra="ignore")

    rename_keys_mapping: Dict[str, str] = Field(
        default_factory=lambda: {"temp": "temperature"},
        alias="renameKeysMapping",
        description="Old key -> new key",
    )
    from_metadata: bool = Field(
        False,
        alias="fromMetadata",
        description="Rename metadata entries instead of payload fields",
    )

    @classmethod
    def default_configuration(cls) -> "RenameKeysNodeConfig":
        return cls()


class RenameKeysNode(BaseNode):
    """
    Renames keys in the message payload (a JSON object) or in its metadata.
    Config:
    - renameKeysMapping: Dict[str, str] (e.g., {"temp": "temperature"})
    - fromMetadata: bool (default False, rename payload fields)

    Payloads that are not a JSON object are forwarded untouched.
    """

    name = "rename keys"
    node_type = NodeType.RENAME_KEYS
    description = "Renames message payload or metadata keys to the new names selected in the key mapping."
    config_class = RenameKeysNodeConfig

    config: RenameKeysNodeConfig

    def validate_config(self, config: RenameKeysNodeConfig) -> None:
        # Any mapping is acceptable, an empty one renames nothing
        pass

    def on_msg(self, ctx: NodeContext, msg: Message) -> None:
        ctx.tell_success(self.transform(msg))

    def transform(self, msg: Message) -> Message:
        self.ensure_ready()
        mapping = self.config.rename_keys_mapping

        if self.config.from_metadata:
            return msg.transform(metadata=rename_keys(mapping, msg.metadata))

        try:
            data = json.loads(msg.payload, parse_constant=_reject_constant)
        except (TypeError, ValueError, RecursionError) as e:
            logger.debug("rename_keys_passthrough", msg_id=str(msg.id), reason="invalid_json", error=str(e))
            return msg

        if not isinstance(data, dict):
            logger.debug("rename_keys_passthrough", msg_id=str(msg.id), reason="not_an_object", root=type(data).__name__)
            return msg

        renamed = rename_keys(mapping, data)
        logger.debug(
            "rename_keys_applied",
            msg_id=str(msg.id),
            renamed=[k for k in data if k in mapping],
        )
        return msg.transform(payload=json.dumps(renamed, ensure_ascii=False, separators=(",", ":")))
