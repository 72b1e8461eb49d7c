from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type, Union
from pydantic import BaseModel, ValidationError
from rule_engine.core.logging import get_logger
from rule_engine.core.errors import ConfigurationError, ProcessingError
from rule_engine.engine.context import NodeContext
from rule_engine.models.enums import NodeState, NodeType
from rule_engine.schemas.message import Message

logger = get_logger(__name__)


class NodeConfiguration:
    """
    Raw, untyped node configuration as handed over by the hosting pipeline.
    Holds either a mapping or a JSON document string.
    """

    def __init__(self, data: Union[Dict[str, Any], str, bytes, None] = None):
        self.data = data if data is not None else {}

    def __repr__(self) -> str:
        return f"NodeConfiguration({self.data!r})"


class BaseNode(ABC):
    """
    Abstract Base Class for rule nodes.

    A node is initialized once with its configuration and then receives
    messages one at a time through `on_msg`, reporting each outcome through
    the supplied context.
    """

    name: str = "node"
    node_type: NodeType
    description: str = ""
    config_class: Type[BaseModel]

    def __init__(self):
        self.config: Optional[BaseModel] = None
        self.state = NodeState.UNINITIALIZED

    def init(self, ctx: Optional[NodeContext], configuration: Any) -> None:
        """
        Parse and install `configuration`, replacing any previous one.
        Raises ConfigurationError and leaves the node untouched if it cannot be parsed.
        """
        config = self.load_config(configuration)
        self.validate_config(config)
        self.config = config
        self.state = NodeState.READY
        logger.info(
            "node_initialized",
            node=self.name,
            config=config.model_dump(mode="json", by_alias=True),
        )

    @classmethod
    def load_config(cls, configuration: Any) -> BaseModel:
        if isinstance(configuration, cls.config_class):
            return configuration

        raw = configuration.data if isinstance(configuration, NodeConfiguration) else configuration
        if raw is None:
            raw = {}

        try:
            if isinstance(raw, (str, bytes)):
                return cls.config_class.model_validate_json(raw)
            return cls.config_class.model_validate(raw)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid {cls.name} configuration: {e}", original_error=e
            ) from e

    @abstractmethod
    def validate_config(self, config: BaseModel) -> None:
        """
        Node-specific checks on an already parsed configuration.
        """
        pass

    @abstractmethod
    def on_msg(self, ctx: NodeContext, msg: Message) -> None:
        """
        Handle one message and report exactly one outcome through `ctx`.
        """
        pass

    def destroy(self) -> None:
        self.config = None
        self.state = NodeState.DESTROYED

    def ensure_ready(self) -> None:
        if self.state != NodeState.READY:
            raise ProcessingError(
                f"Node '{self.name}' cannot process messages in state '{self.state.value}'"
            )

    @classmethod
    def describe(cls) -> Dict[str, Any]:
        return {
            "name": cls.name,
            "type": cls.node_type.value,
            "description": cls.description,
            "default_configuration": cls.config_class().model_dump(mode="json", by_alias=True),
        }
