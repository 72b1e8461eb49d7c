from typing import Any, Dict, List, Optional, Type, Union
from rule_engine.engine.context import NodeContext
from rule_engine.engine.nodes.base import BaseNode
from rule_engine.core.errors import ConfigurationError
from rule_engine.models.enums import NodeType

class NodeFactory:
    """
    Factory for creating initialized rule node instances.
    """
    _registry: Dict[str, Type[BaseNode]] = {}

    @classmethod
    def register_node(cls, node_type: Union[str, NodeType], node_class: Type[BaseNode]) -> None:
        if not isinstance(node_class, type) or not issubclass(node_class, BaseNode):
            raise TypeError("Node class must inherit from BaseNode.")
        cls._registry[cls._key(node_type)] = node_class

    @classmethod
    def get_node_class(cls, node_type: Union[str, NodeType]) -> Type[BaseNode]:
        # Auto-discover if registry is empty (resiliency for worker processes)
        if not cls._registry:
            import rule_engine.engine.nodes.impl  # noqa: F401

        node_class = cls._registry.get(cls._key(node_type))
        if not node_class:
            raise ConfigurationError(f"Node type '{cls._key(node_type)}' not registered. Available: {cls.available()}")
        return node_class

    @classmethod
    def get_node(
        cls,
        node_type: Union[str, NodeType],
        ctx: Optional[NodeContext] = None,
        configuration: Any = None,
    ) -> BaseNode:
        node_class = cls.get_node_class(node_type)

        try:
            node = node_class()
            node.init(ctx, configuration)
            return node
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(
                f"Error instantiating node type '{cls._key(node_type)}': {e}",
                original_error=e,
            ) from e

    @classmethod
    def describe(cls, node_type: Union[str, NodeType]) -> Dict[str, Any]:
        return cls.get_node_class(node_type).describe()

    @classmethod
    def available(cls) -> List[str]:
        return sorted(cls._registry.keys())

    @staticmethod
    def _key(node_type: Union[str, NodeType]) -> str:
        if isinstance(node_type, NodeType):
            return node_type.value
        return str(node_type).lower()
