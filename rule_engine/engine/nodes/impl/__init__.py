from rule_engine.engine.nodes.factory import NodeFactory
from rule_engine.engine.nodes.impl.rename_keys_node import RenameKeysNode
from rule_engine.models.enums import NodeType

# Register all available nodes
NodeFactory.register_node(NodeType.RENAME_KEYS, RenameKeysNode)
