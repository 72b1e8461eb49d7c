import enum

class NodeState(str, enum.Enum):
    """Lifecycle of a rule node instance."""
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    DESTROYED = "destroyed"

class NodeType(str, enum.Enum):
    """Registered node implementations."""
    RENAME_KEYS = "rename_keys"

class EntityType(str, enum.Enum):
    """Kinds of entities a message can originate from."""
    DEVICE = "device"
    ASSET = "asset"
    CUSTOMER = "customer"
    TENANT = "tenant"
    RULE_NODE = "rule_node"
