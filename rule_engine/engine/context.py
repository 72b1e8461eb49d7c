from abc import ABC, abstractmethod
from rule_engine.schemas.message import Message


class NodeContext(ABC):
    """
    Outcome channel handed to a node by the hosting pipeline.
    A node reports exactly one outcome per inbound message.
    """

    @abstractmethod
    def tell_success(self, msg: Message) -> None:
        pass

    @abstractmethod
    def tell_failure(self, msg: Message, error: Exception) -> None:
        pass
