"""
Node Executor - delivers messages to rule nodes and guarantees that the
hosting pipeline sees exactly one outcome per message.
"""
from typing import List, Optional, Tuple

from rule_engine.core.config import settings
from rule_engine.core.errors import AppError, ProcessingError
from rule_engine.core.logging import get_logger, message_context, setup_logging
from rule_engine.engine.context import NodeContext
from rule_engine.engine.nodes.base import BaseNode
from rule_engine.schemas.message import Message

logger = get_logger(__name__)


class OutcomeRecorder(NodeContext):
    """
    Context handed to the node in place of the pipeline context.
    Only records what the node reports; the executor forwards the first
    outcome once the node has returned.
    """

    def __init__(self, node: BaseNode):
        self.node = node
        self.outcomes: List[Tuple[str, Message, Optional[Exception]]] = []

    @property
    def reported(self) -> bool:
        return bool(self.outcomes)

    def tell_success(self, msg: Message) -> None:
        self._record("success", msg, None)

    def tell_failure(self, msg: Message, error: Exception) -> None:
        self._record("failure", msg, error)

    def _record(self, kind: str, msg: Message, error: Optional[Exception]) -> None:
        self.outcomes.append((kind, msg, error))
        if len(self.outcomes) > 1:
            logger.warning(
                "duplicate_outcome_dropped",
                outcome=kind,
                first_outcome=self.outcomes[0][0],
            )

    def forward(self, ctx: NodeContext) -> None:
        kind, msg, error = self.outcomes[0]
        if kind == "success":
            ctx.tell_success(msg)
        else:
            ctx.tell_failure(msg, error)


class NodeExecutor:
    """
    Runs a single node against a single message.

    Features:
    - Exceptions escaping the node are reported as failures, never raised
    - Non-application exceptions are wrapped in ProcessingError
    - A node that returns without reporting gets a failure on its behalf
    - Duplicate reports are dropped
    - Exceptions raised by the pipeline context propagate to the caller
    """

    def __init__(self):
        if settings.LOG_AUTO_SETUP:
            setup_logging()

    def execute(self, node: BaseNode, ctx: NodeContext, msg: Message) -> None:
        recorder = OutcomeRecorder(node)

        with message_context(node.name, msg):
            logger.debug(f"→ Delivering message to node '{node.name}'")

            try:
                node.on_msg(recorder, msg)
            except Exception as e:
                # =============================================================
                # Handle Failure
                # =============================================================
                if recorder.reported:
                    logger.warning("failure_after_outcome", error=str(e), exc_info=True)
                else:
                    logger.error(f"✗ Node '{node.name}' FAILED: {str(e)}", exc_info=True)
                    error = e if isinstance(e, AppError) else ProcessingError(
                        f"Node '{node.name}' failed to process message: {e}", original_error=e
                    )
                    recorder.tell_failure(msg, error)

            if not recorder.reported:
                logger.error("node_reported_no_outcome")
                recorder.tell_failure(
                    msg, ProcessingError(f"Node '{node.name}' returned without reporting an outcome")
                )

            # Outside the node's try block: pipeline errors are the caller's
            recorder.forward(ctx)
            logger.debug(f"← Node '{node.name}' completed: {recorder.outcomes[0][0]}")
