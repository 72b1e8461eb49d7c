import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Iterator

import structlog
from structlog.contextvars import bound_contextvars

from rule_engine.core.config import settings

# Keys bound for every message delivered by the executor, rendered first
MESSAGE_CONTEXT_KEYS = ("node", "msg_id", "msg_type", "originator")

NODES_LOGGER = "rule_engine.engine.nodes"

_configured = False


def order_message_context(logger, method_name, event_dict):
    """Move the message/node keys right after the event so records line up per message."""
    ordered = {"event": event_dict.pop("event", "")}
    for key in MESSAGE_CONTEXT_KEYS:
        if key in event_dict:
            ordered[key] = event_dict.pop(key)
    ordered.update(event_dict)
    return ordered


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        order_message_context,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _build_handlers(formatter: logging.Formatter) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if settings.LOG_CONSOLE_ENABLED:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if settings.LOG_FILE_ENABLED:
        log_path = Path(settings.LOG_FILE_PATH)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=log_path,
            maxBytes=settings.LOG_FILE_MAX_BYTES,
            backupCount=settings.LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    return handlers


def setup_logging(force: bool = False) -> None:
    """
    Route structlog and stdlib records through one formatter.
    Runs once per process unless `force` is set.
    """
    global _configured
    if _configured and not force:
        return

    shared_processors = _shared_processors()

    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.LOG_FORMAT == "json"
        else structlog.dev.ConsoleRenderer()
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for handler in _build_handlers(formatter):
        root_logger.addHandler(handler)
    root_logger.setLevel(settings.LOG_LEVEL.upper())

    # Per-message node logs
    logging.getLogger(NODES_LOGGER).setLevel(settings.LOG_NODE_LEVEL.upper())

    _configured = True


@contextmanager
def message_context(node_name: str, msg) -> Iterator[None]:
    """Bind the node and message identity to every record logged inside the block."""
    originator = f"{msg.originator.entity_type.value}:{msg.originator.id}"
    with bound_contextvars(
        node=node_name,
        msg_id=str(msg.id),
        msg_type=msg.type,
        originator=originator,
    ):
        yield


def get_logger(name: str):
    return structlog.get_logger(name)


__all__ = [
    "MESSAGE_CONTEXT_KEYS",
    "setup_logging",
    "message_context",
    "get_logger",
]
