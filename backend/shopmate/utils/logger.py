"""
Logging setup for the assistant backend.

WHAT: Console + file handlers whose records carry the active conversation id
WHY: Engine and router logs are pure functions with no idea which widget they serve
HOW: A ContextVar holds the conversation id; a handler filter stamps it on records
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Iterator, Optional

from ..core.config import settings

NO_CONVERSATION = "-"

_conversation_id: ContextVar[str] = ContextVar("conversation_id", default=NO_CONVERSATION)

CONSOLE_FORMAT = "%(asctime)s %(levelname)-7s [conv=%(conversation_id)s] %(name)s: %(message)s"
FILE_FORMAT = (
    "%(asctime)s %(levelname)-7s [conv=%(conversation_id)s] "
    "%(name)s %(filename)s:%(lineno)d: %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "httpx")


class ConversationContextFilter(logging.Filter):
    """Attach the current conversation id to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "conversation_id"):
            record.conversation_id = _conversation_id.get()
        return True


@contextmanager
def conversation_context(conversation_id: Optional[str]) -> Iterator[None]:
    """
    Tag log records emitted inside the block with a conversation id.

    Nested blocks restore the outer id on exit.
    """
    token = _conversation_id.set(conversation_id or NO_CONVERSATION)
    try:
        yield
    finally:
        _conversation_id.reset(token)


def current_conversation_id() -> str:
    return _conversation_id.get()


def _level(name: str, default: int) -> int:
    return getattr(logging, name.upper(), default)


def setup_logging():
    """
    Configure the root logger.

    WHAT: Console handler at LOG_LEVEL, file handler at LOG_FILE_LEVEL
    WHY: Operators tune verbosity per sink through the environment
    HOW: Replace root handlers; both sinks share the conversation filter
    """
    console_level = _level(settings.LOG_LEVEL, logging.INFO)
    file_level = _level(settings.LOG_FILE_LEVEL, logging.DEBUG)

    log_file = Path(settings.LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(min(console_level, file_level))
    root_logger.handlers.clear()

    context_filter = ConversationContextFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    console_handler.addFilter(context_filter)
    root_logger.addHandler(console_handler)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    file_handler.addFilter(context_filter)
    root_logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.info(
        f"Logging ready: console={logging.getLevelName(console_level)} "
        f"file={logging.getLevelName(file_level)} ({log_file})"
    )


def get_logger(name: str) -> logging.Logger:
    """Module logger; call with __name__."""
    return logging.getLogger(name)
