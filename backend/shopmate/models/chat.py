"""
Chat message models.

WHAT: Message structure and the append-only conversation log
WHY: Rendering surface consumes an ordered, immutable history
HOW: Frozen pydantic messages held in a lock-guarded list
"""

import threading
from datetime import datetime, timezone
from typing import Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from .negotiation import NegotiationOutcome


Sender = Literal["user", "bot"]


class ChatMessage(BaseModel):
    """A single exchanged message. Never mutated once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    text: str
    sender: Sender
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ConversationLog:
    """
    Ordered append-only sequence of chat messages.

    Messages are kept in arrival order; there is no removal or pruning.
    """

    def __init__(self):
        self._messages: list[ChatMessage] = []
        self._lock = threading.Lock()

    def append(self, message: ChatMessage) -> ChatMessage:
        with self._lock:
            self._messages.append(message)
        return message

    def add(self, text: str, sender: Sender) -> ChatMessage:
        """Create a message and append it."""
        return self.append(ChatMessage(text=text, sender=sender))

    @property
    def messages(self) -> list[ChatMessage]:
        """Snapshot copy of the log."""
        with self._lock:
            return list(self._messages)

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)


ReplyKind = Literal["counteroffer", "deal_confirmed", "navigation", "help"]


class NavigationIntent(BaseModel):
    """Request for the host to change page."""

    model_config = ConfigDict(frozen=True)

    route: str
    destination: str


class BotReply(BaseModel):
    """
    Structured bot reply.

    text keeps a trailing route marker for navigation replies so it stays
    self-describing if the navigation channel is dropped.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    language: str
    kind: ReplyKind
    navigation: Optional[NavigationIntent] = None
    outcome: Optional[NegotiationOutcome] = None
