"""
Conversation orchestration and lifecycle management.

WHAT: One chat widget conversation plus a manager holding live conversations
WHY: Tie the message log, negotiation session and host side effects together
HOW: Conversation owns its state and calls the pure decision services;
     ConversationManager is an in-memory cache with idle eviction
"""

import asyncio
import threading
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Protocol
from uuid import uuid4

from .config import settings
from .scheduling import Scheduler, ImmediateScheduler
from ..models.chat import BotReply, ChatMessage, ConversationLog
from ..models.negotiation import LocaleTag, NegotiationPolicy, NegotiationSession, Product
from ..services import negotiation_engine
from ..services.response_generator import generate_reply
from ..services import reply_templates
from ..utils.exceptions import ConversationNotFoundException
from ..utils.pricing import format_price
from ..utils.logger import conversation_context, get_logger

logger = get_logger(__name__)


class Navigator(Protocol):
    """Host router."""

    def navigate_to(self, route: str) -> None:
        ...


class NegotiationContextOwner(Protocol):
    """Host component that pushed the product being bargained over."""

    def clear_negotiation(self) -> None:
        ...


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Conversation:
    """
    A single shopping-assistant conversation.

    WHAT: Message log, active negotiation, widget visibility, host hooks
    WHY: Negotiation state is owned here and passed into the decision functions
    HOW: send_message decides synchronously, then schedules display and navigation
    """

    def __init__(
        self,
        conversation_id: Optional[str] = None,
        *,
        navigator: Optional[Navigator] = None,
        negotiation_owner: Optional[NegotiationContextOwner] = None,
        scheduler: Optional[Scheduler] = None,
        policy: Optional[NegotiationPolicy] = None,
        reply_delay_ms: Optional[int] = None,
        navigation_delay_ms: Optional[int] = None,
        language: Optional[LocaleTag] = None,
    ):
        self.conversation_id = conversation_id or str(uuid4())
        self.navigator = navigator
        self.negotiation_owner = negotiation_owner
        self.scheduler: Scheduler = scheduler or ImmediateScheduler()
        self.policy = policy or settings.get_negotiation_policy()
        self.reply_delay_ms = settings.REPLY_DELAY_MS if reply_delay_ms is None else reply_delay_ms
        self.navigation_delay_ms = (
            settings.NAVIGATION_DELAY_MS if navigation_delay_ms is None else navigation_delay_ms
        )

        self.log = ConversationLog()
        self.negotiation: Optional[NegotiationSession] = None
        self.is_open = False
        self.language: LocaleTag = language or settings.DEFAULT_LANGUAGE
        self.created_at = _now()
        self.last_activity = self.created_at

        self.log.add(reply_templates.render_welcome(self.language), "bot")

    @property
    def messages(self) -> list[ChatMessage]:
        return self.log.messages

    @property
    def is_negotiating(self) -> bool:
        return self.negotiation is not None and self.negotiation.active

    def _touch(self):
        self.last_activity = _now()

    # ---- visibility ----

    def open(self):
        self.is_open = True
        self._touch()

    def close(self):
        self.is_open = False
        self._touch()

    def toggle(self) -> bool:
        self.is_open = not self.is_open
        self._touch()
        return self.is_open

    # ---- negotiation lifecycle ----

    def start_negotiation(
        self,
        product: Product,
        max_discount_percent: Optional[float] = None,
        language: Optional[LocaleTag] = None,
    ) -> NegotiationSession:
        """
        Start (or restart) bargaining over a product pushed by the host.

        Overrides any session in progress. Opens the widget and posts the
        opening line in the pinned language.

        Args:
            product: Catalog product
            max_discount_percent: Session cap (defaults to configured cap)
            language: Pinned reply language (defaults to the last detected one)

        Returns:
            The new active session
        """
        with conversation_context(self.conversation_id):
            if self.is_negotiating and self.negotiation.product.id != product.id:
                logger.info(
                    f"Replacing negotiation for {self.negotiation.product.id} with {product.id}"
                )

            pinned = language or self.language
            self.negotiation = negotiation_engine.start_negotiation(
                product,
                max_discount_percent=max_discount_percent,
                language=pinned,
                policy=self.policy,
            )
            self.open()
            self.log.add(
                reply_templates.render_negotiation_start(
                    product.name, format_price(product.price), pinned
                ),
                "bot",
            )
            return self.negotiation

    def cancel_negotiation(self):
        """Host-side cancellation; always succeeds, even when idle."""
        with conversation_context(self.conversation_id):
            self.negotiation = negotiation_engine.cancel_negotiation(self.negotiation)
        self._touch()

    # ---- messaging ----

    def send_message(self, text: str) -> Optional[BotReply]:
        """
        Handle a buyer message.

        WHAT: Append the message, decide the reply, schedule side effects
        WHY: Decision math happens now; pacing only affects when it shows
        HOW: generate_reply on the current session, then schedule bot
             message and optional navigation

        Args:
            text: Raw input text

        Returns:
            The bot reply, or None for blank input (nothing is sent)
        """
        with conversation_context(self.conversation_id):
            if not text or not text.strip():
                logger.debug("Ignoring blank message")
                return None

            self.log.add(text, "user")
            self._touch()

            result = generate_reply(text, self.negotiation, self.policy)
            self.language = result.detected_language
            self.negotiation = result.session

            if result.clear_negotiation and self.negotiation_owner is not None:
                self.negotiation_owner.clear_negotiation()

            reply = result.reply
            # Scheduled callbacks inherit the conversation context
            self.scheduler.schedule(
                self.reply_delay_ms / 1000,
                lambda: self.log.add(reply.text, "bot"),
            )

            if reply.navigation is not None and self.navigator is not None:
                route = reply.navigation.route
                self.scheduler.schedule(
                    self.navigation_delay_ms / 1000,
                    lambda: self.navigator.navigate_to(route),
                )

            logger.info(f"Reply kind={reply.kind} lang={reply.language}")
            return reply


class ConversationManager:
    """
    In-memory registry of live conversations.

    WHAT: Create, fetch, delete and evict conversations
    WHY: The HTTP surface serves many widgets; state is process-lifetime only
    HOW: Dict guarded by a lock, idle TTL checked on create and on demand
    """

    def __init__(self, ttl_minutes: Optional[int] = None):
        self.conversations: Dict[str, Conversation] = {}
        self._lock = threading.Lock()
        self.ttl_minutes = settings.CONVERSATION_TTL_MINUTES if ttl_minutes is None else ttl_minutes

    def create(self, **kwargs) -> Conversation:
        self.cleanup_stale_conversations()
        conversation = Conversation(**kwargs)
        with self._lock:
            self.conversations[conversation.conversation_id] = conversation
        logger.info(f"Created conversation {conversation.conversation_id}")
        return conversation

    def get(self, conversation_id: str) -> Conversation:
        with self._lock:
            conversation = self.conversations.get(conversation_id)
        if conversation is None:
            raise ConversationNotFoundException(conversation_id)
        return conversation

    def delete(self, conversation_id: str):
        with self._lock:
            conversation = self.conversations.pop(conversation_id, None)
        if conversation is None:
            raise ConversationNotFoundException(conversation_id)
        logger.info(f"Deleted conversation {conversation_id}")

    def cleanup_stale_conversations(self) -> int:
        """
        Drop conversations idle longer than the TTL.

        Returns:
            Number of conversations removed
        """
        cutoff = _now() - timedelta(minutes=self.ttl_minutes)
        with self._lock:
            stale = [
                cid for cid, conv in self.conversations.items()
                if conv.last_activity < cutoff
            ]
            for cid in stale:
                del self.conversations[cid]

        if stale:
            logger.info(f"Removed {len(stale)} stale conversation(s)")
        return len(stale)

    def clear(self):
        with self._lock:
            self.conversations.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self.conversations)


async def sweep_stale_conversations(manager: ConversationManager, interval_seconds: float):
    """
    Evict idle conversations every interval until cancelled.

    Runs as a background task for the lifetime of the app.
    """
    while True:
        await asyncio.sleep(interval_seconds)
        removed = manager.cleanup_stale_conversations()
        logger.debug(f"Stale sweep removed {removed}; {len(manager)} live")


# Global instance
conversation_manager = ConversationManager()
