"""
Response generation for incoming chat messages.

WHAT: Turn a buyer message into a localized bot reply plus side effects
WHY: Single decision point combining negotiation, routing and localization
HOW: Negotiation first when a session is active, else keyword routing, else help
"""

from dataclasses import dataclass
from typing import Optional

from ..models.chat import BotReply, NavigationIntent
from ..models.negotiation import (
    NegotiationPolicy,
    NegotiationSession,
    DealConfirmed,
)
from ..utils.pricing import format_price, format_percent
from ..utils.logger import get_logger
from .language_detector import detect_language
from .intent_router import route_message
from .negotiation_engine import evaluate_turn, DEFAULT_POLICY
from . import reply_templates

logger = get_logger(__name__)


@dataclass
class ReplyResult:
    """Reply for the buyer and the session state that follows it."""
    reply: BotReply
    session: Optional[NegotiationSession]
    detected_language: str
    clear_negotiation: bool = False


def generate_reply(
    message: str,
    session: Optional[NegotiationSession] = None,
    policy: NegotiationPolicy = DEFAULT_POLICY,
) -> ReplyResult:
    """
    Decide the bot's reply to a buyer message.

    WHAT: Compose language detection, negotiation and routing
    WHY: Negotiation takes priority over routing while a session is open
    HOW:
    1. Detect the message language
    2. Active session: evaluate the turn, template in the session's pinned language
    3. Otherwise route by keywords: confirmation + route marker, or generic help

    Args:
        message: Buyer's message (already known to be non-blank)
        session: Current negotiation session, or None when idle
        policy: Escalation constants for counteroffers

    Returns:
        ReplyResult; session is the replacement session (None once a deal closes)
    """
    language = detect_language(message)

    turn = evaluate_turn(session, message, policy)
    if turn is not None:
        outcome = turn.outcome
        pinned = turn.session.language

        if isinstance(outcome, DealConfirmed):
            text = reply_templates.render_deal_confirmed(
                format_price(outcome.agreed_price), pinned
            )
            reply = BotReply(text=text, language=pinned, kind="deal_confirmed", outcome=outcome)
            return ReplyResult(
                reply=reply,
                session=None,
                detected_language=language,
                clear_negotiation=True,
            )

        text = reply_templates.render_counteroffer(
            format_price(outcome.offer), format_percent(outcome.discount_percent), pinned
        )
        reply = BotReply(text=text, language=pinned, kind="counteroffer", outcome=outcome)
        return ReplyResult(reply=reply, session=turn.session, detected_language=language)

    destination = route_message(message)
    if destination is not None:
        logger.info(f"Routing intent -> {destination.route} (lang={language})")
        reply = BotReply(
            text=reply_templates.render_route_confirmation(destination, language),
            language=language,
            kind="navigation",
            navigation=NavigationIntent(route=destination.route, destination=destination.name.lower()),
        )
        return ReplyResult(reply=reply, session=session, detected_language=language)

    logger.debug(f"No intent matched (lang={language}); sending help")
    reply = BotReply(text=reply_templates.render_help(language), language=language, kind="help")
    return ReplyResult(reply=reply, session=session, detected_language=language)
