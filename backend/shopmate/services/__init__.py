"""Conversational decision services."""

from .language_detector import detect_language
from .intent_router import Destination, IntentRule, ROUTE_TABLE, route_message
from .negotiation_engine import (
    ACCEPT_KEYWORDS,
    start_negotiation,
    evaluate_turn,
    cancel_negotiation,
    discount_for_round,
    is_acceptance,
)
from .response_generator import ReplyResult, generate_reply

__all__ = [
    "detect_language",
    "Destination",
    "IntentRule",
    "ROUTE_TABLE",
    "route_message",
    "ACCEPT_KEYWORDS",
    "start_negotiation",
    "evaluate_turn",
    "cancel_negotiation",
    "discount_for_round",
    "is_acceptance",
    "ReplyResult",
    "generate_reply",
]
