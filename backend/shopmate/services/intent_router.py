"""
Keyword intent routing to storefront sections.

WHAT: Map a chat message to a navigation destination
WHY: Let buyers jump to cart, sections, checkout or login by asking
HOW: Ordered rule table, case-insensitive substring match, first match wins
"""

import enum
from dataclasses import dataclass
from typing import Optional

from ..utils.logger import get_logger

logger = get_logger(__name__)


class Destination(str, enum.Enum):
    """Storefront routes the host navigator understands."""
    CART = "/cart"
    GROCERY = "/grocery"
    CLOTHING = "/clothes"
    ELECTRONICS = "/electronics"
    CHECKOUT = "/checkout"
    AUTH = "/auth"
    HOME = "/"

    @property
    def route(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntentRule:
    """Keywords that send the buyer to one destination."""
    destination: Destination
    keywords: tuple[str, ...]

    def matches(self, lowered: str) -> bool:
        return any(keyword in lowered for keyword in self.keywords)


# Order is part of the contract: keyword sets overlap (e.g. "pay" also
# appears inside "payment"), and the first matching rule wins.
ROUTE_TABLE: list[IntentRule] = [
    IntentRule(Destination.CART, ("cart", "कार्ट", "ಕಾರ್ಟ್")),
    IntentRule(Destination.GROCERY, ("grocery", "groceries", "किराना", "ದಿನಸಿ")),
    IntentRule(Destination.CLOTHING, ("clothes", "clothing", "shirt", "कपड़े", "ಬಟ್ಟೆ")),
    IntentRule(Destination.ELECTRONICS, ("electronics", "phone", "इलेक्ट्रॉनिक", "ಎಲೆಕ್ಟ್ರಾನಿಕ್ಸ್")),
    IntentRule(Destination.CHECKOUT, ("checkout", "pay", "payment", "भुगतान", "ಪಾವತಿ")),
    IntentRule(Destination.AUTH, ("login", "signup", "account", "लॉगिन", "ಲಾಗಿನ್")),
    IntentRule(Destination.HOME, ("home", "होम", "ಮನೆ")),
]


def route_message(
    message: str,
    rules: Optional[list[IntentRule]] = None
) -> Optional[Destination]:
    """
    Find the destination a message asks for.

    Pure function; scheduling the actual navigation is left to the caller.

    Args:
        message: Raw chat text
        rules: Rule table to match against (defaults to ROUTE_TABLE)

    Returns:
        Destination of the first matching rule, or None
    """
    if not message:
        return None

    lowered = message.lower()
    for rule in ROUTE_TABLE if rules is None else rules:
        if rule.matches(lowered):
            logger.debug(f"Routed message to {rule.destination.route}")
            return rule.destination

    return None
