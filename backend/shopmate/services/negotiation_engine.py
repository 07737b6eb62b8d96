"""
Negotiation engine for single-product bargaining.

WHAT: State machine over NegotiationSession (Idle -> Negotiating -> Idle)
WHY: Scripted bargaining where the discount escalates per round down to a floor
HOW: Pure functions taking a session and returning a replacement session

Counteroffer math:
- discount(round) = min(base + round * increment, max_discount_percent)
- offer = round_half_up(original_price * (1 - discount / 100)), clamped to
  [min_price, original_price]
The discount never decreases between rounds, so offers never go back up.
Once the cap is reached every further round repeats the floor offer.
"""

import math
from typing import Optional

from ..models.negotiation import (
    Product,
    NegotiationPolicy,
    NegotiationSession,
    Counteroffer,
    DealConfirmed,
    TurnResult,
    LocaleTag,
)
from ..utils.pricing import round_to_unit, discounted_price
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_POLICY = NegotiationPolicy()

# Case-insensitive substring match, so "okay" and "ok, fine" both accept.
ACCEPT_KEYWORDS: tuple[str, ...] = (
    "yes", "deal", "ok", "okay", "ठीक है", "हां", "हाँ", "ಹೌದು",
)


def compute_min_price(original_price: float, max_discount_percent: float) -> int:
    """
    Floor price for a session.

    Never above the list price, even when rounding a fractional price up.
    """
    floor_price = round_to_unit(original_price * (1 - max_discount_percent / 100))
    return min(floor_price, int(math.floor(original_price)))


def start_negotiation(
    product: Product,
    max_discount_percent: Optional[float] = None,
    language: LocaleTag = "en",
    policy: NegotiationPolicy = DEFAULT_POLICY,
) -> NegotiationSession:
    """
    Open a bargaining session for a product.

    Valid from any state; the returned session replaces whatever the caller
    held before, including a session for another product.

    Args:
        product: Catalog product (read-only)
        max_discount_percent: Cap for this session (defaults to the policy cap)
        language: Locale pinned for negotiation replies
        policy: Escalation constants

    Returns:
        Fresh active session at round 0 with no offer yet
    """
    cap = policy.max_discount_percent if max_discount_percent is None else max_discount_percent
    original_price = product.price
    min_price = compute_min_price(original_price, cap)

    session = NegotiationSession(
        active=True,
        product=product,
        original_price=original_price,
        min_price=min_price,
        max_discount_percent=cap,
        round=0,
        last_offer=None,
        language=language,
    )

    logger.info(
        f"Negotiation started for {product.name} ({product.id}): "
        f"price={original_price}, floor={min_price}, cap={cap}%, lang={language}"
    )
    return session


def is_acceptance(message: str) -> bool:
    """Whether a message accepts the current offer."""
    lowered = (message or "").lower()
    return any(keyword in lowered for keyword in ACCEPT_KEYWORDS)


def discount_for_round(
    round_number: int,
    max_discount_percent: float,
    policy: NegotiationPolicy = DEFAULT_POLICY,
) -> float:
    """Discount percentage offered on a given round (1-based)."""
    return min(
        policy.base_percent + round_number * policy.increment_percent,
        max_discount_percent,
    )


def make_counteroffer(
    session: NegotiationSession,
    policy: NegotiationPolicy = DEFAULT_POLICY,
) -> TurnResult:
    """
    Advance one round and propose the next price.

    Args:
        session: Active session
        policy: Escalation constants

    Returns:
        TurnResult with round + 1 and last_offer set to the new offer
    """
    round_number = session.round + 1
    discount = discount_for_round(round_number, session.max_discount_percent, policy)

    offer = discounted_price(session.original_price, discount)
    offer = max(offer, session.min_price)
    offer = min(offer, int(math.floor(session.original_price)))

    updated = session.model_copy(update={
        "round": round_number,
        "last_offer": offer,
        "active": True,
    })

    logger.info(
        f"Counteroffer for {session.product.id}: round={round_number}, "
        f"discount={discount}%, offer={offer} (floor={session.min_price})"
    )
    return TurnResult(
        session=updated,
        outcome=Counteroffer(offer=offer, discount_percent=discount, round=round_number),
    )


def close_deal(session: NegotiationSession) -> TurnResult:
    """Finalize at the last offer (or list price if nothing was offered)."""
    agreed = session.agreed_price
    closed = session.model_copy(update={"active": False, "round": 0})

    logger.info(
        f"Deal confirmed for {session.product.id} at {agreed} "
        f"after {session.round} round(s)"
    )
    return TurnResult(
        session=closed,
        outcome=DealConfirmed(agreed_price=agreed, product_id=session.product.id),
    )


def evaluate_turn(
    session: Optional[NegotiationSession],
    message: str,
    policy: NegotiationPolicy = DEFAULT_POLICY,
) -> Optional[TurnResult]:
    """
    Apply one buyer message to the session.

    WHAT: Accept the deal or escalate the discount
    WHY: Negotiation takes priority over routing while a session is open
    HOW: Acceptance keywords close the deal; anything else is a reason to haggle

    Args:
        session: Current session, or None when idle
        message: Buyer's message
        policy: Escalation constants

    Returns:
        TurnResult, or None when no session is active (caller falls through
        to intent routing)
    """
    if session is None or not session.active:
        return None

    if is_acceptance(message):
        return close_deal(session)

    return make_counteroffer(session, policy)


def cancel_negotiation(session: Optional[NegotiationSession]) -> None:
    """
    Reset to Idle unconditionally, dropping round and offer state.

    Returns None, which is the Idle state for callers holding a session.
    """
    if session is not None and session.active:
        logger.info(
            f"Negotiation cancelled for {session.product.id} at round {session.round}"
        )
    return None
