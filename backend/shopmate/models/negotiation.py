"""
Negotiation domain models.

WHAT: Product reference, bargaining session state, and turn outcomes
WHY: Consistent typing across the engine, the response generator, and the API
HOW: Pydantic v2 models; sessions are frozen and replaced on every transition
"""

from dataclasses import dataclass
from typing import Literal, Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


LocaleTag = Literal["en", "hi", "kn"]


class Product(BaseModel):
    """Catalog product, owned by the host and consumed read-only."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=200)
    price: float = Field(ge=0.0, allow_inf_nan=False)
    image: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class NegotiationPolicy(BaseModel):
    """Tunable counteroffer escalation constants."""

    model_config = ConfigDict(frozen=True)

    base_percent: float = Field(default=5.0, ge=0.0, le=100.0)
    increment_percent: float = Field(default=3.0, ge=0.0, le=100.0)
    max_discount_percent: float = Field(default=20.0, ge=0.0, le=100.0)


class NegotiationSession(BaseModel):
    """
    State of a single-product bargaining session.

    original_price and min_price are required, so a session cannot exist
    before start_negotiation has priced it.
    """

    model_config = ConfigDict(frozen=True)

    active: bool = True
    product: Product
    original_price: float = Field(ge=0.0, allow_inf_nan=False)
    min_price: int = Field(ge=0)
    max_discount_percent: float = Field(ge=0.0, le=100.0)
    round: int = Field(default=0, ge=0)
    last_offer: Optional[int] = None
    language: LocaleTag = "en"

    @model_validator(mode="after")
    def validate_offer_bounds(self):
        """Ensure min_price <= last_offer <= original_price."""
        if self.min_price > self.original_price:
            raise ValueError(
                f"min_price ({self.min_price}) must not exceed original_price ({self.original_price})"
            )
        if self.last_offer is not None and not (
            self.min_price <= self.last_offer <= self.original_price
        ):
            raise ValueError(
                f"last_offer ({self.last_offer}) must lie within "
                f"[{self.min_price}, {self.original_price}]"
            )
        return self

    @property
    def agreed_price(self) -> float:
        """Price a deal closes at: the last offer, else the list price."""
        return self.last_offer if self.last_offer is not None else self.original_price


class Counteroffer(BaseModel):
    """Engine proposed a lower price."""

    kind: Literal["counteroffer"] = "counteroffer"
    offer: int
    discount_percent: float
    round: int


class DealConfirmed(BaseModel):
    """Buyer accepted; the session is closed."""

    kind: Literal["deal_confirmed"] = "deal_confirmed"
    agreed_price: float
    product_id: str


NegotiationOutcome = Union[Counteroffer, DealConfirmed]


@dataclass
class TurnResult:
    """Session after a turn plus what happened on it."""
    session: NegotiationSession
    outcome: NegotiationOutcome
