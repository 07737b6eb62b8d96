"""
Pydantic API schemas for the chat endpoints.

WHAT: Request and response models for FastAPI
WHY: Type-safe validation and serialization matching the widget frontend
HOW: Pydantic v2 models built from the domain objects
"""

from typing import Optional, List, Literal
from pydantic import BaseModel, Field
from datetime import datetime

from .chat import BotReply, ChatMessage
from .negotiation import LocaleTag, Product, NegotiationSession


# ========== Conversation ==========

class ConversationResponse(BaseModel):
    """Snapshot of a conversation for the rendering surface."""
    conversation_id: str
    is_open: bool
    language: str
    created_at: datetime
    messages: List[ChatMessage]
    negotiation: Optional["NegotiationSummary"] = None


class VisibilityRequest(BaseModel):
    """Open, close, or (open=None) toggle the widget."""
    open: Optional[bool] = None


class VisibilityResponse(BaseModel):
    conversation_id: str
    is_open: bool


# ========== Messaging ==========

class SendMessageRequest(BaseModel):
    """Buyer message."""
    text: str = Field(..., max_length=2000, description="Raw message text; blank text is ignored")


class NavigationInstruction(BaseModel):
    """Navigation the client should perform after delay_ms."""
    route: str
    destination: str
    delay_ms: int


class ReplyPayload(BaseModel):
    """Bot reply with pacing hints for the client."""
    text: str
    language: str
    kind: Literal["counteroffer", "deal_confirmed", "navigation", "help"]
    reply_delay_ms: int
    navigation: Optional[NavigationInstruction] = None
    outcome: Optional[dict] = None

    @classmethod
    def from_reply(cls, reply: BotReply, reply_delay_ms: int, navigation_delay_ms: int) -> "ReplyPayload":
        navigation = None
        if reply.navigation is not None:
            navigation = NavigationInstruction(
                route=reply.navigation.route,
                destination=reply.navigation.destination,
                delay_ms=navigation_delay_ms,
            )
        return cls(
            text=reply.text,
            language=reply.language,
            kind=reply.kind,
            reply_delay_ms=reply_delay_ms,
            navigation=navigation,
            outcome=reply.outcome.model_dump() if reply.outcome is not None else None,
        )


class SendMessageResponse(BaseModel):
    """Reply (None when the input was blank) and the updated log."""
    conversation_id: str
    reply: Optional[ReplyPayload] = None
    messages: List[ChatMessage]


# ========== Negotiation ==========

class StartNegotiationRequest(BaseModel):
    """Host pushes a product to bargain over."""
    product: Product
    max_discount_percent: Optional[float] = Field(
        default=None, ge=0.0, le=100.0, allow_inf_nan=False
    )
    language: Optional[LocaleTag] = Field(default=None, description="Pinned reply locale (en, hi, kn)")


class NegotiationSummary(BaseModel):
    """Public view of a negotiation session."""
    active: bool
    product_id: str
    product_name: str
    original_price: float
    min_price: int
    max_discount_percent: float
    round: int
    last_offer: Optional[int] = None
    language: str

    @classmethod
    def from_session(cls, session: NegotiationSession) -> "NegotiationSummary":
        return cls(
            active=session.active,
            product_id=session.product.id,
            product_name=session.product.name,
            original_price=session.original_price,
            min_price=session.min_price,
            max_discount_percent=session.max_discount_percent,
            round=session.round,
            last_offer=session.last_offer,
            language=session.language,
        )


class StartNegotiationResponse(BaseModel):
    conversation_id: str
    negotiation: NegotiationSummary
    messages: List[ChatMessage]


class CancelNegotiationResponse(BaseModel):
    conversation_id: str
    active: bool = False


ConversationResponse.model_rebuild()
