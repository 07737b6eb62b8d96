"""
Negotiation endpoints.

WHAT: Start, inspect and cancel a conversation's bargaining session
WHY: Host pages push a product ("Bargain" button) and clear it on navigation
HOW: FastAPI router delegating to Conversation lifecycle methods
"""

from fastapi import APIRouter

from ....models.api_schemas import (
    StartNegotiationRequest,
    StartNegotiationResponse,
    NegotiationSummary,
    CancelNegotiationResponse,
)
from ....core.config import settings
from ....core.conversation import conversation_manager
from ....utils.exceptions import (
    InvalidProductException,
    NegotiationNotActiveException,
    ValidationException,
)
from ....utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/conversations/{conversation_id}/negotiation",
    response_model=StartNegotiationResponse,
)
async def start_negotiation(conversation_id: str, request: StartNegotiationRequest):
    """
    Start bargaining over a product.

    WHAT: Open a session for the product, replacing any current one
    WHY: Entry point for the bargaining mini-game
    HOW: Validate language and price, then Conversation.start_negotiation
    """
    conversation = conversation_manager.get(conversation_id)

    if request.language is not None and request.language not in settings.get_supported_languages():
        raise ValidationException(
            f"Unsupported language: {request.language}",
            field_errors=[{"field": "language", "error": "unsupported"}],
        )

    if request.product.price <= 0:
        raise InvalidProductException(request.product.id, "price must be positive")

    logger.info(f"Bargain requested for {request.product.id} in conversation {conversation_id}")
    session = conversation.start_negotiation(
        request.product,
        max_discount_percent=request.max_discount_percent,
        language=request.language,
    )

    return StartNegotiationResponse(
        conversation_id=conversation_id,
        negotiation=NegotiationSummary.from_session(session),
        messages=conversation.messages,
    )


@router.get(
    "/conversations/{conversation_id}/negotiation",
    response_model=NegotiationSummary,
)
async def get_negotiation(conversation_id: str):
    """Current session; 409 when the conversation is idle."""
    conversation = conversation_manager.get(conversation_id)
    if not conversation.is_negotiating:
        raise NegotiationNotActiveException(conversation_id)
    return NegotiationSummary.from_session(conversation.negotiation)


@router.delete(
    "/conversations/{conversation_id}/negotiation",
    response_model=CancelNegotiationResponse,
)
async def cancel_negotiation(conversation_id: str):
    """Reset to idle. Always succeeds, including when nothing is active."""
    conversation = conversation_manager.get(conversation_id)
    conversation.cancel_negotiation()
    return CancelNegotiationResponse(conversation_id=conversation_id)
