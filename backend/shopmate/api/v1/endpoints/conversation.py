"""
Conversation endpoints.

WHAT: Create conversations, send messages, toggle the widget
WHY: Chat widget frontend talks to the decision engine over HTTP
HOW: FastAPI router over the global ConversationManager
"""

from fastapi import APIRouter, status

from ....models.api_schemas import (
    ConversationResponse,
    NegotiationSummary,
    SendMessageRequest,
    SendMessageResponse,
    ReplyPayload,
    VisibilityRequest,
    VisibilityResponse,
)
from ....core.conversation import Conversation, conversation_manager
from ....utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


def build_conversation_response(conversation: Conversation) -> ConversationResponse:
    """Serialize a conversation for the rendering surface."""
    negotiation = None
    if conversation.is_negotiating:
        negotiation = NegotiationSummary.from_session(conversation.negotiation)

    return ConversationResponse(
        conversation_id=conversation.conversation_id,
        is_open=conversation.is_open,
        language=conversation.language,
        created_at=conversation.created_at,
        messages=conversation.messages,
        negotiation=negotiation,
    )


@router.post(
    "/conversations",
    response_model=ConversationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_conversation():
    """
    Start a new conversation.

    The log starts with the welcome message; the widget starts closed.
    """
    conversation = conversation_manager.create()
    return build_conversation_response(conversation)


@router.get("/conversations/{conversation_id}", response_model=ConversationResponse)
async def get_conversation(conversation_id: str):
    """Get messages, visibility and negotiation state."""
    conversation = conversation_manager.get(conversation_id)
    return build_conversation_response(conversation)


@router.delete("/conversations/{conversation_id}")
async def delete_conversation(conversation_id: str):
    """Drop a conversation and its negotiation state."""
    conversation_manager.delete(conversation_id)
    return {"conversation_id": conversation_id, "deleted": True}


@router.post("/conversations/{conversation_id}/messages", response_model=SendMessageResponse)
async def send_message(conversation_id: str, request: SendMessageRequest):
    """
    Send a buyer message.

    WHAT: Run the decision engine on the message
    WHY: Entry point for chat turns
    HOW: Conversation.send_message; pacing delays are returned for the client

    Blank text is a no-op and returns reply=None.
    """
    conversation = conversation_manager.get(conversation_id)
    reply = conversation.send_message(request.text)

    payload = None
    if reply is not None:
        payload = ReplyPayload.from_reply(
            reply,
            reply_delay_ms=conversation.reply_delay_ms,
            navigation_delay_ms=conversation.navigation_delay_ms,
        )

    return SendMessageResponse(
        conversation_id=conversation_id,
        reply=payload,
        messages=conversation.messages,
    )


@router.post("/conversations/{conversation_id}/visibility", response_model=VisibilityResponse)
async def set_visibility(conversation_id: str, request: VisibilityRequest):
    """Open or close the widget; open=null toggles."""
    conversation = conversation_manager.get(conversation_id)

    if request.open is None:
        conversation.toggle()
    elif request.open:
        conversation.open()
    else:
        conversation.close()

    return VisibilityResponse(conversation_id=conversation_id, is_open=conversation.is_open)
