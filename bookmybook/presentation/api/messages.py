"""
Messages API Router - the conversation between the current user and another user.

The other user's id is part of the path; the conversation id is derived from
the pair, so there is nothing to create up front.

Endpoints:
- GET  /messages/{other_user_id}          ordered history
- POST /messages/{other_user_id}          send a message
- GET  /messages/{other_user_id}/stream   live updates (Server-Sent Events)

``book`` (optional query parameter) is the title of the book the
conversation started from; it is echoed back as ``about``.
"""

from datetime import datetime
from logging import getLogger
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from bookmybook.application.commands.messages import (
    SendMessageCommand,
    SendMessageHandler,
)
from bookmybook.application.queries.messages import (
    GetMessagesHandler,
    GetMessagesQuery,
    WatchMessagesHandler,
    WatchMessagesQuery,
)
from bookmybook.domain.entities.message import Message
from bookmybook.domain.entities.user import User
from bookmybook.domain.value_objects.conversation_id import ConversationId
from bookmybook.domain.value_objects.user_id import UserId
from bookmybook.presentation.api.streaming import sse_response
from bookmybook.presentation.dependencies.auth import get_current_user

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class SendMessageRequest(BaseModel):
    text: str
    other_user_name: Optional[str] = None


class SendMessageResponse(BaseModel):
    message_id: str
    conversation_id: str
    conversation_created: bool


class MessageResponse(BaseModel):
    id: str
    sender_id: str
    sender_name: str
    text: str
    timestamp: Optional[datetime] = None
    pending: bool = False

    @classmethod
    def from_entity(cls, message: Message) -> "MessageResponse":
        return cls(
            id=message.id.value,
            sender_id=message.sender_id.value,
            sender_name=message.sender_name,
            text=message.text,
            timestamp=message.timestamp,
            pending=message.is_pending,
        )


class MessagesResponse(BaseModel):
    conversation_id: str
    about: str = ""
    messages: list[MessageResponse]


# ==================== ROUTER ====================

router = APIRouter(prefix="/messages", tags=["messages"])


# ==================== ENDPOINTS ====================


@router.get("/{other_user_id}", response_model=MessagesResponse)
@inject
async def get_messages(
    other_user_id: str,
    handler: FromDishka[GetMessagesHandler],
    current_user: User = Depends(get_current_user),
    book: str = "",
):
    other = UserId(other_user_id)
    messages = await handler.execute(
        GetMessagesQuery(user_id=current_user.id, other_user_id=other)
    )
    return MessagesResponse(
        conversation_id=ConversationId.for_participants(current_user.id, other).value,
        about=book,
        messages=[MessageResponse.from_entity(m) for m in messages],
    )


@router.post(
    "/{other_user_id}",
    response_model=SendMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def send_message(
    other_user_id: str,
    request: SendMessageRequest,
    handler: FromDishka[SendMessageHandler],
    current_user: User = Depends(get_current_user),
):
    result = await handler.execute(
        SendMessageCommand(
            sender=current_user,
            recipient_id=UserId(other_user_id),
            text=request.text,
            recipient_name=request.other_user_name,
        )
    )
    return SendMessageResponse(
        message_id=result.message_id.value,
        conversation_id=result.conversation_id.value,
        conversation_created=result.conversation_created,
    )


@router.get("/{other_user_id}/stream")
@inject
async def stream_messages(
    other_user_id: str,
    handler: FromDishka[WatchMessagesHandler],
    current_user: User = Depends(get_current_user),
):
    """Each event carries the full ordered message list."""
    subscription = await handler.execute(
        WatchMessagesQuery(user_id=current_user.id, other_user_id=UserId(other_user_id))
    )
    conversation_id = ConversationId.for_participants(current_user.id, other_user_id)

    def _serialize(messages: list[Message]) -> dict:
        return MessagesResponse(
            conversation_id=conversation_id.value,
            messages=[MessageResponse.from_entity(m) for m in messages],
        ).model_dump(mode="json")

    return sse_response(subscription, _serialize)
