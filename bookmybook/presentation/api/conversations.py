"""
Conversations API Router - the inbox.

Endpoints:
- GET  /conversations                  one snapshot, most recent first
- GET  /conversations/stream           live updates (Server-Sent Events)
- POST /conversations/{id}/read        clear the current user's unread marker

Flow:
  HTTP Request → Router → Query → Handler → ConversationDirectory → DocumentStore
                                 ↓
  HTTP Response ← Router ← ConversationSummary ←
"""

from datetime import datetime
from logging import getLogger
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from bookmybook.application.commands.conversations import (
    MarkReadCommand,
    MarkReadHandler,
)
from bookmybook.application.queries.conversations import (
    ListConversationsHandler,
    ListConversationsQuery,
    WatchConversationsHandler,
    WatchConversationsQuery,
)
from bookmybook.application.services.conversation_directory import ConversationSummary
from bookmybook.config.settings import Config
from bookmybook.domain.entities.user import User
from bookmybook.domain.exceptions import AccessDeniedError, EntityNotFoundError
from bookmybook.domain.value_objects.conversation_id import ConversationId
from bookmybook.presentation.api.streaming import sse_response
from bookmybook.presentation.dependencies.auth import get_current_user

logger = getLogger(__name__)


# ==================== RESPONSE MODELS ====================


class ConversationListItemResponse(BaseModel):
    """
    Single conversation in the inbox.

    {
        "id": "u1_u2",
        "other_user_id": "u2",
        "other_user_name": "Bob",
        "last_message": "Is it still available?",
        "last_message_time": "2025-01-27T12:00:00Z",
        "unread": true
    }
    """

    id: str
    other_user_id: str
    other_user_name: str
    last_message: str
    last_message_time: Optional[datetime] = None
    unread: bool = False

    @classmethod
    def from_summary(cls, summary: ConversationSummary) -> "ConversationListItemResponse":
        return cls(
            id=summary.id.value,
            other_user_id=summary.other_user_id.value,
            other_user_name=summary.other_user_name,
            last_message=summary.last_message,
            last_message_time=summary.last_message_time,
            unread=summary.unread,
        )


class ListConversationsResponse(BaseModel):
    conversations: list[ConversationListItemResponse]


class MarkReadResponse(BaseModel):
    success: bool


def _serialize(summaries: list[ConversationSummary]) -> dict:
    return ListConversationsResponse(
        conversations=[ConversationListItemResponse.from_summary(s) for s in summaries]
    ).model_dump(mode="json")


# ==================== ROUTER ====================

router = APIRouter(prefix="/conversations", tags=["conversations"])


# ==================== ENDPOINTS ====================


@router.get("", response_model=ListConversationsResponse)
@inject
async def list_conversations(
    handler: FromDishka[ListConversationsHandler],
    current_user: User = Depends(get_current_user),
):
    query = ListConversationsQuery(
        user_id=current_user.id, limit=Config.CONVERSATION_USER_LIMIT
    )
    summaries = await handler.execute(query)
    return ListConversationsResponse(
        conversations=[ConversationListItemResponse.from_summary(s) for s in summaries]
    )


@router.get("/stream")
@inject
async def stream_conversations(
    handler: FromDishka[WatchConversationsHandler],
    current_user: User = Depends(get_current_user),
):
    """Each event carries the full, re-sorted conversation list."""
    subscription = await handler.execute(WatchConversationsQuery(user_id=current_user.id))
    logger.debug(f"Conversation stream opened for {current_user.id.value}")
    return sse_response(subscription, _serialize)


@router.post("/{conversation_id}/read", response_model=MarkReadResponse)
@inject
async def mark_read(
    conversation_id: str,
    handler: FromDishka[MarkReadHandler],
    current_user: User = Depends(get_current_user),
):
    try:
        await handler.execute(
            MarkReadCommand(
                conversation_id=ConversationId(conversation_id),
                user_id=current_user.id,
            )
        )
        return MarkReadResponse(success=True)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except AccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
