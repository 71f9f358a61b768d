"""
Conversation Directory - one summary record per two-party conversation.

touch() is an explicit two-step upsert:
1. update the existing record (last message, time, unread marker)
2. ONLY if the store reports StoreNotFoundError, create the record at the
   same id with the full participant pair

Every other StoreError propagates untouched, so a network failure can never
be mistaken for "record missing" and create a second record. If step 2 loses
a race against another sender's first message (StoreConflictError), the
record now exists and step 1 is applied to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from bookmybook.domain.entities.conversation import (
    DEFAULT_OTHER_USER_NAME,
    Conversation,
)
from bookmybook.domain.exceptions import (
    AccessDeniedError,
    EntityNotFoundError,
    StoreConflictError,
    StoreNotFoundError,
    ValidationError,
)
from bookmybook.domain.ports.repositories import ConversationRepository
from bookmybook.domain.ports.subscription import Subscription
from bookmybook.domain.value_objects.conversation_id import ConversationId
from bookmybook.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversationSummary:
    """A conversation as listed for one of its participants."""

    id: ConversationId
    other_user_id: UserId
    other_user_name: str
    last_message: str
    last_message_time: Optional[datetime]
    unread: bool


def summarize(user_id: UserId, conversations: list[Conversation]) -> list[ConversationSummary]:
    """Most recent first; conversations without a timestamp last."""
    visible = [c for c in conversations if c.includes(user_id)]
    return [
        ConversationSummary(
            id=c.id,
            other_user_id=c.other_participant(user_id),
            other_user_name=c.other_party_name(user_id),
            last_message=c.last_message,
            last_message_time=c.last_message_time,
            unread=c.is_unread_for(user_id),
        )
        for c in sorted(visible, key=Conversation.recency_key)
    ]


class ConversationDirectory:
    def __init__(self, conversation_repository: ConversationRepository):
        self._conversation_repository = conversation_repository

    async def touch(
        self,
        conversation_id: ConversationId,
        participants: tuple[UserId, UserId],
        other_label: str,
        last_message: str,
        recipient_id: UserId,
        sender_label: str = "",
    ) -> bool:
        """Record a new message on the conversation summary.

        Returns:
            True if the record was created by this call, False if updated.
        """
        if set(participants) != set(conversation_id.participants()):
            raise ValidationError(
                f"Participants do not match conversation {conversation_id.value}"
            )
        sender_id = conversation_id.other_participant(recipient_id)

        async def _update() -> None:
            await self._conversation_repository.record_message(
                conversation_id,
                last_message=last_message,
                sender_id=sender_id,
                sender_name=sender_label,
                recipient_id=recipient_id,
            )

        try:
            await _update()
            return False
        except StoreNotFoundError:
            logger.info(f"Conversation {conversation_id.value} not found, creating it")

        conversation = Conversation(
            id=conversation_id,
            participants=conversation_id.participants(),
            other_user_name=other_label or DEFAULT_OTHER_USER_NAME,
            last_message=last_message,
            unread_by=frozenset({recipient_id}),
        )
        names = {sender_id: sender_label}
        if other_label:
            names[recipient_id] = other_label

        try:
            await self._conversation_repository.create(conversation, names)
            return True
        except StoreConflictError:
            logger.info(
                f"Conversation {conversation_id.value} was created concurrently, updating it"
            )
        await _update()
        return False

    def list(self, user_id: UserId) -> Subscription[list[ConversationSummary]]:
        """Live list of the user's conversations. Caller must cancel it."""
        return self._conversation_repository.watch_by_participant(user_id).map(
            lambda conversations: summarize(user_id, conversations)
        )

    async def list_once(self, user_id: UserId, limit: int) -> list[ConversationSummary]:
        conversations = await self._conversation_repository.get_by_participant(
            user_id, limit
        )
        return summarize(user_id, conversations)

    async def mark_read(self, conversation_id: ConversationId, user_id: UserId) -> None:
        if not conversation_id.includes(user_id):
            raise AccessDeniedError("You don't have access to this conversation")
        try:
            await self._conversation_repository.clear_unread(conversation_id, user_id)
        except StoreNotFoundError as e:
            raise EntityNotFoundError(
                f"Conversation {conversation_id.value} not found"
            ) from e
        logger.debug(f"Conversation {conversation_id.value} marked read by {user_id.value}")
