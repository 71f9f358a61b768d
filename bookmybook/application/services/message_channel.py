"""
Message Channel - append messages to a conversation and watch them live.

Ordering: the store does not guarantee result order, so every snapshot is
sorted here. Messages whose server timestamp is not assigned yet are
provisional; they sort AFTER all confirmed messages, among themselves by
the sender's local sequence number, so a just-sent message never jumps
behind the history.
"""

import itertools
import logging

from bookmybook.domain.entities.message import Message
from bookmybook.domain.exceptions import AccessDeniedError, ValidationError
from bookmybook.domain.ports.repositories import MessageRepository
from bookmybook.domain.ports.subscription import Subscription
from bookmybook.domain.value_objects.conversation_id import ConversationId
from bookmybook.domain.value_objects.message_id import MessageId
from bookmybook.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)

_local_sequence = itertools.count(1)


def order_messages(messages: list[Message]) -> list[Message]:
    return sorted(messages, key=Message.sort_key)


class MessageChannel:
    def __init__(self, message_repository: MessageRepository):
        self._message_repository = message_repository

    async def send(
        self,
        conversation_id: ConversationId,
        sender_id: UserId,
        sender_label: str,
        text: str,
    ) -> MessageId:
        """Append a message. Raises ValidationError for blank text (no store call)."""
        body = text.strip()
        if not body:
            raise ValidationError("Message text cannot be empty")
        if not conversation_id.includes(sender_id):
            raise AccessDeniedError("Sender is not a participant of this conversation")

        message_id = await self._message_repository.append(
            conversation_id,
            sender_id,
            sender_label,
            body,
            client_seq=next(_local_sequence),
        )
        logger.debug(f"Message {message_id.value} appended to {conversation_id.value}")
        return message_id

    def subscribe(self, conversation_id: ConversationId) -> Subscription[list[Message]]:
        """Live ordered view of the conversation. Caller must cancel it."""
        return self._message_repository.watch_conversation(conversation_id).map(
            order_messages
        )

    async def history(self, conversation_id: ConversationId) -> list[Message]:
        messages = await self._message_repository.get_by_conversation(conversation_id)
        return order_messages(messages)
