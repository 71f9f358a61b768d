"""
SendMessage Command - message another user about a book.

Handler:
1. Derive the canonical conversation id from sender + recipient
2. Append the message to the channel (blank text rejected locally)
3. Touch the conversation directory: recipient gets the unread marker
"""

import logging
from dataclasses import dataclass
from typing import Optional

from bookmybook.application.common.interfaces import Command, CommandHandler
from bookmybook.application.services.conversation_directory import ConversationDirectory
from bookmybook.application.services.message_channel import MessageChannel
from bookmybook.domain.entities.user import User
from bookmybook.domain.exceptions import ValidationError
from bookmybook.domain.value_objects.conversation_id import ConversationId
from bookmybook.domain.value_objects.message_id import MessageId
from bookmybook.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass
class SendMessageResult:
    message_id: MessageId
    conversation_id: ConversationId
    conversation_created: bool


@dataclass(frozen=True)
class SendMessageCommand(Command[SendMessageResult]):
    sender: User
    recipient_id: UserId
    text: str
    recipient_name: Optional[str] = None


class SendMessageHandler(CommandHandler[SendMessageResult]):
    def __init__(self, channel: MessageChannel, directory: ConversationDirectory):
        self._channel = channel
        self._directory = directory

    async def execute(self, command: SendMessageCommand) -> SendMessageResult:
        text = command.text.strip()
        if not text:
            raise ValidationError("Message text cannot be empty")

        conversation_id = ConversationId.for_participants(
            command.sender.id, command.recipient_id
        )
        message_id = await self._channel.send(
            conversation_id, command.sender.id, command.sender.label, text
        )
        created = await self._directory.touch(
            conversation_id,
            participants=conversation_id.participants(),
            other_label=command.recipient_name or "",
            last_message=text,
            recipient_id=command.recipient_id,
            sender_label=command.sender.label,
        )
        if created:
            logger.info(f"Started conversation {conversation_id.value}")

        return SendMessageResult(
            message_id=message_id,
            conversation_id=conversation_id,
            conversation_created=created,
        )
