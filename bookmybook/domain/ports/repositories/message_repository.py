"""
Message Repository Port - append-only message log keyed by conversation id.
Implementation: bookmybook/infrastructure/persistence/document_message_repository.py
"""

from abc import ABC, abstractmethod

from bookmybook.domain.entities.message import Message
from bookmybook.domain.ports.subscription import Subscription
from bookmybook.domain.value_objects.conversation_id import ConversationId
from bookmybook.domain.value_objects.message_id import MessageId
from bookmybook.domain.value_objects.user_id import UserId


class MessageRepository(ABC):
    @abstractmethod
    async def append(
        self,
        conversation_id: ConversationId,
        sender_id: UserId,
        sender_name: str,
        text: str,
        client_seq: int,
    ) -> MessageId: ...

    @abstractmethod
    async def get_by_conversation(
        self, conversation_id: ConversationId
    ) -> list[Message]:
        """Return messages in store order (unordered)."""
        ...

    @abstractmethod
    def watch_conversation(
        self, conversation_id: ConversationId
    ) -> Subscription[list[Message]]:
        """Live, unordered snapshots of the conversation's messages."""
        ...
