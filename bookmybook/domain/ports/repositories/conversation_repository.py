"""
Conversation Repository Port - one summary record per conversation.
Implementation: bookmybook/infrastructure/persistence/document_conversation_repository.py
"""

from abc import ABC, abstractmethod

from bookmybook.domain.entities.conversation import Conversation
from bookmybook.domain.ports.subscription import Subscription
from bookmybook.domain.value_objects.conversation_id import ConversationId
from bookmybook.domain.value_objects.user_id import UserId


class ConversationRepository(ABC):
    @abstractmethod
    async def record_message(
        self,
        conversation_id: ConversationId,
        last_message: str,
        sender_id: UserId,
        sender_name: str,
        recipient_id: UserId,
    ) -> None:
        """Update the summary of an EXISTING record. Raises StoreNotFoundError."""
        ...

    @abstractmethod
    async def create(
        self, conversation: Conversation, participant_names: dict[UserId, str]
    ) -> None:
        """Create the record at conversation.id. Raises StoreConflictError."""
        ...

    @abstractmethod
    async def clear_unread(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> None:
        """Remove user_id from the unread set. Raises StoreNotFoundError."""
        ...

    @abstractmethod
    async def get_by_participant(
        self, user_id: UserId, limit: int
    ) -> list[Conversation]: ...

    @abstractmethod
    def watch_by_participant(
        self, user_id: UserId
    ) -> Subscription[list[Conversation]]: ...
