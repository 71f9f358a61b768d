"""
Message Entity - a single immutable message in a two-party conversation.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from bookmybook.domain.value_objects.conversation_id import ConversationId
from bookmybook.domain.value_objects.message_id import MessageId
from bookmybook.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class Message:
    id: MessageId
    conversation_id: ConversationId
    sender_id: UserId
    sender_name: str
    text: str
    timestamp: Optional[datetime] = None  # None until the store acknowledges the write
    client_seq: int = 0

    @property
    def is_pending(self) -> bool:
        return self.timestamp is None

    def sort_key(self) -> tuple:
        """Confirmed messages by server time, then pending ones by local sequence."""
        if self.timestamp is None:
            return (1, 0.0, self.client_seq, self.id.value)
        return (0, self.timestamp.timestamp(), self.client_seq, self.id.value)
