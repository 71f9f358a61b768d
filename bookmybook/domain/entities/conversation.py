"""
Conversation Entity - directory record summarising a two-party thread.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from bookmybook.domain.value_objects.conversation_id import ConversationId
from bookmybook.domain.value_objects.user_id import UserId

DEFAULT_LAST_MESSAGE = "No messages yet"
DEFAULT_OTHER_USER_NAME = "Unknown"


@dataclass
class Conversation:
    id: ConversationId
    participants: tuple[UserId, UserId]
    other_user_name: str = DEFAULT_OTHER_USER_NAME
    participant_names: dict[UserId, str] = field(default_factory=dict)
    last_message: str = DEFAULT_LAST_MESSAGE
    last_message_time: Optional[datetime] = None
    unread_by: frozenset[UserId] = field(default_factory=frozenset)

    def includes(self, user_id: UserId) -> bool:
        return user_id in self.participants

    def other_participant(self, user_id: UserId) -> UserId:
        return self.id.other_participant(user_id)

    def other_party_name(self, viewer: UserId) -> str:
        """Label of the other participant as seen by viewer."""
        return (
            self.participant_names.get(self.other_participant(viewer))
            or self.other_user_name
        )

    def is_unread_for(self, user_id: UserId) -> bool:
        return user_id in self.unread_by

    def recency_key(self) -> tuple:
        """Sort key for most-recent-first listing; untimed conversations last."""
        if self.last_message_time is None:
            return (1, 0.0, self.id.value)
        return (0, -self.last_message_time.timestamp(), self.id.value)
