"""
REPOSITORY PORTS - Entity persistence interfaces

Each repository maps domain entities to documents of one collection.
Infrastructure provides implementations on top of the DocumentStore port.
"""

from bookmybook.domain.ports.repositories.listing_repository import ListingRepository
from bookmybook.domain.ports.repositories.message_repository import MessageRepository
from bookmybook.domain.ports.repositories.conversation_repository import (
    ConversationRepository,
)

__all__ = [
    "ListingRepository",
    "MessageRepository",
    "ConversationRepository",
]
