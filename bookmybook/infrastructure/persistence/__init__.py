"""
Persistence Layer - Repository implementations on top of the DocumentStore port.

Collections and fields match the ones the web front end reads and writes:
- books:         title, author, price, condition, description, image,
                 seller, sellerId, createdAt
- messages:      conversationId, senderId, senderName, text, timestamp, clientSeq
- conversations: id, participants, otherUserName, participantNames,
                 lastMessage, lastMessageTime, unreadBy
"""

from bookmybook.infrastructure.persistence.document_listing_repository import (
    DocumentListingRepository,
)
from bookmybook.infrastructure.persistence.document_message_repository import (
    DocumentMessageRepository,
)
from bookmybook.infrastructure.persistence.document_conversation_repository import (
    DocumentConversationRepository,
)

__all__ = [
    "DocumentListingRepository",
    "DocumentMessageRepository",
    "DocumentConversationRepository",
]
