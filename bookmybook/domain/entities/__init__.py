"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique identifier
- Has behavior (methods)
- Pure Python dataclasses (no ORM, no Pydantic)
"""

from bookmybook.domain.entities.user import User
from bookmybook.domain.entities.book_listing import BookListing
from bookmybook.domain.entities.conversation import Conversation
from bookmybook.domain.entities.message import Message

__all__ = [
    "User",
    "BookListing",
    "Conversation",
    "Message",
]
