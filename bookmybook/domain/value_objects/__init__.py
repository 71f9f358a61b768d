"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Has no identity (compared by value, not by ID)
- Is immutable (frozen dataclass)
- Validates itself on creation
- Pure Python (no framework dependencies)
"""

from bookmybook.domain.value_objects.user_id import UserId
from bookmybook.domain.value_objects.conversation_id import ConversationId
from bookmybook.domain.value_objects.listing_id import ListingId
from bookmybook.domain.value_objects.message_id import MessageId
from bookmybook.domain.value_objects.price import Price
from bookmybook.domain.value_objects.book_condition import BookCondition

__all__ = [
    "UserId",
    "ConversationId",
    "ListingId",
    "MessageId",
    "Price",
    "BookCondition",
]
