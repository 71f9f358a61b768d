"""
Messaging services - the synchronisation core between buyers and sellers.
"""

from bookmybook.application.services.message_channel import (
    MessageChannel,
    order_messages,
)
from bookmybook.application.services.conversation_directory import (
    ConversationDirectory,
    ConversationSummary,
)

__all__ = [
    "MessageChannel",
    "order_messages",
    "ConversationDirectory",
    "ConversationSummary",
]
