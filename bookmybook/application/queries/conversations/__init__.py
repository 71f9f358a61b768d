"""Conversation queries."""

from .list_conversations import (
    ListConversationsQuery,
    ListConversationsHandler,
    WatchConversationsQuery,
    WatchConversationsHandler,
)

__all__ = [
    "ListConversationsQuery",
    "ListConversationsHandler",
    "WatchConversationsQuery",
    "WatchConversationsHandler",
]
