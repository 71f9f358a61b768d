"""Message queries."""

from .get_messages import (
    GetMessagesQuery,
    GetMessagesHandler,
    WatchMessagesQuery,
    WatchMessagesHandler,
)

__all__ = [
    "GetMessagesQuery",
    "GetMessagesHandler",
    "WatchMessagesQuery",
    "WatchMessagesHandler",
]
