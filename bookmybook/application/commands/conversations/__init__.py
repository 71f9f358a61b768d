"""Conversation commands."""

from .mark_read import MarkReadCommand, MarkReadHandler

__all__ = [
    "MarkReadCommand",
    "MarkReadHandler",
]
