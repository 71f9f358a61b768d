"""Listing commands."""

from .create_listing import CreateListingCommand, CreateListingHandler
from .delete_listing import DeleteListingCommand, DeleteListingHandler

__all__ = [
    "CreateListingCommand",
    "CreateListingHandler",
    "DeleteListingCommand",
    "DeleteListingHandler",
]
