"""
Listing Repository Port - Interface for book listing persistence.
Implementation: bookmybook/infrastructure/persistence/document_listing_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from bookmybook.domain.entities.book_listing import BookListing
from bookmybook.domain.value_objects.listing_id import ListingId
from bookmybook.domain.value_objects.user_id import UserId


class ListingRepository(ABC):
    @abstractmethod
    async def add(self, listing: BookListing) -> ListingId: ...

    @abstractmethod
    async def get_by_id(self, listing_id: ListingId) -> Optional[BookListing]: ...

    @abstractmethod
    async def list_all(self, limit: int) -> list[BookListing]: ...

    @abstractmethod
    async def list_by_seller(self, seller_id: UserId) -> list[BookListing]: ...

    @abstractmethod
    async def delete(self, listing_id: ListingId) -> None: ...
