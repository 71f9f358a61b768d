"""
Document Listing Repository - BookListing ↔ "books" documents.
"""

import logging
from typing import Optional

from bookmybook.config.settings import Config
from bookmybook.domain.entities.book_listing import BookListing
from bookmybook.domain.exceptions import ValidationError
from bookmybook.domain.ports.document_store import (
    EQUALS,
    SERVER_TIMESTAMP,
    DocumentSnapshot,
    DocumentStore,
    FieldFilter,
)
from bookmybook.domain.ports.repositories import ListingRepository
from bookmybook.domain.value_objects.book_condition import BookCondition
from bookmybook.domain.value_objects.listing_id import ListingId
from bookmybook.domain.value_objects.price import Price
from bookmybook.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class DocumentListingRepository(ListingRepository):
    def __init__(self, store: DocumentStore, collection: str = Config.BOOKS_COLLECTION):
        self._store = store
        self._collection = collection

    def _to_entity(self, doc: DocumentSnapshot) -> BookListing:
        """Map a books document to a BookListing entity."""
        return BookListing(
            id=ListingId(doc.id),
            title=doc.get("title") or "",
            author=doc.get("author") or "",
            price=Price(doc.get("price", 0)),
            condition=BookCondition.parse(doc.get("condition") or BookCondition.GOOD.value),
            description=doc.get("description") or "",
            image=doc.get("image") or "",
            seller_id=UserId(doc.get("sellerId") or ""),
            seller_name=doc.get("seller") or "",
            created_at=doc.get("createdAt"),
        )

    def _to_entities(self, docs: list[DocumentSnapshot]) -> list[BookListing]:
        listings = []
        for doc in docs:
            try:
                listings.append(self._to_entity(doc))
            except ValidationError as e:
                logger.warning(f"Skipping malformed listing {doc.id}: {e}")
        return listings

    async def add(self, listing: BookListing) -> ListingId:
        doc_id = await self._store.add(
            self._collection,
            {
                "title": listing.title,
                "author": listing.author,
                "price": float(listing.price),
                "condition": listing.condition.value,
                "description": listing.description,
                "image": listing.image,
                "seller": listing.seller_name,
                "sellerId": listing.seller_id.value,
                "createdAt": SERVER_TIMESTAMP,
            },
        )
        return ListingId(doc_id)

    async def get_by_id(self, listing_id: ListingId) -> Optional[BookListing]:
        doc = await self._store.get(self._collection, listing_id.value)
        return self._to_entity(doc) if doc else None

    async def list_all(self, limit: int) -> list[BookListing]:
        docs = await self._store.query(self._collection, limit=limit)
        return self._to_entities(docs)

    async def list_by_seller(self, seller_id: UserId) -> list[BookListing]:
        docs = await self._store.query(
            self._collection, [FieldFilter("sellerId", EQUALS, seller_id.value)]
        )
        return self._to_entities(docs)

    async def delete(self, listing_id: ListingId) -> None:
        await self._store.delete(self._collection, listing_id.value)
