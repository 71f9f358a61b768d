"""Get Listing Query."""

from dataclasses import dataclass

from bookmybook.application.common.interfaces import Query, QueryHandler
from bookmybook.domain.entities.book_listing import BookListing
from bookmybook.domain.exceptions import EntityNotFoundError
from bookmybook.domain.ports.repositories import ListingRepository
from bookmybook.domain.value_objects.listing_id import ListingId


@dataclass(frozen=True)
class GetListingQuery(Query[BookListing]):
    listing_id: ListingId


class GetListingHandler(QueryHandler[BookListing]):
    def __init__(self, listing_repository: ListingRepository):
        self._listing_repository = listing_repository

    async def execute(self, query: GetListingQuery) -> BookListing:
        listing = await self._listing_repository.get_by_id(query.listing_id)
        if not listing:
            raise EntityNotFoundError(f"Listing {query.listing_id.value} not found.")
        return listing
