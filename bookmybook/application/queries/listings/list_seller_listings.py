"""List Seller Listings Query - the seller's profile page, newest first."""

from dataclasses import dataclass

from bookmybook.application.common.interfaces import Query, QueryHandler
from bookmybook.application.queries.listings.browse_listings import newest_first
from bookmybook.domain.entities.book_listing import BookListing
from bookmybook.domain.ports.repositories import ListingRepository
from bookmybook.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ListSellerListingsQuery(Query[list[BookListing]]):
    seller_id: UserId


class ListSellerListingsHandler(QueryHandler[list[BookListing]]):
    def __init__(self, listing_repository: ListingRepository):
        self._listing_repository = listing_repository

    async def execute(self, query: ListSellerListingsQuery) -> list[BookListing]:
        listings = await self._listing_repository.list_by_seller(query.seller_id)
        return newest_first(listings)
