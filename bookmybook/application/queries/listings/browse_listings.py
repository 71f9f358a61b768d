"""
Browse Listings Query - the marketplace dashboard.

Filtering happens after the fetch:
- search: case-insensitive substring of title or author
- min_price / max_price: inclusive range (defaults 0 and unbounded)
- conditions: empty means any condition
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from bookmybook.application.common.interfaces import Query, QueryHandler
from bookmybook.config.settings import Config
from bookmybook.domain.entities.book_listing import BookListing
from bookmybook.domain.exceptions import ValidationError
from bookmybook.domain.ports.repositories import ListingRepository
from bookmybook.domain.value_objects.book_condition import BookCondition

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class ListingSort(str, Enum):
    NEWEST = "newest"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    TITLE = "title"


def newest_first(listings: list[BookListing]) -> list[BookListing]:
    # Listings still waiting for their server timestamp are the newest
    return sorted(
        listings,
        key=lambda b: (b.created_at is None, b.created_at or _EPOCH),
        reverse=True,
    )


def sort_listings(listings: list[BookListing], sort: ListingSort) -> list[BookListing]:
    if sort == ListingSort.PRICE_LOW:
        return sorted(listings, key=lambda b: float(b.price))
    if sort == ListingSort.PRICE_HIGH:
        return sorted(listings, key=lambda b: float(b.price), reverse=True)
    if sort == ListingSort.TITLE:
        return sorted(listings, key=lambda b: b.title.lower())
    return newest_first(listings)


@dataclass(frozen=True)
class BrowseListingsQuery(Query[list[BookListing]]):
    search: str = ""
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    conditions: frozenset[BookCondition] = field(default_factory=frozenset)
    sort: ListingSort = ListingSort.NEWEST


class BrowseListingsHandler(QueryHandler[list[BookListing]]):
    def __init__(self, listing_repository: ListingRepository):
        self._listing_repository = listing_repository

    async def execute(self, query: BrowseListingsQuery) -> list[BookListing]:
        low = query.min_price if query.min_price is not None else 0.0
        high = query.max_price if query.max_price is not None else math.inf
        if low > high:
            raise ValidationError("Minimum price cannot exceed maximum price")

        listings = await self._listing_repository.list_all(Config.LISTING_LIMIT)
        matches = [
            listing
            for listing in listings
            if listing.matches_search(query.search)
            and low <= float(listing.price) <= high
            and (not query.conditions or listing.condition in query.conditions)
        ]
        return sort_listings(matches, query.sort)
