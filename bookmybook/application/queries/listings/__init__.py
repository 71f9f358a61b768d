"""Listing queries."""

from .browse_listings import BrowseListingsQuery, BrowseListingsHandler, ListingSort
from .get_listing import GetListingQuery, GetListingHandler
from .list_seller_listings import ListSellerListingsQuery, ListSellerListingsHandler

__all__ = [
    "BrowseListingsQuery",
    "BrowseListingsHandler",
    "ListingSort",
    "GetListingQuery",
    "GetListingHandler",
    "ListSellerListingsQuery",
    "ListSellerListingsHandler",
]
