"""
BookListing Entity - a used book offered for sale by its seller.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from bookmybook.domain.exceptions import AccessDeniedError, ValidationError
from bookmybook.domain.value_objects.book_condition import BookCondition
from bookmybook.domain.value_objects.listing_id import ListingId
from bookmybook.domain.value_objects.price import Price
from bookmybook.domain.value_objects.user_id import UserId


@dataclass
class BookListing:
    title: str
    author: str
    price: Price
    condition: BookCondition
    seller_id: UserId
    seller_name: str
    description: str = ""
    image: str = ""
    id: Optional[ListingId] = None  # assigned by the store on creation
    created_at: Optional[datetime] = None  # server timestamp, None while pending

    def __post_init__(self):
        self.title = self.title.strip()
        self.author = self.author.strip()
        if not self.title:
            raise ValidationError("Title is required")
        if not self.author:
            raise ValidationError("Author is required")

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.seller_id == user_id

    def ensure_owned_by(self, user_id: UserId) -> None:
        if not self.is_owned_by(user_id):
            raise AccessDeniedError("You can only modify your own listings.")

    def matches_search(self, search: str) -> bool:
        needle = search.strip().lower()
        if not needle:
            return True
        return needle in self.title.lower() or needle in self.author.lower()
