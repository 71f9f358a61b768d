"""
Create Listing Command.

Price arrives as form text ("19.5") and is stored as a number (19.5).
The image URL comes from a previous upload and may be empty: a failed
upload does not block listing the book.
"""

import logging
from dataclasses import dataclass

from bookmybook.application.common.interfaces import Command, CommandHandler
from bookmybook.domain.entities.book_listing import BookListing
from bookmybook.domain.entities.user import User
from bookmybook.domain.ports.repositories import ListingRepository
from bookmybook.domain.value_objects.book_condition import BookCondition
from bookmybook.domain.value_objects.listing_id import ListingId
from bookmybook.domain.value_objects.price import Price

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateListingCommand(Command[ListingId]):
    seller: User
    title: str
    author: str
    price: str | float
    condition: str = BookCondition.GOOD.value
    description: str = ""
    image: str = ""


class CreateListingHandler(CommandHandler[ListingId]):
    _listing_repository: ListingRepository

    def __init__(self, listing_repository: ListingRepository):
        self._listing_repository = listing_repository

    async def execute(self, command: CreateListingCommand) -> ListingId:
        listing = BookListing(
            title=command.title,
            author=command.author,
            price=Price.parse(command.price),
            condition=BookCondition.parse(command.condition),
            description=command.description.strip(),
            image=command.image.strip(),
            seller_id=command.seller.id,
            seller_name=command.seller.label,
        )
        listing_id = await self._listing_repository.add(listing)
        logger.info(f"Listing {listing_id.value} created by {command.seller.id.value}")
        return listing_id
