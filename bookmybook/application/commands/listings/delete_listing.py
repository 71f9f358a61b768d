"""Delete Listing Command."""

import logging
from dataclasses import dataclass

from bookmybook.application.common.interfaces import Command, CommandHandler
from bookmybook.domain.exceptions import EntityNotFoundError
from bookmybook.domain.ports.repositories import ListingRepository
from bookmybook.domain.value_objects.listing_id import ListingId
from bookmybook.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteListingCommand(Command[None]):
    listing_id: ListingId
    user_id: UserId


class DeleteListingHandler(CommandHandler[None]):
    def __init__(self, listing_repository: ListingRepository):
        self._listing_repository = listing_repository

    async def execute(self, command: DeleteListingCommand) -> None:
        listing = await self._listing_repository.get_by_id(command.listing_id)
        if not listing:
            raise EntityNotFoundError(f"Listing {command.listing_id.value} not found.")

        listing.ensure_owned_by(command.user_id)

        await self._listing_repository.delete(command.listing_id)
        logger.info(f"Listing {command.listing_id.value} deleted by {command.user_id.value}")
