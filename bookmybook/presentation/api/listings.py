"""
Listings API Router - the book marketplace.

Endpoints:
- GET    /listings          browse with search, price range, conditions, sort
- POST   /listings          list a book for sale
- GET    /listings/mine     the current user's listings, newest first
- GET    /listings/{id}     one listing
- DELETE /listings/{id}     remove one of your own listings
"""

from datetime import datetime
from logging import getLogger
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from bookmybook.application.commands.listings import (
    CreateListingCommand,
    CreateListingHandler,
    DeleteListingCommand,
    DeleteListingHandler,
)
from bookmybook.application.queries.listings import (
    BrowseListingsHandler,
    BrowseListingsQuery,
    GetListingHandler,
    GetListingQuery,
    ListingSort,
    ListSellerListingsHandler,
    ListSellerListingsQuery,
)
from bookmybook.domain.entities.book_listing import BookListing
from bookmybook.domain.entities.user import User
from bookmybook.domain.exceptions import AccessDeniedError, EntityNotFoundError
from bookmybook.domain.value_objects.book_condition import BookCondition
from bookmybook.domain.value_objects.listing_id import ListingId
from bookmybook.presentation.dependencies.auth import get_current_user

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class CreateListingRequest(BaseModel):
    """Form fields of the sell page. Price may arrive as text ("19.5")."""

    title: str
    author: str
    price: str | float
    condition: str = BookCondition.GOOD.value
    description: str = ""
    image: str = ""


class CreateListingResponse(BaseModel):
    id: str


class ListingResponse(BaseModel):
    id: str
    title: str
    author: str
    price: float
    condition: str
    description: str
    image: str
    seller_id: str
    seller_name: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, listing: BookListing) -> "ListingResponse":
        return cls(
            id=listing.id.value if listing.id else "",
            title=listing.title,
            author=listing.author,
            price=float(listing.price),
            condition=listing.condition.value,
            description=listing.description,
            image=listing.image,
            seller_id=listing.seller_id.value,
            seller_name=listing.seller_name,
            created_at=listing.created_at,
        )


class ListListingsResponse(BaseModel):
    listings: list[ListingResponse]


class DeleteListingResponse(BaseModel):
    success: bool


# ==================== ROUTER ====================

router = APIRouter(prefix="/listings", tags=["listings"])


# ==================== ENDPOINTS ====================


@router.get("", response_model=ListListingsResponse)
@inject
async def browse_listings(
    handler: FromDishka[BrowseListingsHandler],
    current_user: User = Depends(get_current_user),
    search: str = "",
    min_price: Optional[float] = Query(default=None, ge=0),
    max_price: Optional[float] = Query(default=None, ge=0),
    condition: list[str] = Query(default=[]),
    sort: ListingSort = ListingSort.NEWEST,
):
    query = BrowseListingsQuery(
        search=search,
        min_price=min_price,
        max_price=max_price,
        conditions=frozenset(BookCondition.parse(c) for c in condition),
        sort=sort,
    )
    listings = await handler.execute(query)
    return ListListingsResponse(
        listings=[ListingResponse.from_entity(listing) for listing in listings]
    )


@router.post(
    "",
    response_model=CreateListingResponse,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_listing(
    request: CreateListingRequest,
    handler: FromDishka[CreateListingHandler],
    current_user: User = Depends(get_current_user),
):
    listing_id = await handler.execute(
        CreateListingCommand(
            seller=current_user,
            title=request.title,
            author=request.author,
            price=request.price,
            condition=request.condition,
            description=request.description,
            image=request.image,
        )
    )
    return CreateListingResponse(id=listing_id.value)


@router.get("/mine", response_model=ListListingsResponse)
@inject
async def my_listings(
    handler: FromDishka[ListSellerListingsHandler],
    current_user: User = Depends(get_current_user),
):
    listings = await handler.execute(ListSellerListingsQuery(seller_id=current_user.id))
    return ListListingsResponse(
        listings=[ListingResponse.from_entity(listing) for listing in listings]
    )


@router.get("/{listing_id}", response_model=ListingResponse)
@inject
async def get_listing(
    listing_id: str,
    handler: FromDishka[GetListingHandler],
    current_user: User = Depends(get_current_user),
):
    try:
        listing = await handler.execute(GetListingQuery(listing_id=ListingId(listing_id)))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return ListingResponse.from_entity(listing)


@router.delete("/{listing_id}", response_model=DeleteListingResponse)
@inject
async def delete_listing(
    listing_id: str,
    handler: FromDishka[DeleteListingHandler],
    current_user: User = Depends(get_current_user),
):
    try:
        await handler.execute(
            DeleteListingCommand(listing_id=ListingId(listing_id), user_id=current_user.id)
        )
        return DeleteListingResponse(success=True)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except AccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
