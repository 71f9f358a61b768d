import asyncio
import math
from datetime import datetime, timezone

import pytest

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
from bookmybook.domain.entities.user import User
from bookmybook.domain.exceptions import (
    AccessDeniedError,
    EntityNotFoundError,
    ValidationError,
)
from bookmybook.domain.value_objects.book_condition import BookCondition
from bookmybook.domain.value_objects.listing_id import ListingId
from bookmybook.domain.value_objects.price import Price
from bookmybook.domain.value_objects.user_id import UserId
from bookmybook.infrastructure.memory import InMemoryDocumentStore
from bookmybook.infrastructure.persistence import DocumentListingRepository

ALICE = User(id=UserId("alice"), email="alice@example.com", display_name="Alice")
BOB = User(id=UserId("bob"), email="bob@example.com")


# ==================== VALUE OBJECTS ====================


@pytest.mark.parametrize(
    "raw, expected", [("19.5", 19.5), (" 7 ", 7.0), (0, 0.0), (12, 12.0), (3.25, 3.25)]
)
def test_price_parse(raw, expected):
    price = Price.parse(raw)
    assert float(price) == expected
    assert isinstance(price.amount, float)


@pytest.mark.parametrize("raw", ["", "abc", "-1", "nan", "inf", True, -0.5, math.inf])
def test_price_parse_rejects(raw):
    with pytest.raises(ValidationError):
        Price.parse(raw)


def test_condition_parse_is_case_insensitive():
    assert BookCondition.parse("like new") is BookCondition.LIKE_NEW
    assert BookCondition.parse(" FAIR ") is BookCondition.FAIR
    with pytest.raises(ValidationError):
        BookCondition.parse("mint")


# ==================== COMMANDS ====================


def _repository():
    store = InMemoryDocumentStore()
    return store, DocumentListingRepository(store)


async def _create(repository, seller=ALICE, **fields):
    data = {"title": "Dune", "author": "Frank Herbert", "price": "10"}
    data.update(fields)
    return await CreateListingHandler(repository).execute(
        CreateListingCommand(seller=seller, **data)
    )


def test_create_listing_stores_numeric_price():
    async def scenario():
        store, repository = _repository()
        listing_id = await _create(repository, price="19.5", condition="like new")
        return await store.get("books", listing_id.value)

    doc = asyncio.run(scenario())
    assert doc.get("price") == 19.5
    assert isinstance(doc.get("price"), float)
    assert doc.get("condition") == "Like New"
    assert doc.get("seller") == "Alice"
    assert doc.get("sellerId") == "alice"
    assert doc.get("image") == ""
    assert isinstance(doc.get("createdAt"), datetime)


@pytest.mark.parametrize(
    "fields", [{"title": "  "}, {"author": ""}, {"price": "free"}, {"condition": "mint"}]
)
def test_create_listing_validation(fields):
    async def scenario():
        _, repository = _repository()
        await _create(repository, **fields)

    with pytest.raises(ValidationError):
        asyncio.run(scenario())


def test_delete_listing_checks_ownership():
    async def scenario():
        store, repository = _repository()
        listing_id = await _create(repository)
        handler = DeleteListingHandler(repository)
        with pytest.raises(AccessDeniedError):
            await handler.execute(DeleteListingCommand(listing_id=listing_id, user_id=BOB.id))
        still_there = await store.get("books", listing_id.value)
        await handler.execute(DeleteListingCommand(listing_id=listing_id, user_id=ALICE.id))
        gone = await store.get("books", listing_id.value)
        return still_there, gone

    still_there, gone = asyncio.run(scenario())
    assert still_there is not None
    assert gone is None


def test_delete_missing_listing_is_not_found():
    async def scenario():
        _, repository = _repository()
        await DeleteListingHandler(repository).execute(
            DeleteListingCommand(listing_id=ListingId("nope"), user_id=ALICE.id)
        )

    with pytest.raises(EntityNotFoundError):
        asyncio.run(scenario())


# ==================== QUERIES ====================


def _seed():
    async def seed():
        store, repository = _repository()
        await _create(repository, title="Dune", author="Frank Herbert", price="12", condition="Good")
        await _create(repository, title="Emma", author="Jane Austen", price="4.5", condition="Poor")
        await _create(
            repository, seller=BOB, title="anathem", author="Neal Stephenson", price="20",
            condition="Like New",
        )
        await _create(repository, seller=BOB, title="Persuasion", author="Jane Austen", price="8")
        return store, repository

    return seed()


def _browse(**kwargs):
    async def scenario():
        _, repository = await _seed()
        listings = await BrowseListingsHandler(repository).execute(BrowseListingsQuery(**kwargs))
        return [listing.title for listing in listings]

    return asyncio.run(scenario())


def test_browse_defaults_to_newest_first():
    assert _browse() == ["Persuasion", "anathem", "Emma", "Dune"]


def test_browse_search_matches_title_or_author_case_insensitively():
    assert sorted(_browse(search="AUSTEN")) == ["Emma", "Persuasion"]
    assert _browse(search="dun") == ["Dune"]


def test_browse_price_range_is_inclusive():
    assert sorted(_browse(min_price=8, max_price=12)) == ["Dune", "Persuasion"]
    assert _browse(min_price=20) == ["anathem"]


def test_browse_condition_filter():
    conditions = frozenset({BookCondition.POOR, BookCondition.LIKE_NEW})
    assert sorted(_browse(conditions=conditions)) == ["Emma", "anathem"]


def test_browse_sorts():
    assert _browse(sort=ListingSort.PRICE_LOW) == ["Emma", "Persuasion", "Dune", "anathem"]
    assert _browse(sort=ListingSort.PRICE_HIGH) == ["anathem", "Dune", "Persuasion", "Emma"]
    assert _browse(sort=ListingSort.TITLE) == ["anathem", "Dune", "Emma", "Persuasion"]


def test_browse_rejects_inverted_range():
    with pytest.raises(ValidationError):
        _browse(min_price=10, max_price=5)


def test_seller_listings_newest_first():
    async def scenario():
        _, repository = await _seed()
        listings = await ListSellerListingsHandler(repository).execute(
            ListSellerListingsQuery(seller_id=BOB.id)
        )
        return [listing.title for listing in listings]

    assert asyncio.run(scenario()) == ["Persuasion", "anathem"]


def test_get_listing():
    async def scenario():
        _, repository = _repository()
        listing_id = await _create(repository)
        handler = GetListingHandler(repository)
        listing = await handler.execute(GetListingQuery(listing_id=listing_id))
        with pytest.raises(EntityNotFoundError):
            await handler.execute(GetListingQuery(listing_id=ListingId("missing")))
        return listing

    listing = asyncio.run(scenario())
    assert listing.title == "Dune"
    assert listing.created_at.tzinfo == timezone.utc
