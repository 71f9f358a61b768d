"""Firestore adapter against a stub client: error mapping and live query lifecycle."""

import asyncio
import threading
from types import SimpleNamespace

import pytest
from google.api_core import exceptions as google_exceptions

from bookmybook.domain.exceptions import (
    StoreConflictError,
    StoreError,
    StoreNotFoundError,
    StorePreconditionError,
)
from bookmybook.domain.ports.document_store import ARRAY_CONTAINS, FieldFilter
from bookmybook.infrastructure.firebase import firestore_document_store
from bookmybook.infrastructure.firebase.firestore_document_store import FirestoreDocumentStore


def _doc(doc_id, **data):
    return SimpleNamespace(id=doc_id, exists=True, to_dict=lambda: dict(data))


class StubWatch:
    """Behaves like the SDK watch: close(reason) marks it closed, then raises reason."""

    def __init__(self, callback):
        self.callback = callback
        self._closed = False
        self.unsubscribed = False

    def close(self, reason=None):
        if self._closed:
            return
        self._closed = True
        if reason:
            raise reason

    def unsubscribe(self):
        self.unsubscribed = True
        self.close()

    def _on_sdk_thread(self, target, **kwargs):
        thread = threading.Thread(target=target, kwargs=kwargs, daemon=True)
        thread.start()
        thread.join()

    def emit(self, docs):
        self._on_sdk_thread(self.callback, docs=docs, changes=[], read_time=None)

    def terminate(self, reason):
        self._on_sdk_thread(self.close, reason=reason)


class StubDocument:
    def __init__(self, client):
        self._client = client

    async def _call(self):
        if self._client.error:
            raise self._client.error

    async def get(self):
        await self._call()
        return _doc("b1", title="Dune")

    async def create(self, data):
        await self._call()

    async def update(self, data):
        await self._call()

    async def delete(self):
        await self._call()


class StubQuery:
    def __init__(self, client):
        self._client = client

    def where(self, filter=None):
        return self

    def limit(self, count):
        return self

    def document(self, doc_id):
        return StubDocument(self._client)

    async def stream(self):
        if self._client.error:
            raise self._client.error
        yield _doc("b1", title="Dune")

    def on_snapshot(self, callback):
        watch = StubWatch(callback)
        self._client.watches.append(watch)
        return watch


class StubFirestoreClient:
    def __init__(self):
        self.error = None
        self.watches = []

    def collection(self, name):
        return StubQuery(self)


@pytest.fixture()
def firestore_client():
    return StubFirestoreClient()


@pytest.fixture()
def firestore_store(firestore_client):
    return FirestoreDocumentStore(SimpleNamespace(db=firestore_client, async_db=firestore_client))


# ==================== ERROR MAPPING ====================


@pytest.mark.parametrize(
    "error, expected",
    [
        (google_exceptions.NotFound("no document"), StoreNotFoundError),
        (google_exceptions.AlreadyExists("document exists"), StoreConflictError),
        (google_exceptions.FailedPrecondition("index is building"), StorePreconditionError),
        (google_exceptions.ServiceUnavailable("backend down"), StoreError),
    ],
)
def test_sdk_errors_map_to_store_errors(firestore_client, firestore_store, error, expected):
    firestore_client.error = error
    operations = [
        lambda: firestore_store.get("books", "b1"),
        lambda: firestore_store.create("conversations", "a_b", {"lastMessage": "hi"}),
        lambda: firestore_store.update("conversations", "a_b", {"lastMessage": "hi"}),
        lambda: firestore_store.delete("books", "b1"),
        lambda: firestore_store.query("books"),
    ]
    for operation in operations:
        with pytest.raises(expected) as exc_info:
            asyncio.run(operation())
        assert exc_info.type is expected


def test_reads_without_errors(firestore_store):
    doc = asyncio.run(firestore_store.get("books", "b1"))
    assert doc.id == "b1" and doc.data == {"title": "Dune"}
    assert [d.id for d in asyncio.run(firestore_store.query("books", limit=5))] == ["b1"]


# ==================== LIVE QUERIES ====================


def _subscribe(store):
    return store.subscribe("conversations", [FieldFilter("participants", ARRAY_CONTAINS, "alice")])


def test_snapshots_from_sdk_thread_reach_subscriber(firestore_client, firestore_store):
    async def scenario():
        subscription = _subscribe(firestore_store)
        firestore_client.watches[0].emit([_doc("alice_bob", lastMessage="Hi")])
        snapshot = await subscription.next(timeout=1)
        subscription.cancel()
        return snapshot

    snapshot = asyncio.run(scenario())
    assert [(d.id, d.data) for d in snapshot] == [("alice_bob", {"lastMessage": "Hi"})]


@pytest.mark.filterwarnings("ignore::pytest.PytestUnhandledThreadExceptionWarning")
def test_watch_failed_precondition_fails_subscription(firestore_client, firestore_store):
    async def scenario():
        subscription = _subscribe(firestore_store)
        watch = firestore_client.watches[0]
        watch.terminate(google_exceptions.FailedPrecondition("The query requires an index"))
        with pytest.raises(StorePreconditionError):
            await subscription.next(timeout=1)
        return watch, subscription

    watch, subscription = asyncio.run(scenario())
    assert subscription.cancelled
    assert watch.unsubscribed
    assert firestore_store._subscriptions == set()


@pytest.mark.filterwarnings("ignore::pytest.PytestUnhandledThreadExceptionWarning")
def test_watch_rpc_error_fails_subscription(firestore_client, firestore_store):
    async def scenario():
        subscription = _subscribe(firestore_store)
        firestore_client.watches[0].terminate(google_exceptions.PermissionDenied("denied"))
        with pytest.raises(StoreError) as exc_info:
            await subscription.next(timeout=1)
        return exc_info

    exc_info = asyncio.run(scenario())
    assert not isinstance(exc_info.value, StorePreconditionError)
    assert "denied" in str(exc_info.value)


def test_watch_closed_without_reason_is_detected(firestore_client, firestore_store, monkeypatch):
    monkeypatch.setattr(firestore_document_store, "WATCH_POLL_SECONDS", 0.01)

    async def scenario():
        subscription = _subscribe(firestore_store)
        firestore_client.watches[0]._closed = True
        with pytest.raises(StoreError):
            await subscription.next(timeout=1)

    asyncio.run(scenario())


def test_cancel_unsubscribes_watch(firestore_client, firestore_store):
    async def scenario():
        subscription = _subscribe(firestore_store)
        assert len(firestore_store._subscriptions) == 1
        await firestore_store.close()
        return subscription

    subscription = asyncio.run(scenario())
    assert subscription.cancelled
    assert firestore_client.watches[0].unsubscribed
    assert firestore_store._subscriptions == set()
