"""
Firestore Document Store - DocumentStore port backed by Cloud Firestore.

- CRUD and one-shot queries use the async client.
- Live queries use Query.on_snapshot(), whose callback runs on a background
  thread owned by the SDK; snapshots are handed to the event loop with
  loop.call_soon_threadsafe before touching the Subscription.
- A watch the SDK terminates (missing index, permission denied, dropped
  RPC) fails its Subscription with the mapped error below.

Error mapping (google.api_core.exceptions → domain):
- NotFound            → StoreNotFoundError
- AlreadyExists       → StoreConflictError
- FailedPrecondition  → StorePreconditionError (e.g. composite index missing)
- GoogleAPICallError  → StoreError
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Callable, Optional

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore as gcf
from google.cloud.firestore_v1.base_query import FieldFilter as FirestoreFieldFilter

from bookmybook.domain.exceptions import (
    StoreConflictError,
    StoreError,
    StoreNotFoundError,
    StorePreconditionError,
)
from bookmybook.domain.ports.document_store import (
    SERVER_TIMESTAMP,
    ArrayRemove,
    DocumentSnapshot,
    DocumentStore,
    FieldFilter,
)
from bookmybook.domain.ports.subscription import Subscription
from bookmybook.infrastructure.firebase.app import FirebaseApp

logger = logging.getLogger(__name__)

WATCH_POLL_SECONDS = 1.0


def _to_firestore(value: Any) -> Any:
    if value is SERVER_TIMESTAMP:
        return gcf.SERVER_TIMESTAMP
    if isinstance(value, ArrayRemove):
        return gcf.ArrayRemove(list(value.values))
    if isinstance(value, dict):
        return {k: _to_firestore(v) for k, v in value.items()}
    return value


def _from_firestore(value: Any) -> Any:
    # DatetimeWithNanoseconds is a datetime subclass; normalise to datetime
    if isinstance(value, datetime):
        return datetime.fromtimestamp(value.timestamp(), tz=value.tzinfo)
    if isinstance(value, dict):
        return {k: _from_firestore(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_from_firestore(v) for v in value]
    return value


def _to_snapshot(doc: Any) -> DocumentSnapshot:
    return DocumentSnapshot(id=doc.id, data=_from_firestore(doc.to_dict() or {}))


@asynccontextmanager
async def _translate_errors(operation: str):
    try:
        yield
    except google_exceptions.NotFound as e:
        raise StoreNotFoundError(f"{operation}: {e.message}") from e
    except google_exceptions.AlreadyExists as e:
        raise StoreConflictError(f"{operation}: {e.message}") from e
    except google_exceptions.FailedPrecondition as e:
        logger.warning(f"[Firestore] Precondition failed during {operation}: {e.message}")
        raise StorePreconditionError() from e
    except google_exceptions.GoogleAPICallError as e:
        logger.error(f"[Firestore] {operation} failed: {e}")
        raise StoreError(f"{operation} failed: {e.message}") from e


def _watch_error(collection: str, reason: Any) -> StoreError:
    if isinstance(reason, google_exceptions.FailedPrecondition):
        logger.warning(f"[Firestore] Live query on {collection} needs setup: {reason.message}")
        return StorePreconditionError()
    logger.error(f"[Firestore] Live query on {collection} terminated: {reason}")
    return StoreError(f"Live query on {collection} terminated: {reason or 'stream closed'}")


class _LiveQuery:
    """One SDK watch feeding one Subscription.

    The SDK ends a broken watch by calling Watch.close(reason) on one of its
    own threads and raising the reason there, so nothing reaches the caller.
    close() is wrapped to capture the reason, and a poller on the event loop
    fails the subscription once the watch reports itself closed.
    """

    def __init__(
        self,
        collection: str,
        loop: asyncio.AbstractEventLoop,
        on_stop: Optional[Callable[[], None]] = None,
    ):
        self.collection = collection
        self.subscription: Subscription[list[DocumentSnapshot]] = Subscription(
            on_cancel=self._stop
        )
        self._loop = loop
        self._on_stop = on_stop
        self._watch: Any = None
        self._monitor: Optional[asyncio.Task] = None
        self._reason: Any = None
        self._failed = False

    def start(self, query: Any) -> None:
        watch = query.on_snapshot(self._on_snapshot)
        close = watch.close

        def close_and_report(reason=None):
            if reason is not None:
                # set before close() marks the watch closed, the poller reads it
                self._reason = reason
                self._loop.call_soon_threadsafe(self._fail)
            return close(reason=reason)

        watch.close = close_and_report
        self._watch = watch
        self._monitor = self._loop.create_task(self._poll())

    def _on_snapshot(self, docs, changes, read_time) -> None:
        snapshot = [_to_snapshot(doc) for doc in docs]
        self._loop.call_soon_threadsafe(self.subscription.push, snapshot)

    def _fail(self) -> None:
        if self._failed or self.subscription.cancelled:
            return
        self._failed = True
        self.subscription.fail(_watch_error(self.collection, self._reason))

    async def _poll(self) -> None:
        while not self._failed and not self.subscription.cancelled:
            await asyncio.sleep(WATCH_POLL_SECONDS)
            if getattr(self._watch, "_closed", False):
                self._fail()

    def _stop(self) -> None:
        if self._monitor is not None:
            self._monitor.cancel()
        if self._watch is not None:
            self._watch.unsubscribe()
            logger.debug(f"[Firestore] Live query on {self.collection} cancelled")
        if self._on_stop is not None:
            self._on_stop()


class FirestoreDocumentStore(DocumentStore):
    def __init__(self, firebase: FirebaseApp):
        self._db = firebase.async_db
        self._watch_db = firebase.db
        self._subscriptions: set[Subscription] = set()

    def _query(self, client: Any, collection: str, filters: Optional[list[FieldFilter]]):
        query = client.collection(collection)
        for f in filters or []:
            query = query.where(filter=FirestoreFieldFilter(f.field, f.op, f.value))
        return query

    async def get(self, collection: str, doc_id: str) -> Optional[DocumentSnapshot]:
        async with _translate_errors(f"get {collection}/{doc_id}"):
            doc = await self._db.collection(collection).document(doc_id).get()
        return _to_snapshot(doc) if doc.exists else None

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        async with _translate_errors(f"add to {collection}"):
            _, ref = await self._db.collection(collection).add(_to_firestore(data))
        return ref.id

    async def create(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        async with _translate_errors(f"create {collection}/{doc_id}"):
            await self._db.collection(collection).document(doc_id).create(
                _to_firestore(data)
            )

    async def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        async with _translate_errors(f"update {collection}/{doc_id}"):
            await self._db.collection(collection).document(doc_id).update(
                _to_firestore(data)
            )

    async def delete(self, collection: str, doc_id: str) -> None:
        async with _translate_errors(f"delete {collection}/{doc_id}"):
            await self._db.collection(collection).document(doc_id).delete()

    async def query(
        self,
        collection: str,
        filters: Optional[list[FieldFilter]] = None,
        limit: Optional[int] = None,
    ) -> list[DocumentSnapshot]:
        query = self._query(self._db, collection, filters)
        if limit:
            query = query.limit(limit)
        async with _translate_errors(f"query {collection}"):
            return [_to_snapshot(doc) async for doc in query.stream()]

    def subscribe(
        self, collection: str, filters: Optional[list[FieldFilter]] = None
    ) -> Subscription[list[DocumentSnapshot]]:
        live_query = _LiveQuery(
            collection,
            asyncio.get_running_loop(),
            on_stop=lambda: self._subscriptions.discard(live_query.subscription),
        )
        live_query.start(self._query(self._watch_db, collection, filters))
        self._subscriptions.add(live_query.subscription)
        logger.debug(f"[Firestore] Live query on {collection} opened")
        return live_query.subscription

    async def close(self) -> None:
        for subscription in list(self._subscriptions):
            subscription.cancel()
