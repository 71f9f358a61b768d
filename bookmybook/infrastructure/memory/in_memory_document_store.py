"""
In-Memory Document Store.

Process-local implementation of the DocumentStore port, used for
STORE_BACKEND=memory (local runs without Firebase) and in tests.

Behaves like the managed store where it matters to callers:
- SERVER_TIMESTAMP is replaced by a strictly increasing commit time
- ArrayRemove is applied atomically on update
- dotted keys in update() address nested maps
- every write pushes a fresh full snapshot to each matching live query
- missing/existing documents raise StoreNotFoundError/StoreConflictError
"""

import asyncio
import copy
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from bookmybook.domain.exceptions import StoreConflictError, StoreNotFoundError
from bookmybook.domain.ports.document_store import (
    ARRAY_CONTAINS,
    EQUALS,
    SERVER_TIMESTAMP,
    ArrayRemove,
    DocumentSnapshot,
    DocumentStore,
    FieldFilter,
)
from bookmybook.domain.ports.subscription import Subscription

logger = logging.getLogger(__name__)


def _matches(data: dict[str, Any], filters: list[FieldFilter]) -> bool:
    for f in filters:
        value = data.get(f.field)
        if f.op == EQUALS and value != f.value:
            return False
        if f.op == ARRAY_CONTAINS and (
            not isinstance(value, list) or f.value not in value
        ):
            return False
    return True


class InMemoryDocumentStore(DocumentStore):
    def __init__(self):
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._watchers: list[tuple[str, list[FieldFilter], Subscription]] = []
        self._lock = asyncio.Lock()
        self._last_commit = datetime.now(timezone.utc)

    # ==================== HELPERS ====================

    def _commit_time(self) -> datetime:
        now = datetime.now(timezone.utc)
        if now <= self._last_commit:
            now = self._last_commit + timedelta(microseconds=1)
        self._last_commit = now
        return now

    def _resolve(self, value: Any, commit_time: datetime, current: Any = None) -> Any:
        if value is SERVER_TIMESTAMP:
            return commit_time
        if isinstance(value, ArrayRemove):
            existing = current if isinstance(current, list) else []
            return [item for item in existing if item not in value.values]
        if isinstance(value, dict):
            return {k: self._resolve(v, commit_time) for k, v in value.items()}
        return copy.deepcopy(value)

    def _docs(self, collection: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    def _snapshot(self, collection: str, filters: list[FieldFilter]) -> list[DocumentSnapshot]:
        return [
            DocumentSnapshot(id=doc_id, data=copy.deepcopy(data))
            for doc_id, data in self._docs(collection).items()
            if _matches(data, filters)
        ]

    def _notify(self, collection: str) -> None:
        for watched, filters, subscription in list(self._watchers):
            if watched == collection:
                subscription.push(self._snapshot(collection, filters))

    # ==================== DocumentStore ====================

    async def get(self, collection: str, doc_id: str) -> Optional[DocumentSnapshot]:
        data = self._docs(collection).get(doc_id)
        if data is None:
            return None
        return DocumentSnapshot(id=doc_id, data=copy.deepcopy(data))

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex[:20]
        await self.create(collection, doc_id, data)
        return doc_id

    async def create(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        async with self._lock:
            docs = self._docs(collection)
            if doc_id in docs:
                raise StoreConflictError(f"{collection}/{doc_id} already exists")
            commit_time = self._commit_time()
            docs[doc_id] = {k: self._resolve(v, commit_time) for k, v in data.items()}
        self._notify(collection)

    async def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        async with self._lock:
            document = self._docs(collection).get(doc_id)
            if document is None:
                raise StoreNotFoundError(f"No document to update: {collection}/{doc_id}")
            commit_time = self._commit_time()
            for key, value in data.items():
                *parents, leaf = key.split(".")
                target = document
                for part in parents:
                    nested = target.get(part)
                    if not isinstance(nested, dict):
                        nested = {}
                        target[part] = nested
                    target = nested
                target[leaf] = self._resolve(value, commit_time, target.get(leaf))
        self._notify(collection)

    async def delete(self, collection: str, doc_id: str) -> None:
        async with self._lock:
            self._docs(collection).pop(doc_id, None)
        self._notify(collection)

    async def query(
        self,
        collection: str,
        filters: Optional[list[FieldFilter]] = None,
        limit: Optional[int] = None,
    ) -> list[DocumentSnapshot]:
        results = self._snapshot(collection, filters or [])
        return results[:limit] if limit else results

    def subscribe(
        self, collection: str, filters: Optional[list[FieldFilter]] = None
    ) -> Subscription[list[DocumentSnapshot]]:
        filters = list(filters or [])
        entry: list = []

        def _unsubscribe() -> None:
            if entry and entry[0] in self._watchers:
                self._watchers.remove(entry[0])
                logger.debug(f"Live query on {collection} cancelled")

        subscription: Subscription[list[DocumentSnapshot]] = Subscription(
            on_cancel=_unsubscribe
        )
        entry.append((collection, filters, subscription))
        self._watchers.append(entry[0])
        subscription.push(self._snapshot(collection, filters))
        return subscription

    @property
    def active_subscriptions(self) -> int:
        return len(self._watchers)

    async def close(self) -> None:
        for _, _, subscription in list(self._watchers):
            subscription.cancel()
