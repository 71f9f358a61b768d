"""
Document Store Port - collection-scoped document database with live queries.
Implementations:
- bookmybook/infrastructure/firebase/firestore_document_store.py
- bookmybook/infrastructure/memory/in_memory_document_store.py

Errors (bookmybook.domain.exceptions):
- update() on a missing document raises StoreNotFoundError
- create() on an existing document raises StoreConflictError
- queries the store cannot serve yet raise StorePreconditionError
- every other failure raises StoreError
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from bookmybook.domain.ports.subscription import Subscription

EQUALS = "=="
ARRAY_CONTAINS = "array-contains"


class _ServerTimestamp:
    """Write sentinel: the store fills in its own commit time."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


@dataclass(frozen=True)
class ArrayRemove:
    """Write sentinel: atomically remove values from an array field."""

    values: tuple

    def __init__(self, *values: Any):
        object.__setattr__(self, "values", tuple(values))


@dataclass(frozen=True)
class FieldFilter:
    field: str
    op: str
    value: Any

    def __post_init__(self):
        if self.op not in (EQUALS, ARRAY_CONTAINS):
            raise ValueError(f"Unsupported filter operator: {self.op}")


@dataclass(frozen=True)
class DocumentSnapshot:
    id: str
    data: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


class DocumentStore(ABC):
    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[DocumentSnapshot]: ...

    @abstractmethod
    async def add(self, collection: str, data: dict[str, Any]) -> str:
        """Create a document with a store-assigned id and return the id."""
        ...

    @abstractmethod
    async def create(self, collection: str, doc_id: str, data: dict[str, Any]) -> None: ...

    @abstractmethod
    async def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Merge fields into an existing document; dotted keys address nested maps."""
        ...

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None: ...

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: Optional[list[FieldFilter]] = None,
        limit: Optional[int] = None,
    ) -> list[DocumentSnapshot]: ...

    @abstractmethod
    def subscribe(
        self, collection: str, filters: Optional[list[FieldFilter]] = None
    ) -> Subscription[list[DocumentSnapshot]]:
        """Open a live query. The first snapshot is the current result set."""
        ...

    async def close(self) -> None:
        """Release client resources. Default: nothing to release."""
        return None
