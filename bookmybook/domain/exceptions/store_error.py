"""
Store errors - Failures reported by the document store.

Callers must discriminate on the concrete class:
- StoreNotFoundError      → the target document does not exist (HTTP 404)
- StoreConflictError      → create() hit an existing document (HTTP 409)
- StorePreconditionError  → store-side setup missing, e.g. an index (HTTP 503)
- StoreError              → anything else, e.g. network failures (HTTP 502)
"""


class StoreError(Exception):
    """Base class for document store failures."""

    def __init__(self, message: str = "Document store request failed"):
        super().__init__(message)
        self.message = message


class StoreNotFoundError(StoreError):
    def __init__(self, message: str = "Document not found"):
        super().__init__(message)


class StoreConflictError(StoreError):
    def __init__(self, message: str = "Document already exists"):
        super().__init__(message)


class StorePreconditionError(StoreError):
    """Store is not ready for the request yet (e.g. index still building)."""

    def __init__(
        self, message: str = "Index setup is in progress. Please retry in a moment."
    ):
        super().__init__(message)
