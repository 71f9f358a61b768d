"""
PORTS - Interfaces that infrastructure implements

A "port" is an abstract interface that defines WHAT the application needs,
without specifying HOW it's done.

- document_store.py → collection/query/get/add/update/delete/subscribe
- subscription.py   → cancellable live stream of snapshots
- auth_service.py   → sign-in / sign-up / token verification
- media_uploader.py → file → hosted URL
- repositories/     → entity persistence on top of the document store
"""

from bookmybook.domain.ports.subscription import Subscription
from bookmybook.domain.ports.document_store import (
    ARRAY_CONTAINS,
    EQUALS,
    SERVER_TIMESTAMP,
    ArrayRemove,
    DocumentSnapshot,
    DocumentStore,
    FieldFilter,
)
from bookmybook.domain.ports.auth_service import AuthService, AuthSession
from bookmybook.domain.ports.media_uploader import MediaUploader

__all__ = [
    "Subscription",
    "ARRAY_CONTAINS",
    "EQUALS",
    "SERVER_TIMESTAMP",
    "ArrayRemove",
    "DocumentSnapshot",
    "DocumentStore",
    "FieldFilter",
    "AuthService",
    "AuthSession",
    "MediaUploader",
]
