"""
Firebase Layer - Firestore document store and Firebase Auth adapters.
"""

from bookmybook.infrastructure.firebase.app import FirebaseApp
from bookmybook.infrastructure.firebase.firestore_document_store import (
    FirestoreDocumentStore,
)
from bookmybook.infrastructure.firebase.firebase_auth_service import (
    FirebaseAuthService,
)
from bookmybook.infrastructure.firebase.token_verifier import FirebaseTokenVerifier

__all__ = [
    "FirebaseApp",
    "FirestoreDocumentStore",
    "FirebaseAuthService",
    "FirebaseTokenVerifier",
]
