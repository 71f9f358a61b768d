import os
import sys

import pytest

# Run against the in-memory document store; must be set before settings load
os.environ["STORE_BACKEND"] = "memory"

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__) + "/.."))

from dishka import Provider, Scope, provide
from fastapi.testclient import TestClient

from bookmybook.domain.ports.auth_service import AuthService
from bookmybook.domain.ports.document_store import DocumentStore
from bookmybook.domain.ports.media_uploader import MediaUploader
from bookmybook.fastapi_app import create_fastapi_app
from bookmybook.infrastructure.memory import InMemoryDocumentStore
from bookmybook.setup.ioc.container import create_container
from fakes import FakeAuthService, FakeMediaUploader, token_for


class FakeServicesProvider(Provider):
    """Overrides the APP-scoped adapters of AppProvider with test doubles."""

    def __init__(self, store: DocumentStore, auth: AuthService, uploader: MediaUploader):
        super().__init__()
        self._store = store
        self._auth = auth
        self._uploader = uploader

    @provide(scope=Scope.APP)
    def get_document_store(self) -> DocumentStore:
        return self._store

    @provide(scope=Scope.APP)
    def get_auth_service(self) -> AuthService:
        return self._auth

    @provide(scope=Scope.APP)
    def get_media_uploader(self) -> MediaUploader:
        return self._uploader


@pytest.fixture()
def store():
    return InMemoryDocumentStore()


@pytest.fixture()
def auth_service():
    auth = FakeAuthService()
    auth.add_user("alice", "alice@example.com", display_name="Alice")
    auth.add_user("bob", "bob@example.com", display_name="Bob")
    auth.add_user("carol", "carol@example.com")
    return auth


@pytest.fixture()
def uploader():
    return FakeMediaUploader()


@pytest.fixture()
def app(store, auth_service, uploader):
    """Create a FastAPI app wired to the in-memory store and fake services."""
    container = create_container(FakeServicesProvider(store, auth_service, uploader))
    return create_fastapi_app(container=container)


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app (lifespan runs, one event loop)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers():
    """Authorization headers for alice."""
    return {"Authorization": f"Bearer {token_for('alice')}"}


@pytest.fixture()
def bob_headers():
    return {"Authorization": f"Bearer {token_for('bob')}"}
