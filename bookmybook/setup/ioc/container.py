"""
Dishka DI Container Setup.

- Scope.APP: one instance for the process (HTTP client, document store,
  auth service, media uploader)
- Scope.REQUEST: new instance per HTTP request (repositories, services,
  command/query handlers)

Flow:
  Container → DocumentStore → DocumentMessageRepository → MessageChannel → SendMessageHandler
                                         ↓
                             uses MessageRepository interface

The document store is chosen by Config.STORE_BACKEND:
- "firestore" → FirestoreDocumentStore on the shared FirebaseApp
- "memory"    → InMemoryDocumentStore (local runs, tests)
"""

import logging
from typing import AsyncIterable

import httpx
from dishka import AsyncContainer, Provider, Scope, make_async_container, provide

from bookmybook.application.commands.auth import (
    SignInHandler,
    SignOutHandler,
    SignUpHandler,
)
from bookmybook.application.commands.conversations import MarkReadHandler
from bookmybook.application.commands.listings import (
    CreateListingHandler,
    DeleteListingHandler,
)
from bookmybook.application.commands.media import UploadImageHandler
from bookmybook.application.commands.messages import SendMessageHandler
from bookmybook.application.queries.conversations import (
    ListConversationsHandler,
    WatchConversationsHandler,
)
from bookmybook.application.queries.listings import (
    BrowseListingsHandler,
    GetListingHandler,
    ListSellerListingsHandler,
)
from bookmybook.application.queries.messages import (
    GetMessagesHandler,
    WatchMessagesHandler,
)
from bookmybook.application.services import ConversationDirectory, MessageChannel
from bookmybook.config.settings import Config
from bookmybook.domain.ports.auth_service import AuthService
from bookmybook.domain.ports.document_store import DocumentStore
from bookmybook.domain.ports.media_uploader import MediaUploader
from bookmybook.domain.ports.repositories import (
    ConversationRepository,
    ListingRepository,
    MessageRepository,
)
from bookmybook.infrastructure.cloudinary import CloudinaryMediaUploader
from bookmybook.infrastructure.firebase import (
    FirebaseApp,
    FirebaseAuthService,
    FirebaseTokenVerifier,
    FirestoreDocumentStore,
)
from bookmybook.infrastructure.memory import InMemoryDocumentStore
from bookmybook.infrastructure.persistence import (
    DocumentConversationRepository,
    DocumentListingRepository,
    DocumentMessageRepository,
)

logger = logging.getLogger(__name__)


class AppProvider(Provider):
    """
    Application dependency provider.

    Return types are the ABSTRACT ports; tests override them by passing a
    second provider to create_container().
    """

    # ==================== CLIENTS ====================

    @provide(scope=Scope.APP)
    async def get_http_client(self) -> AsyncIterable[httpx.AsyncClient]:
        async with httpx.AsyncClient(timeout=Config.HTTP_TIMEOUT) as client:
            yield client

    # ==================== DOCUMENT STORE ====================

    @provide(scope=Scope.APP)
    async def get_document_store(self) -> AsyncIterable[DocumentStore]:
        """
        Provide the document store (singleton, app-scoped).

        The Firebase app is initialized on first use and deleted when the
        container closes.
        """
        if Config.STORE_BACKEND == "memory":
            store = InMemoryDocumentStore()
            logger.info("Using in-memory document store")
            yield store
            await store.close()
            return

        firebase = await FirebaseApp.init()
        store = FirestoreDocumentStore(firebase)
        try:
            yield store
        finally:
            await store.close()
            await FirebaseApp.shutdown()

    # ==================== EXTERNAL SERVICES ====================

    @provide(scope=Scope.APP)
    def get_auth_service(self, http_client: httpx.AsyncClient) -> AuthService:
        return FirebaseAuthService(
            http_client,
            FirebaseTokenVerifier(Config.FIREBASE_PROJECT_ID, Config.FIREBASE_JWKS_URL),
        )

    @provide(scope=Scope.APP)
    def get_media_uploader(self, http_client: httpx.AsyncClient) -> MediaUploader:
        return CloudinaryMediaUploader(http_client)

    # ==================== REPOSITORIES ====================

    @provide(scope=Scope.REQUEST)
    def get_listing_repository(self, store: DocumentStore) -> ListingRepository:
        return DocumentListingRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, store: DocumentStore) -> MessageRepository:
        return DocumentMessageRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_conversation_repository(self, store: DocumentStore) -> ConversationRepository:
        return DocumentConversationRepository(store)

    # ==================== SERVICES ====================

    @provide(scope=Scope.REQUEST)
    def get_message_channel(self, message_repository: MessageRepository) -> MessageChannel:
        return MessageChannel(message_repository)

    @provide(scope=Scope.REQUEST)
    def get_conversation_directory(
        self, conversation_repository: ConversationRepository
    ) -> ConversationDirectory:
        return ConversationDirectory(conversation_repository)

    # ==================== HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_sign_in_handler(self, auth_service: AuthService) -> SignInHandler:
        return SignInHandler(auth_service)

    @provide(scope=Scope.REQUEST)
    def get_sign_up_handler(self, auth_service: AuthService) -> SignUpHandler:
        return SignUpHandler(auth_service)

    @provide(scope=Scope.REQUEST)
    def get_sign_out_handler(self, auth_service: AuthService) -> SignOutHandler:
        return SignOutHandler(auth_service)

    @provide(scope=Scope.REQUEST)
    def get_create_listing_handler(
        self, listing_repository: ListingRepository
    ) -> CreateListingHandler:
        return CreateListingHandler(listing_repository)

    @provide(scope=Scope.REQUEST)
    def get_delete_listing_handler(
        self, listing_repository: ListingRepository
    ) -> DeleteListingHandler:
        return DeleteListingHandler(listing_repository)

    @provide(scope=Scope.REQUEST)
    def get_browse_listings_handler(
        self, listing_repository: ListingRepository
    ) -> BrowseListingsHandler:
        return BrowseListingsHandler(listing_repository)

    @provide(scope=Scope.REQUEST)
    def get_get_listing_handler(
        self, listing_repository: ListingRepository
    ) -> GetListingHandler:
        return GetListingHandler(listing_repository)

    @provide(scope=Scope.REQUEST)
    def get_list_seller_listings_handler(
        self, listing_repository: ListingRepository
    ) -> ListSellerListingsHandler:
        return ListSellerListingsHandler(listing_repository)

    @provide(scope=Scope.REQUEST)
    def get_upload_image_handler(self, uploader: MediaUploader) -> UploadImageHandler:
        return UploadImageHandler(uploader)

    @provide(scope=Scope.REQUEST)
    def get_send_message_handler(
        self, channel: MessageChannel, directory: ConversationDirectory
    ) -> SendMessageHandler:
        return SendMessageHandler(channel, directory)

    @provide(scope=Scope.REQUEST)
    def get_get_messages_handler(self, channel: MessageChannel) -> GetMessagesHandler:
        return GetMessagesHandler(channel)

    @provide(scope=Scope.REQUEST)
    def get_watch_messages_handler(self, channel: MessageChannel) -> WatchMessagesHandler:
        return WatchMessagesHandler(channel)

    @provide(scope=Scope.REQUEST)
    def get_list_conversations_handler(
        self, directory: ConversationDirectory
    ) -> ListConversationsHandler:
        return ListConversationsHandler(directory)

    @provide(scope=Scope.REQUEST)
    def get_watch_conversations_handler(
        self, directory: ConversationDirectory
    ) -> WatchConversationsHandler:
        return WatchConversationsHandler(directory)

    @provide(scope=Scope.REQUEST)
    def get_mark_read_handler(self, directory: ConversationDirectory) -> MarkReadHandler:
        return MarkReadHandler(directory)


def create_container(*providers: Provider) -> AsyncContainer:
    """
    Create the DI container.

    Extra providers are registered after AppProvider, so their factories
    override the defaults (tests swap in fakes this way).
    """
    return make_async_container(AppProvider(), *providers)
