"""
Document Conversation Repository - "conversations" summary records.

The document id IS the canonical conversation id, so update and create
address the same record and a second create for the pair is rejected by
the store (StoreConflictError) instead of producing a duplicate.
"""

import logging

from bookmybook.config.settings import Config
from bookmybook.domain.entities.conversation import (
    DEFAULT_LAST_MESSAGE,
    DEFAULT_OTHER_USER_NAME,
    Conversation,
)
from bookmybook.domain.exceptions import ValidationError
from bookmybook.domain.ports.document_store import (
    ARRAY_CONTAINS,
    SERVER_TIMESTAMP,
    ArrayRemove,
    DocumentSnapshot,
    DocumentStore,
    FieldFilter,
)
from bookmybook.domain.ports.repositories import ConversationRepository
from bookmybook.domain.ports.subscription import Subscription
from bookmybook.domain.value_objects.conversation_id import ConversationId
from bookmybook.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class DocumentConversationRepository(ConversationRepository):
    def __init__(
        self, store: DocumentStore, collection: str = Config.CONVERSATIONS_COLLECTION
    ):
        self._store = store
        self._collection = collection

    def _to_entity(self, doc: DocumentSnapshot) -> Conversation:
        conversation_id = ConversationId(doc.get("id") or doc.id)
        return Conversation(
            id=conversation_id,
            participants=conversation_id.participants(),
            other_user_name=doc.get("otherUserName") or DEFAULT_OTHER_USER_NAME,
            participant_names={
                UserId(uid): name
                for uid, name in (doc.get("participantNames") or {}).items()
                if uid and name
            },
            last_message=doc.get("lastMessage") or DEFAULT_LAST_MESSAGE,
            last_message_time=doc.get("lastMessageTime"),
            unread_by=frozenset(UserId(uid) for uid in doc.get("unreadBy") or [] if uid),
        )

    def _to_entities(self, docs: list[DocumentSnapshot]) -> list[Conversation]:
        conversations = []
        for doc in docs:
            try:
                conversations.append(self._to_entity(doc))
            except ValidationError as e:
                logger.warning(f"Skipping malformed conversation {doc.id}: {e}")
        return conversations

    def _participant_filter(self, user_id: UserId) -> list[FieldFilter]:
        return [FieldFilter("participants", ARRAY_CONTAINS, user_id.value)]

    async def record_message(
        self,
        conversation_id: ConversationId,
        last_message: str,
        sender_id: UserId,
        sender_name: str,
        recipient_id: UserId,
    ) -> None:
        await self._store.update(
            self._collection,
            conversation_id.value,
            {
                "lastMessage": last_message,
                "lastMessageTime": SERVER_TIMESTAMP,
                "unreadBy": [recipient_id.value],
                f"participantNames.{sender_id.value}": sender_name,
            },
        )

    async def create(
        self, conversation: Conversation, participant_names: dict[UserId, str]
    ) -> None:
        await self._store.create(
            self._collection,
            conversation.id.value,
            {
                "id": conversation.id.value,
                "participants": [uid.value for uid in conversation.participants],
                "otherUserName": conversation.other_user_name,
                "participantNames": {
                    uid.value: name for uid, name in participant_names.items() if name
                },
                "lastMessage": conversation.last_message,
                "lastMessageTime": conversation.last_message_time or SERVER_TIMESTAMP,
                "unreadBy": sorted(uid.value for uid in conversation.unread_by),
            },
        )

    async def clear_unread(self, conversation_id: ConversationId, user_id: UserId) -> None:
        await self._store.update(
            self._collection,
            conversation_id.value,
            {"unreadBy": ArrayRemove(user_id.value)},
        )

    async def get_by_participant(self, user_id: UserId, limit: int) -> list[Conversation]:
        docs = await self._store.query(
            self._collection, self._participant_filter(user_id), limit=limit
        )
        return self._to_entities(docs)

    def watch_by_participant(self, user_id: UserId) -> Subscription[list[Conversation]]:
        return self._store.subscribe(
            self._collection, self._participant_filter(user_id)
        ).map(self._to_entities)
