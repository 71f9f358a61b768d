"""
Document Message Repository - append-only "messages" log.
"""

import logging

from bookmybook.config.settings import Config
from bookmybook.domain.entities.message import Message
from bookmybook.domain.exceptions import ValidationError
from bookmybook.domain.ports.document_store import (
    EQUALS,
    SERVER_TIMESTAMP,
    DocumentSnapshot,
    DocumentStore,
    FieldFilter,
)
from bookmybook.domain.ports.repositories import MessageRepository
from bookmybook.domain.ports.subscription import Subscription
from bookmybook.domain.value_objects.conversation_id import ConversationId
from bookmybook.domain.value_objects.message_id import MessageId
from bookmybook.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class DocumentMessageRepository(MessageRepository):
    def __init__(self, store: DocumentStore, collection: str = Config.MESSAGES_COLLECTION):
        self._store = store
        self._collection = collection

    def _to_entities(self, docs: list[DocumentSnapshot]) -> list[Message]:
        messages = []
        for doc in docs:
            try:
                messages.append(
                    Message(
                        id=MessageId(doc.id),
                        conversation_id=ConversationId(doc.get("conversationId") or ""),
                        sender_id=UserId(doc.get("senderId") or ""),
                        sender_name=doc.get("senderName") or "",
                        text=doc.get("text") or "",
                        timestamp=doc.get("timestamp"),
                        client_seq=int(doc.get("clientSeq") or 0),
                    )
                )
            except (ValidationError, ValueError) as e:
                logger.warning(f"Skipping malformed message {doc.id}: {e}")
        return messages

    def _filters(self, conversation_id: ConversationId) -> list[FieldFilter]:
        return [FieldFilter("conversationId", EQUALS, conversation_id.value)]

    async def append(
        self,
        conversation_id: ConversationId,
        sender_id: UserId,
        sender_name: str,
        text: str,
        client_seq: int,
    ) -> MessageId:
        doc_id = await self._store.add(
            self._collection,
            {
                "conversationId": conversation_id.value,
                "senderId": sender_id.value,
                "senderName": sender_name,
                "text": text,
                "timestamp": SERVER_TIMESTAMP,
                "clientSeq": client_seq,
            },
        )
        return MessageId(doc_id)

    async def get_by_conversation(self, conversation_id: ConversationId) -> list[Message]:
        docs = await self._store.query(self._collection, self._filters(conversation_id))
        return self._to_entities(docs)

    def watch_conversation(
        self, conversation_id: ConversationId
    ) -> Subscription[list[Message]]:
        return self._store.subscribe(
            self._collection, self._filters(conversation_id)
        ).map(self._to_entities)
