import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from bookmybook.application.services.message_channel import MessageChannel, order_messages
from bookmybook.domain.entities.message import Message
from bookmybook.domain.exceptions import AccessDeniedError, ValidationError
from bookmybook.domain.value_objects.conversation_id import ConversationId
from bookmybook.domain.value_objects.message_id import MessageId
from bookmybook.domain.value_objects.user_id import UserId
from bookmybook.infrastructure.memory import InMemoryDocumentStore
from bookmybook.infrastructure.persistence import DocumentMessageRepository

U1 = UserId("u1")
U2 = UserId("u2")
CONVERSATION = ConversationId.for_participants(U1, U2)
T0 = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _message(mid: str, seconds=None, seq: int = 0) -> Message:
    return Message(
        id=MessageId(mid),
        conversation_id=CONVERSATION,
        sender_id=U1,
        sender_name="u1",
        text=mid,
        timestamp=None if seconds is None else T0 + timedelta(seconds=seconds),
        client_seq=seq,
    )


def test_order_is_ascending_regardless_of_arrival_order():
    shuffled = [_message("c", 3), _message("a", 1), _message("b", 2)]
    assert [m.id.value for m in order_messages(shuffled)] == ["a", "b", "c"]


def test_pending_messages_sort_after_confirmed_by_local_sequence():
    messages = [
        _message("pending-2", None, seq=9),
        _message("old", 1),
        _message("pending-1", None, seq=4),
        _message("new", 100),
    ]
    assert [m.id.value for m in order_messages(messages)] == [
        "old",
        "new",
        "pending-1",
        "pending-2",
    ]


def test_equal_timestamps_fall_back_to_sequence_then_id():
    messages = [_message("b", 1, seq=2), _message("a", 1, seq=2), _message("z", 1, seq=1)]
    assert [m.id.value for m in order_messages(messages)] == ["z", "a", "b"]


def test_blank_text_is_rejected_before_any_write():
    async def scenario():
        store = InMemoryDocumentStore()
        channel = MessageChannel(DocumentMessageRepository(store))
        with pytest.raises(ValidationError):
            await channel.send(CONVERSATION, U1, "u1", "   \n\t")
        return await store.query("messages")

    assert asyncio.run(scenario()) == []


def test_sender_must_be_participant():
    async def scenario():
        channel = MessageChannel(DocumentMessageRepository(InMemoryDocumentStore()))
        await channel.send(CONVERSATION, UserId("u3"), "u3", "hi")

    with pytest.raises(AccessDeniedError):
        asyncio.run(scenario())


def test_send_stores_trimmed_text_with_fields():
    async def scenario():
        store = InMemoryDocumentStore()
        channel = MessageChannel(DocumentMessageRepository(store))
        message_id = await channel.send(CONVERSATION, U1, "Alice", "  Is it available?  ")
        return message_id, await store.get("messages", message_id.value)

    message_id, doc = asyncio.run(scenario())
    assert doc.get("text") == "Is it available?"
    assert doc.get("conversationId") == "u1_u2"
    assert doc.get("senderId") == "u1"
    assert doc.get("senderName") == "Alice"
    assert isinstance(doc.get("timestamp"), datetime)
    assert doc.get("clientSeq") > 0


def test_subscribe_yields_current_set_then_sorted_updates():
    async def scenario():
        store = InMemoryDocumentStore()
        channel = MessageChannel(DocumentMessageRepository(store))
        await channel.send(CONVERSATION, U1, "u1", "first")
        other = ConversationId.for_participants(U1, UserId("u9"))
        await channel.send(other, U1, "u1", "elsewhere")

        async with channel.subscribe(CONVERSATION) as subscription:
            initial = await subscription.next(timeout=1)
            await channel.send(CONVERSATION, U2, "u2", "second")
            updated = await subscription.next(timeout=1)
        return initial, updated, store.active_subscriptions

    initial, updated, active = asyncio.run(scenario())
    assert [m.text for m in initial] == ["first"]
    assert [m.text for m in updated] == ["first", "second"]
    assert active == 0


def test_history_is_ordered():
    async def scenario():
        channel = MessageChannel(DocumentMessageRepository(InMemoryDocumentStore()))
        for text in ("one", "two", "three"):
            await channel.send(CONVERSATION, U2, "u2", text)
        return await channel.history(CONVERSATION)

    assert [m.text for m in asyncio.run(scenario())] == ["one", "two", "three"]
