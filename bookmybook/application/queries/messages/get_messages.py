"""
Message queries for the conversation between the viewer and another user.

The conversation id is derived from the pair, so a viewer can only ever read
conversations they participate in.
"""

from dataclasses import dataclass

from bookmybook.application.common.interfaces import Query, QueryHandler
from bookmybook.application.services.message_channel import MessageChannel
from bookmybook.domain.entities.message import Message
from bookmybook.domain.ports.subscription import Subscription
from bookmybook.domain.value_objects.conversation_id import ConversationId
from bookmybook.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetMessagesQuery(Query[list[Message]]):
    user_id: UserId
    other_user_id: UserId


class GetMessagesHandler(QueryHandler[list[Message]]):
    def __init__(self, channel: MessageChannel):
        self._channel = channel

    async def execute(self, query: GetMessagesQuery) -> list[Message]:
        conversation_id = ConversationId.for_participants(
            query.user_id, query.other_user_id
        )
        return await self._channel.history(conversation_id)


@dataclass(frozen=True)
class WatchMessagesQuery(Query[Subscription[list[Message]]]):
    user_id: UserId
    other_user_id: UserId


class WatchMessagesHandler(QueryHandler[Subscription[list[Message]]]):
    def __init__(self, channel: MessageChannel):
        self._channel = channel

    async def execute(self, query: WatchMessagesQuery) -> Subscription[list[Message]]:
        conversation_id = ConversationId.for_participants(
            query.user_id, query.other_user_id
        )
        return self._channel.subscribe(conversation_id)
