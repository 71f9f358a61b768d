"""
List Conversations Queries.

ListConversations returns one snapshot; WatchConversations returns a live
Subscription the caller must cancel when it stops listening.
"""

from dataclasses import dataclass

from bookmybook.application.common.interfaces import Query, QueryHandler
from bookmybook.application.services.conversation_directory import (
    ConversationDirectory,
    ConversationSummary,
)
from bookmybook.config.settings import Config
from bookmybook.domain.ports.subscription import Subscription
from bookmybook.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ListConversationsQuery(Query[list[ConversationSummary]]):
    user_id: UserId
    limit: int = Config.CONVERSATION_USER_LIMIT


class ListConversationsHandler(QueryHandler[list[ConversationSummary]]):
    def __init__(self, directory: ConversationDirectory):
        self._directory = directory

    async def execute(self, query: ListConversationsQuery) -> list[ConversationSummary]:
        return await self._directory.list_once(query.user_id, query.limit)


@dataclass(frozen=True)
class WatchConversationsQuery(Query[Subscription[list[ConversationSummary]]]):
    user_id: UserId


class WatchConversationsHandler(QueryHandler[Subscription[list[ConversationSummary]]]):
    def __init__(self, directory: ConversationDirectory):
        self._directory = directory

    async def execute(
        self, query: WatchConversationsQuery
    ) -> Subscription[list[ConversationSummary]]:
        return self._directory.list(query.user_id)
