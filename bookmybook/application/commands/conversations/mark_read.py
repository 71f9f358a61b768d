"""Mark Read Command."""

from dataclasses import dataclass

from bookmybook.application.common.interfaces import Command, CommandHandler
from bookmybook.application.services.conversation_directory import ConversationDirectory
from bookmybook.domain.value_objects.conversation_id import ConversationId
from bookmybook.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class MarkReadCommand(Command[None]):
    conversation_id: ConversationId
    user_id: UserId


class MarkReadHandler(CommandHandler[None]):
    def __init__(self, directory: ConversationDirectory):
        self._directory = directory

    async def execute(self, command: MarkReadCommand) -> None:
        await self._directory.mark_read(command.conversation_id, command.user_id)
