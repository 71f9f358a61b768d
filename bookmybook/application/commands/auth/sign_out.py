"""Sign Out Command."""

from dataclasses import dataclass

from bookmybook.application.common.interfaces import Command, CommandHandler
from bookmybook.domain.ports.auth_service import AuthService


@dataclass(frozen=True)
class SignOutCommand(Command[None]):
    id_token: str


class SignOutHandler(CommandHandler[None]):
    def __init__(self, auth_service: AuthService):
        self._auth_service = auth_service

    async def execute(self, command: SignOutCommand) -> None:
        await self._auth_service.sign_out(command.id_token)
