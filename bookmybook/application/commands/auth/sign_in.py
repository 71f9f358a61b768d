"""Sign In Command."""

from dataclasses import dataclass

from bookmybook.application.common.interfaces import Command, CommandHandler
from bookmybook.domain.exceptions import AuthError
from bookmybook.domain.ports.auth_service import AuthService, AuthSession


@dataclass(frozen=True)
class SignInCommand(Command[AuthSession]):
    email: str
    password: str


class SignInHandler(CommandHandler[AuthSession]):
    def __init__(self, auth_service: AuthService):
        self._auth_service = auth_service

    async def execute(self, command: SignInCommand) -> AuthSession:
        email = command.email.strip()
        if not email or not command.password:
            raise AuthError("Email and password are required.", code="MISSING_CREDENTIALS")
        return await self._auth_service.sign_in(email, command.password)
