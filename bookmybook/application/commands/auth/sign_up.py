"""Sign Up Command."""

from dataclasses import dataclass
from typing import Optional

from bookmybook.application.common.interfaces import Command, CommandHandler
from bookmybook.domain.exceptions import AuthError
from bookmybook.domain.ports.auth_service import AuthService, AuthSession


@dataclass(frozen=True)
class SignUpCommand(Command[AuthSession]):
    email: str
    password: str
    display_name: Optional[str] = None


class SignUpHandler(CommandHandler[AuthSession]):
    def __init__(self, auth_service: AuthService):
        self._auth_service = auth_service

    async def execute(self, command: SignUpCommand) -> AuthSession:
        email = command.email.strip()
        if not email or not command.password:
            raise AuthError("Email and password are required.", code="MISSING_CREDENTIALS")
        display_name = (command.display_name or "").strip() or None
        return await self._auth_service.sign_up(email, command.password, display_name)
