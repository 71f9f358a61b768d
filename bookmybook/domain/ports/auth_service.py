"""
Auth Service Port - sign-in, sign-up and token verification.
Implementation: bookmybook/infrastructure/firebase/firebase_auth_service.py
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from bookmybook.domain.entities.user import User


@dataclass(frozen=True)
class AuthSession:
    user: User
    id_token: str
    refresh_token: str = ""
    expires_in: int = 3600


class AuthService(ABC):
    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthSession: ...

    @abstractmethod
    async def sign_up(
        self, email: str, password: str, display_name: Optional[str] = None
    ) -> AuthSession: ...

    @abstractmethod
    async def sign_out(self, id_token: str) -> None: ...

    @abstractmethod
    async def verify(self, id_token: str) -> User:
        """Resolve a bearer token to its user. Raises AuthError when invalid."""
        ...
