"""
User Entity - identity supplied by the authentication service (read only).
"""

from dataclasses import dataclass
from typing import Optional
from bookmybook.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class User:
    id: UserId
    email: Optional[str] = None
    display_name: Optional[str] = None

    @property
    def label(self) -> str:
        """Name shown to other users: display name, else email."""
        return self.display_name or self.email or "User"
