"""
UserId Value Object - Firebase Auth uid.
"""

from dataclasses import dataclass

from bookmybook.domain.exceptions.validation_error import ValidationError


@dataclass(frozen=True)
class UserId:
    value: str  # uid issued by the authentication service

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValidationError("UserId cannot be empty")

    def __str__(self) -> str:
        return self.value
