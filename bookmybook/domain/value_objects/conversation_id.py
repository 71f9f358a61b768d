"""
ConversationId Value Object - canonical key of a two-party conversation.

The id is derived from the two participant uids, sorted and joined with
SEPARATOR, so conversation(A, B) == conversation(B, A). Participant ids may
not contain SEPARATOR; otherwise two different pairs could map to the same id.
"""

from __future__ import annotations

from dataclasses import dataclass

from bookmybook.domain.exceptions.validation_error import ValidationError
from bookmybook.domain.value_objects.user_id import UserId

SEPARATOR = "_"


@dataclass(frozen=True)
class ConversationId:
    value: str

    def __post_init__(self):
        parts = self.value.split(SEPARATOR) if self.value else []
        if len(parts) != 2 or not all(parts):
            raise ValidationError(f"Invalid conversation ID: {self.value!r}")
        if parts[0] >= parts[1]:
            raise ValidationError(
                f"Conversation ID is not in canonical order: {self.value!r}"
            )

    @classmethod
    def for_participants(cls, first: UserId | str, second: UserId | str) -> ConversationId:
        """Derive the canonical id for the pair, independent of argument order.

        Raises:
            ValidationError: on empty ids, ids with surrounding whitespace, ids
                containing the separator, or a self-conversation (first == second).
        """
        a = str(first)
        b = str(second)
        if not a.strip() or not b.strip():
            raise ValidationError("Participant IDs cannot be empty")
        if a != a.strip() or b != b.strip():
            raise ValidationError("Participant IDs cannot have surrounding whitespace")
        if SEPARATOR in a or SEPARATOR in b:
            raise ValidationError(
                f"Participant IDs cannot contain {SEPARATOR!r}"
            )
        if a == b:
            raise ValidationError("Cannot start a conversation with yourself")
        low, high = sorted((a, b))
        return cls(f"{low}{SEPARATOR}{high}")

    def participants(self) -> tuple[UserId, UserId]:
        low, high = self.value.split(SEPARATOR)
        return UserId(low), UserId(high)

    def other_participant(self, user_id: UserId) -> UserId:
        low, high = self.participants()
        if user_id == low:
            return high
        if user_id == high:
            return low
        raise ValidationError(
            f"User {user_id.value} is not a participant of {self.value}"
        )

    def includes(self, user_id: UserId) -> bool:
        return user_id in self.participants()

    def __str__(self) -> str:
        return self.value
