"""
ListingId Value Object - Store-assigned document id of a book listing.
"""

from dataclasses import dataclass

from bookmybook.domain.exceptions.validation_error import ValidationError


@dataclass(frozen=True)
class ListingId:
    value: str

    def __post_init__(self):
        if not self.value or "/" in self.value:
            raise ValidationError(f"Invalid listing ID: {self.value!r}")

    def __str__(self) -> str:
        return self.value
