"""
BookCondition - physical condition of a listed book.
"""

from enum import Enum

from bookmybook.domain.exceptions.validation_error import ValidationError


class BookCondition(str, Enum):
    LIKE_NEW = "Like New"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"

    @classmethod
    def parse(cls, raw: str) -> "BookCondition":
        for condition in cls:
            if condition.value.lower() == raw.strip().lower():
                return condition
        allowed = ", ".join(c.value for c in cls)
        raise ValidationError(f"Invalid condition {raw!r}. Must be one of: {allowed}")
