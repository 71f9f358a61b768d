"""
Price Value Object - non-negative amount, currency agnostic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from bookmybook.domain.exceptions.validation_error import ValidationError


@dataclass(frozen=True)
class Price:
    amount: float

    def __post_init__(self):
        if isinstance(self.amount, bool) or not isinstance(self.amount, (int, float)):
            raise ValidationError(f"Price must be a number, got {self.amount!r}")
        if not math.isfinite(self.amount):
            raise ValidationError("Price must be a finite number")
        if self.amount < 0:
            raise ValidationError("Price cannot be negative")

    @classmethod
    def parse(cls, raw: str | int | float) -> Price:
        """Parse form input ("19.5") into a numeric price (19.5)."""
        if isinstance(raw, str):
            text = raw.strip()
            if not text:
                raise ValidationError("Price is required")
            try:
                value = float(text)
            except ValueError:
                raise ValidationError(f"Invalid price: {raw!r}") from None
            return cls(value)
        if isinstance(raw, bool):
            raise ValidationError(f"Invalid price: {raw!r}")
        return cls(float(raw))

    def __float__(self) -> float:
        return float(self.amount)
