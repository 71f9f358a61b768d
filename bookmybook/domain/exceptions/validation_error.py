"""
ValidationError - Raised when input is rejected before any network call.
Maps to: HTTP 400 Bad Request
"""


class ValidationError(Exception):
    """Exception raised for local input validation errors (empty text, bad price)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
