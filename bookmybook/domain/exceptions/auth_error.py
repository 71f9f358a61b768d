"""
AuthError - Bad credentials, invalid token or unavailable auth service.
Maps to: HTTP 401 Unauthorized
"""


class AuthError(Exception):
    """Exception raised when authentication fails. Never retried automatically."""

    def __init__(self, message: str = "Authentication failed", code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
