"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by domain and application logic and caught by
the presentation layer, which maps them to HTTP status codes.
"""

from bookmybook.domain.exceptions.entity_not_found import EntityNotFoundError
from bookmybook.domain.exceptions.access_denied import AccessDeniedError
from bookmybook.domain.exceptions.validation_error import ValidationError
from bookmybook.domain.exceptions.auth_error import AuthError
from bookmybook.domain.exceptions.upload_error import UploadError
from bookmybook.domain.exceptions.config_error import ConfigError
from bookmybook.domain.exceptions.store_error import (
    StoreError,
    StoreNotFoundError,
    StoreConflictError,
    StorePreconditionError,
)

__all__ = [
    "EntityNotFoundError",
    "AccessDeniedError",
    "ValidationError",
    "AuthError",
    "UploadError",
    "ConfigError",
    "StoreError",
    "StoreNotFoundError",
    "StoreConflictError",
    "StorePreconditionError",
]
