"""
Domain exceptions package.
"""

# Auth exceptions
from huissier.domain.exceptions.auth import (
    AuthenticationError,
    AuthorizationError,
    InsufficientPermissionsError,
    InvalidSignatureError,
    LegacySignatureFormatError,
    MalformedHeaderError,
    MissingHeadersError,
    NotAuthorizedError,
    TimestampExpiredError,
)

# Base exceptions
from huissier.domain.exceptions.base import (
    DuplicateEntityError,
    EntityNotFoundError,
    HuissierException,
    ValidationError,
)

__all__ = [
    # Base
    "HuissierException",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "ValidationError",
    # Authentication (401)
    "AuthenticationError",
    "MissingHeadersError",
    "MalformedHeaderError",
    "LegacySignatureFormatError",
    "TimestampExpiredError",
    "InvalidSignatureError",
    # Authorization (403)
    "AuthorizationError",
    "NotAuthorizedError",
    "InsufficientPermissionsError",
]
