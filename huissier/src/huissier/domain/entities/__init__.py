"""
Domain entities.
"""

from huissier.domain.entities.authenticated_identity import AuthenticatedIdentity
from huissier.domain.entities.authorization_record import (
    AuthorizationRecord,
    AuthorizationResult,
)
from huissier.domain.entities.challenge import Challenge
from huissier.domain.entities.session import SESSION_MAX_AGE_MS, Session

__all__ = [
    "AuthenticatedIdentity",
    "AuthorizationRecord",
    "AuthorizationResult",
    "Challenge",
    "SESSION_MAX_AGE_MS",
    "Session",
]
