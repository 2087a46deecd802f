"""
Client-side session handling.
"""

from huissier.application.client.authorization_preview import (
    AuthorizationPreview,
)
from huissier.application.client.debouncer import Debouncer
from huissier.application.client.session_manager import (
    AuthState,
    ClientSessionManager,
    SessionState,
)

__all__ = [
    "AuthState",
    "AuthorizationPreview",
    "ClientSessionManager",
    "Debouncer",
    "SessionState",
]
