"""
Client-local session stores.
"""

from huissier.infrastructure.session.file_session_store import FileSessionStore
from huissier.infrastructure.session.memory_session_store import (
    InMemorySessionStore,
)

__all__ = [
    "FileSessionStore",
    "InMemorySessionStore",
]
