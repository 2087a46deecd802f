"""
Repository interfaces.
"""

from huissier.domain.repositories.i_metadata_store import IMetadataStore
from huissier.domain.repositories.i_session_store import ISessionStore

__all__ = [
    "IMetadataStore",
    "ISessionStore",
]
