"""
Persistence layer - database access and SQLAlchemy models.
"""

from huissier.infrastructure.persistence.database import Database
from huissier.infrastructure.persistence.metadata_store import SqlMetadataStore
from huissier.infrastructure.persistence.models import (
    AuthorizedWalletModel,
    Base,
)

__all__ = [
    "AuthorizedWalletModel",
    "Base",
    "Database",
    "SqlMetadataStore",
]
