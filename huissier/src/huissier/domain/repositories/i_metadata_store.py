"""
Metadata store interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from huissier.domain.entities.authorization_record import AuthorizationRecord


class IMetadataStore(ABC):
    """
    Interface to the relational backend that owns authorization data.

    The core only reads authorization records and sets the per-request
    identity context; administration methods back the admin API.
    """

    @abstractmethod
    async def lookup_authorization(
        self, wallet_address: str
    ) -> Optional[AuthorizationRecord]:
        """
        Get authorization record for a wallet.

        Args:
            wallet_address: Wallet address (base58)

        Returns:
            AuthorizationRecord if the wallet is known, None otherwise
        """

    @abstractmethod
    async def set_request_identity(self, wallet_address: str) -> None:
        """
        Establish row-level-security context for the current request.

        Must only affect the calling request's own transaction.

        Args:
            wallet_address: Authenticated wallet address
        """

    @abstractmethod
    async def list_authorizations(self) -> List[AuthorizationRecord]:
        """
        List all authorization records, newest first.

        Returns:
            List of records (active and inactive)
        """

    @abstractmethod
    async def add_authorization(
        self, record: AuthorizationRecord
    ) -> AuthorizationRecord:
        """
        Store new authorization record.

        Args:
            record: Record to create

        Returns:
            Created record

        Raises:
            DuplicateEntityError: If wallet already has a record
        """

    @abstractmethod
    async def update_authorization(
        self, wallet_address: str, changes: dict
    ) -> Optional[AuthorizationRecord]:
        """
        Apply partial update to a record.

        Args:
            wallet_address: Wallet whose record is updated
            changes: Subset of name, role, is_active, notes

        Returns:
            Updated record, or None if not found
        """
