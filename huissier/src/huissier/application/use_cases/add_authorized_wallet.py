"""
Add Authorized Wallet use case.
"""

from dataclasses import dataclass
from typing import Optional

from huissier.domain.entities.authorization_record import AuthorizationRecord
from huissier.domain.exceptions import ValidationError
from huissier.domain.repositories.i_metadata_store import IMetadataStore
from huissier.domain.value_objects.role import Role
from huissier.domain.value_objects.wallet_address import WalletAddress
from huissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


@dataclass
class AddAuthorizedWalletCommand:
    """Command to grant a wallet access."""

    wallet_address: str
    role: str = Role.EDITOR.value
    name: Optional[str] = None
    notes: Optional[str] = None
    added_by: Optional[str] = None


class AddAuthorizedWallet:
    """
    Grant a wallet access to the system.

    Business rules:
    - Wallet address must be a well-formed base58 address
    - Role must be admin, editor or viewer
    - A wallet can only be added once
    """

    def __init__(self, metadata_store: IMetadataStore):
        """
        Initialize use case with dependencies.

        Args:
            metadata_store: Store holding authorization records
        """
        self.metadata_store = metadata_store

    async def execute(
        self, command: AddAuthorizedWalletCommand
    ) -> AuthorizationRecord:
        """
        Execute wallet grant.

        Args:
            command: Wallet, role and audit fields

        Returns:
            Created AuthorizationRecord

        Raises:
            ValidationError: If address or role is invalid
            DuplicateEntityError: If wallet already exists
        """
        if not WalletAddress.is_valid(command.wallet_address):
            raise ValidationError(
                field="wallet_address", reason="Invalid wallet address format"
            )

        role = Role.parse(command.role)
        if role not in Role.assignable():
            raise ValidationError(field="role", reason="Invalid role")

        record = AuthorizationRecord(
            wallet_address=command.wallet_address,
            role=role,
            name=command.name or "",
            is_active=True,
            notes=command.notes,
            created_by=command.added_by,
        )

        created = await self.metadata_store.add_authorization(record)
        logger.info(
            f"Wallet {created.wallet_address} granted {created.role} "
            f"by {command.added_by or 'system'}"
        )
        return created
