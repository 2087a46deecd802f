"""
Update and Deactivate Authorized Wallet use cases.
"""

from dataclasses import dataclass
from typing import Any, Optional

from huissier.domain.entities.authorization_record import AuthorizationRecord
from huissier.domain.exceptions import EntityNotFoundError, ValidationError
from huissier.domain.repositories.i_metadata_store import IMetadataStore
from huissier.domain.value_objects.role import Role
from huissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()
NON_NULLABLE_FIELDS = ("role", "is_active")


@dataclass
class UpdateAuthorizedWalletCommand:
    """
    Partial update.

    Fields left UNSET are not touched. An explicit None clears name or
    notes.
    """

    wallet_address: str
    name: Optional[str] = UNSET
    role: Optional[str] = UNSET
    is_active: Optional[bool] = UNSET
    notes: Optional[str] = UNSET

    def changes(self) -> dict:
        """Fields explicitly provided by the caller."""
        fields = {
            "name": self.name,
            "role": self.role,
            "is_active": self.is_active,
            "notes": self.notes,
        }
        return {k: v for k, v in fields.items() if v is not UNSET}


class UpdateAuthorizedWallet:
    """
    Change name, role, status or notes of an authorized wallet.

    Role changes take effect on the wallet's next request, since every
    request re-reads authorization.
    """

    def __init__(self, metadata_store: IMetadataStore):
        self.metadata_store = metadata_store

    async def execute(
        self, command: UpdateAuthorizedWalletCommand
    ) -> AuthorizationRecord:
        """
        Execute update.

        Raises:
            ValidationError: If role is not assignable, or role or
                is_active is explicitly null
            EntityNotFoundError: If wallet has no record
        """
        changes = command.changes()

        for key in NON_NULLABLE_FIELDS:
            if key in changes and changes[key] is None:
                raise ValidationError(field=key, reason="Cannot be null")

        if "role" in changes:
            role = Role.parse(changes["role"])
            if role not in Role.assignable():
                raise ValidationError(field="role", reason="Invalid role")
            changes["role"] = role.value

        updated = await self.metadata_store.update_authorization(
            command.wallet_address, changes
        )
        if updated is None:
            raise EntityNotFoundError("Authorized wallet", command.wallet_address)

        logger.info(
            f"Wallet {command.wallet_address} updated: {sorted(changes)}"
        )
        return updated


class DeactivateAuthorizedWallet:
    """
    Revoke a wallet's access without deleting its record.

    Business rules:
    - Administrators cannot deactivate themselves
    """

    def __init__(self, metadata_store: IMetadataStore):
        self.metadata_store = metadata_store

    async def execute(
        self, wallet_address: str, requested_by: str
    ) -> AuthorizationRecord:
        """
        Execute deactivation.

        Args:
            wallet_address: Wallet to deactivate
            requested_by: Wallet of the administrator making the request

        Returns:
            Deactivated record

        Raises:
            ValidationError: If an admin targets their own wallet
            EntityNotFoundError: If wallet has no record
        """
        if wallet_address == requested_by:
            raise ValidationError(
                field="wallet_address",
                reason="Cannot deactivate your own account",
            )

        updated = await self.metadata_store.update_authorization(
            wallet_address, {"is_active": False}
        )
        if updated is None:
            raise EntityNotFoundError("Authorized wallet", wallet_address)

        logger.info(f"Wallet {wallet_address} deactivated by {requested_by}")
        return updated
