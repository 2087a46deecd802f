"""
Authorization record entity - who may use the system, and as what.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from huissier.domain.value_objects.role import Role


@dataclass
class AuthorizationRecord:
    """
    Authorized wallet as stored by the metadata store.

    Business rules:
    - Wallet address is required and unique
    - Inactive records never authorize (soft-deleted wallets)
    - Role strings are normalized to Role; unknown values become NONE
    """

    wallet_address: str = field(default="")
    role: Role = field(default=Role.VIEWER)
    name: str = field(default="")
    is_active: bool = field(default=True)
    notes: Optional[str] = field(default=None)
    created_by: Optional[str] = field(default=None)
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Validate record after initialization."""
        if not self.wallet_address:
            raise ValueError("Wallet address is required")

        self.role = Role.parse(self.role)
        if self.name is None:
            self.name = ""

    @property
    def grants_access(self) -> bool:
        """Check whether this record authorizes its wallet."""
        return self.is_active and self.role is not Role.NONE

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "wallet_address": self.wallet_address,
            "role": self.role.value,
            "name": self.name,
            "is_active": self.is_active,
            "notes": self.notes,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class AuthorizationResult:
    """Outcome of an authorization lookup for one identity."""

    is_authorized: bool
    role: Role = Role.NONE
    name: str = ""

    @classmethod
    def denied(cls) -> "AuthorizationResult":
        """Fail-closed result used for unknown wallets and backend errors."""
        return cls(is_authorized=False, role=Role.NONE, name="")

    @classmethod
    def from_record(
        cls, record: Optional[AuthorizationRecord]
    ) -> "AuthorizationResult":
        """
        Build result from a stored record.

        Args:
            record: Record from the metadata store, or None

        Returns:
            Authorized result for active records, denied otherwise
        """
        if record is None or not record.grants_access:
            return cls.denied()
        return cls(is_authorized=True, role=record.role, name=record.name)
