"""
Authenticated identity - request-scoped result of authentication.
"""

from dataclasses import dataclass

from huissier.domain.value_objects.role import Role


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """
    Caller identity for the duration of one request.

    Produced only by RequestAuthenticator after the signature was
    re-verified and the wallet re-confirmed as active. Never cached
    and never persisted.
    """

    wallet_address: str
    role: Role
    name: str = ""

    def to_dict(self) -> dict:
        """Convert identity to dictionary representation."""
        return {
            "wallet_address": self.wallet_address,
            "role": self.role.value,
            "name": self.name,
        }
