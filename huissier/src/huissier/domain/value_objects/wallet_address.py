"""
WalletAddress value object - Immutable Solana wallet address.
"""

from dataclasses import dataclass

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


@dataclass(frozen=True)
class WalletAddress:
    """
    Value object representing a well-formed Solana wallet address.

    Business rules:
    - Must be a base58 encoded string
    - Length between 32-44 characters
    - Immutable once created

    Only the textual shape is checked here; whether the address decodes
    to a usable Ed25519 key is the signature verifier's concern.
    """

    address: str

    def __post_init__(self):
        """Validate wallet address on creation."""
        if not self.address:
            raise ValueError("Wallet address cannot be empty")

        if len(self.address) < 32 or len(self.address) > 44:
            raise ValueError(f"Invalid wallet address length: {len(self.address)}")

        if not all(c in BASE58_ALPHABET for c in self.address):
            raise ValueError("Wallet address contains invalid characters")

    @classmethod
    def is_valid(cls, address: str) -> bool:
        """Check address format without raising."""
        try:
            cls(address)
        except (TypeError, ValueError):
            return False
        return True

    def truncated(self) -> str:
        """Return truncated address for display (e.g., 'ABC...XYZ')."""
        return f"{self.address[:6]}...{self.address[-4:]}"

    def __str__(self) -> str:
        return self.address
