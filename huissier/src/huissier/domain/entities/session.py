"""
Session entity - client-held proof of wallet ownership.
"""

import base64
import binascii
from dataclasses import dataclass, field

from huissier.domain.exceptions.auth import LegacySignatureFormatError
from huissier.domain.value_objects.role import Role

SESSION_MAX_AGE_MS = 24 * 60 * 60 * 1000


def is_legacy_signature(encoded: str) -> bool:
    """
    Detect the old comma-separated byte array signature encoding.

    base64 never contains a comma, so one comma is enough.
    """
    return "," in encoded


@dataclass
class Session:
    """
    Signed challenge bundle reusable for a bounded time.

    Business rules:
    - Lifetime capped at SESSION_MAX_AGE_MS from timestamp_ms
    - Message and signature must both be present
    - Exactly one session per connected wallet
    """

    wallet_address: str
    message: str
    signature: bytes
    timestamp_ms: int
    role: Role = field(default=Role.NONE)
    name: str = field(default="")

    def __post_init__(self):
        self.role = Role.parse(self.role)

    def age_ms(self, now_ms: int) -> int:
        """Milliseconds elapsed since the challenge was signed."""
        return now_ms - self.timestamp_ms

    def is_valid(
        self,
        now_ms: int,
        max_age_ms: int = SESSION_MAX_AGE_MS,
    ) -> bool:
        """
        Check whether session may still be used.

        Args:
            now_ms: Current time in epoch milliseconds
            max_age_ms: Maximum session lifetime

        Returns:
            True if fresh and complete, False otherwise
        """
        if not self.message or not self.signature or not self.wallet_address:
            return False
        return self.age_ms(now_ms) < max_age_ms

    def belongs_to(self, wallet_address: str) -> bool:
        """Check whether session was signed by given wallet."""
        return self.wallet_address == wallet_address

    @property
    def encoded_signature(self) -> str:
        """Signature in its transport form (base64)."""
        return base64.b64encode(self.signature).decode("ascii")

    def to_record(self) -> dict:
        """Convert session to its persisted form."""
        return {
            "wallet_address": self.wallet_address,
            "signature": self.encoded_signature,
            "message": self.message,
            "timestamp": self.timestamp_ms,
            "role": self.role.value,
            "name": self.name,
        }

    @classmethod
    def from_record(cls, record: dict) -> "Session":
        """
        Rebuild session from its persisted form.

        Args:
            record: Dictionary previously produced by to_record()

        Returns:
            Session instance

        Raises:
            LegacySignatureFormatError: If signature uses the old format
            ValueError: If the record is incomplete or corrupted
        """
        try:
            encoded = record["signature"]
            wallet_address = record["wallet_address"]
            message = record["message"]
            timestamp = record["timestamp"]
        except (KeyError, TypeError) as e:
            raise ValueError(f"Incomplete session record: {e}") from e

        if not isinstance(encoded, str) or not encoded:
            raise ValueError("Session signature is missing")

        if is_legacy_signature(encoded):
            raise LegacySignatureFormatError()

        try:
            signature = base64.b64decode(encoded, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Session signature is not base64: {e}") from e

        if isinstance(timestamp, bool) or not isinstance(timestamp, int):
            raise ValueError("Session timestamp must be an integer")

        return cls(
            wallet_address=str(wallet_address),
            message=str(message),
            signature=signature,
            timestamp_ms=timestamp,
            role=Role.parse(record.get("role")),
            name=record.get("name") or "",
        )
