"""
Wallet signer interface (client side).
"""

from abc import ABC, abstractmethod

from huissier.domain.exceptions.base import HuissierException


class SignatureRejectedError(HuissierException):
    """Raised when the wallet owner declines to sign."""

    def __init__(self, reason: str = "User rejected the request"):
        super().__init__(reason, code="SIGNATURE_REJECTED")


class IWalletSigner(ABC):
    """
    Connected wallet able to sign arbitrary messages.

    Signing is user-interactive: it may take arbitrarily long, and a
    declined request must raise SignatureRejectedError rather than hang.
    """

    @property
    @abstractmethod
    def wallet_address(self) -> str:
        """Public key of the connected wallet (base58)."""

    @abstractmethod
    async def sign_message(self, message: bytes) -> bytes:
        """
        Sign message bytes with the wallet's private key.

        Args:
            message: UTF-8 encoded challenge

        Returns:
            Detached Ed25519 signature (64 bytes)

        Raises:
            SignatureRejectedError: If the user declines
        """
