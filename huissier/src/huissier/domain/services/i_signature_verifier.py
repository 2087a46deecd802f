"""
Signature verifier service interface.
"""

from abc import ABC, abstractmethod


class ISignatureVerifier(ABC):
    """
    Abstract service interface for detached wallet signatures.

    Implements signature verification for Web3 authentication:
    - User signs message with wallet private key
    - Backend verifies signature matches wallet address
    """

    @abstractmethod
    async def verify(
        self,
        message: str,
        signature: bytes,
        wallet_address: str,
    ) -> bool:
        """
        Verify wallet signature.

        Args:
            message: Original message that was signed
            signature: Raw signature bytes
            wallet_address: Wallet address claiming ownership

        Returns:
            True if signature is valid, False otherwise (never raises)
        """
