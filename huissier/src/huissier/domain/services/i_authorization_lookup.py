"""
Authorization lookup service interface.
"""

from abc import ABC, abstractmethod

from huissier.domain.entities.authorization_record import AuthorizationResult


class IAuthorizationLookup(ABC):
    """
    Resolve a wallet to its authorization status.

    Implementations must be idempotent and fail closed: any backend
    error is reported as AuthorizationResult.denied().
    """

    @abstractmethod
    async def lookup(self, wallet_address: str) -> AuthorizationResult:
        """
        Look up authorization for a wallet.

        Args:
            wallet_address: Wallet address (base58)

        Returns:
            AuthorizationResult (denied on unknown wallet or error)
        """
