"""
Authorization Lookup use case.
"""

from huissier.domain.entities.authorization_record import AuthorizationResult
from huissier.domain.repositories.i_metadata_store import IMetadataStore
from huissier.domain.services.i_authorization_lookup import IAuthorizationLookup
from huissier.infrastructure.monitoring import metrics
from huissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class AuthorizationLookup(IAuthorizationLookup):
    """
    Resolve a wallet's authorization from the metadata store.

    Business rules:
    - Re-queried on every call, never cached (revocation is immediate)
    - Unknown and inactive wallets are not authorized
    - Backend errors deny access and are not retried
    """

    def __init__(self, metadata_store: IMetadataStore):
        """
        Initialize use case with dependencies.

        Args:
            metadata_store: Store holding authorization records
        """
        self.metadata_store = metadata_store

    async def lookup(self, wallet_address: str) -> AuthorizationResult:
        """
        Execute authorization lookup.

        Args:
            wallet_address: Wallet address (base58)

        Returns:
            AuthorizationResult (denied on any failure)
        """
        try:
            record = await self.metadata_store.lookup_authorization(wallet_address)
        except Exception as e:
            logger.error(
                f"Error checking wallet authorization for {wallet_address}: {e}",
                exc_info=True,
            )
            metrics.authorization_lookups_total.labels(result="error").inc()
            return AuthorizationResult.denied()

        result = AuthorizationResult.from_record(record)
        metrics.authorization_lookups_total.labels(
            result="authorized" if result.is_authorized else "denied"
        ).inc()
        return result
