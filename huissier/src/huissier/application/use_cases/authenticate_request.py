"""
Authenticate Request use case.

Re-verifies the caller's signed challenge on every request. There is no
server-side session: the headers are a bearer credential that is checked
cryptographically each time.
"""

import time
from typing import Callable, Mapping

from huissier.domain.entities.authenticated_identity import AuthenticatedIdentity
from huissier.domain.exceptions.auth import (
    AuthenticationError,
    AuthorizationError,
    InvalidSignatureError,
    NotAuthorizedError,
    TimestampExpiredError,
)
from huissier.domain.repositories.i_metadata_store import IMetadataStore
from huissier.domain.services.i_authorization_lookup import IAuthorizationLookup
from huissier.domain.services.i_signature_verifier import ISignatureVerifier
from huissier.infrastructure.auth.session_codec import SessionCodec
from huissier.infrastructure.monitoring import metrics
from huissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMESTAMP_WINDOW_MS = 30 * 60 * 1000

Clock = Callable[[], int]


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


class RequestAuthenticator:
    """
    Turn request headers into an AuthenticatedIdentity.

    Business rules:
    - All four auth headers required
    - |now - timestamp| must be below the window (tolerates clock skew
      in both directions)
    - Signature must verify against the decoded message and wallet
    - Wallet must be authorized at the time of the request
    - Request identity context is set in the metadata store on success
    """

    def __init__(
        self,
        signature_verifier: ISignatureVerifier,
        authorization_lookup: IAuthorizationLookup,
        metadata_store: IMetadataStore,
        codec: SessionCodec | None = None,
        timestamp_window_ms: int = DEFAULT_TIMESTAMP_WINDOW_MS,
        clock: Clock = now_ms,
    ):
        """
        Initialize use case with dependencies.

        Args:
            signature_verifier: Detached signature verification
            authorization_lookup: Wallet -> role resolution
            metadata_store: Store receiving the request identity
            codec: Header codec
            timestamp_window_ms: Accepted timestamp skew
            clock: Time source in epoch milliseconds
        """
        self.signature_verifier = signature_verifier
        self.authorization_lookup = authorization_lookup
        self.metadata_store = metadata_store
        self.codec = codec or SessionCodec()
        self.timestamp_window_ms = timestamp_window_ms
        self.clock = clock

    async def authenticate(
        self, headers: Mapping[str, str]
    ) -> AuthenticatedIdentity:
        """
        Execute request authentication.

        Args:
            headers: Inbound request headers

        Returns:
            AuthenticatedIdentity for this request

        Raises:
            MissingHeadersError: If an auth header is absent
            MalformedHeaderError: If an auth header cannot be decoded
            LegacySignatureFormatError: If signature uses the old format
            TimestampExpiredError: If timestamp is outside the window
            InvalidSignatureError: If signature does not verify
            NotAuthorizedError: If the wallet is not authorized
        """
        try:
            identity = await self._authenticate(headers)
        except (AuthenticationError, AuthorizationError) as e:
            metrics.auth_attempts_total.labels(outcome=e.code).inc()
            logger.warning(f"Authentication rejected: {e.code}: {e.message}")
            raise

        metrics.auth_attempts_total.labels(outcome="SUCCESS").inc()
        logger.debug(
            f"Authenticated wallet {identity.wallet_address} as {identity.role}"
        )
        return identity

    async def _authenticate(
        self, headers: Mapping[str, str]
    ) -> AuthenticatedIdentity:
        credentials = self.codec.decode(headers)

        skew_ms = self.clock() - credentials.timestamp_ms
        if abs(skew_ms) >= self.timestamp_window_ms:
            raise TimestampExpiredError(skew_ms=skew_ms)

        is_valid = await self.signature_verifier.verify(
            message=credentials.message,
            signature=credentials.signature,
            wallet_address=credentials.wallet_address,
        )
        if not is_valid:
            raise InvalidSignatureError()

        auth = await self.authorization_lookup.lookup(credentials.wallet_address)
        if not auth.is_authorized:
            raise NotAuthorizedError(credentials.wallet_address)

        await self.metadata_store.set_request_identity(credentials.wallet_address)

        return AuthenticatedIdentity(
            wallet_address=credentials.wallet_address,
            role=auth.role,
            name=auth.name,
        )
