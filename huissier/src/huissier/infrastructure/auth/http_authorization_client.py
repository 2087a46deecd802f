"""
HTTP authorization lookup client.

Lets the client preview a wallet's role without a signature by asking
the Huissier API.
"""

from typing import Optional
from urllib.parse import quote

import httpx

from huissier.domain.entities.authorization_record import AuthorizationResult
from huissier.domain.services.i_authorization_lookup import IAuthorizationLookup
from huissier.domain.value_objects.role import Role
from huissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class HttpAuthorizationClient(IAuthorizationLookup):
    """
    Authorization lookup over HTTP.

    Any transport error, non-200 response or unexpected payload is
    reported as denied.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        origin: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize client.

        Args:
            base_url: Huissier API base URL
            timeout: Request timeout in seconds
            origin: Origin header value (API origin guard)
            client: Optional pre-built httpx client (for testing)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.origin = origin
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get (lazily created) HTTP client."""
        if self._client is None:
            headers = {"Origin": self.origin} if self.origin else {}
            self._client = httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, headers=headers
            )
        return self._client

    async def lookup(self, wallet_address: str) -> AuthorizationResult:
        try:
            response = await self.client.get(
                f"/api/auth/authorization/{quote(wallet_address, safe='')}"
            )
        except httpx.HTTPError as e:
            logger.error(f"Authorization lookup request failed: {e}")
            return AuthorizationResult.denied()

        if response.status_code != 200:
            logger.warning(
                f"Authorization lookup returned HTTP {response.status_code}"
            )
            return AuthorizationResult.denied()

        try:
            payload = response.json()
        except ValueError:
            logger.error("Authorization lookup returned invalid JSON")
            return AuthorizationResult.denied()

        if not isinstance(payload, dict) or not payload.get("is_authorized"):
            return AuthorizationResult.denied()

        return AuthorizationResult(
            is_authorized=True,
            role=Role.parse(payload.get("role")),
            name=payload.get("name") or "",
        )

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
