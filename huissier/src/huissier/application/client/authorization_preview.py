"""
Authorization preview - role/name shown while an address is typed.
"""

from typing import Callable, Optional

from huissier.application.client.debouncer import Debouncer
from huissier.domain.entities.authorization_record import AuthorizationResult
from huissier.domain.services.i_authorization_lookup import IAuthorizationLookup
from huissier.domain.value_objects.wallet_address import WalletAddress

DEFAULT_PREVIEW_DELAY_SECONDS = 0.5

PreviewListener = Callable[[str, AuthorizationResult], None]


class AuthorizationPreview:
    """
    Debounced unsigned authorization lookup.

    Addresses that are not well-formed never reach the lookup; they
    clear the preview immediately.
    """

    def __init__(
        self,
        authorization_lookup: IAuthorizationLookup,
        delay_seconds: float = DEFAULT_PREVIEW_DELAY_SECONDS,
        listener: Optional[PreviewListener] = None,
    ):
        self.authorization_lookup = authorization_lookup
        self.listener = listener
        self.address: Optional[str] = None
        self.result: Optional[AuthorizationResult] = None
        self._debouncer: Debouncer[str] = Debouncer(delay_seconds, self._refresh)

    def update(self, address: str) -> None:
        """Register new input; the lookup fires after the delay."""
        address = address.strip()
        if not WalletAddress.is_valid(address):
            self._debouncer.cancel()
            self.address = None
            self.result = None
            return
        self._debouncer.schedule(address)

    def cancel(self) -> None:
        self._debouncer.cancel()

    async def wait(self) -> None:
        await self._debouncer.wait()

    async def _refresh(self, address: str) -> None:
        result = await self.authorization_lookup.lookup(address)
        self.address = address
        self.result = result
        if self.listener is not None:
            self.listener(address, result)
