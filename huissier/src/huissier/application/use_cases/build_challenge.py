"""
Build Challenge use case.
"""

import secrets
from typing import Callable

from huissier.domain.entities.challenge import DEFAULT_APP_TITLE, Challenge

NonceFactory = Callable[[], str]


def generate_nonce() -> str:
    """Random URL-safe nonce for one challenge."""
    return secrets.token_urlsafe(12)


class ChallengeBuilder:
    """
    Build the message a wallet must sign.

    Structure is fixed, content is not: every call draws a new nonce so
    two challenges for the same action and millisecond still differ.
    """

    def __init__(
        self,
        title: str = DEFAULT_APP_TITLE,
        nonce_factory: NonceFactory = generate_nonce,
    ):
        """
        Initialize builder.

        Args:
            title: Product name shown in the challenge preamble
            nonce_factory: Source of nonces (override in tests)
        """
        self.title = title
        self.nonce_factory = nonce_factory

    def create(self, action: str, timestamp_ms: int) -> Challenge:
        """
        Create challenge entity.

        Args:
            action: What the signature authorizes (e.g. "login")
            timestamp_ms: Signing time in epoch milliseconds

        Returns:
            Challenge with a fresh nonce
        """
        return Challenge(
            action=action,
            timestamp_ms=int(timestamp_ms),
            nonce=self.nonce_factory(),
        )

    def build(self, action: str, timestamp_ms: int) -> str:
        """
        Build challenge message text.

        Args:
            action: What the signature authorizes (e.g. "login")
            timestamp_ms: Signing time in epoch milliseconds

        Returns:
            Message to be UTF-8 encoded and signed
        """
        return self.create(action, timestamp_ms).render(self.title)
