"""
Keypair-file wallet signer for the command-line client.
"""

import asyncio
import json
from pathlib import Path
from typing import Callable, Optional

import base58
from nacl.signing import SigningKey

from huissier.domain.services.i_wallet_signer import (
    IWalletSigner,
    SignatureRejectedError,
)

ConfirmCallback = Callable[[str], bool]


def load_keypair(keypair_path: str) -> SigningKey:
    """
    Load Solana keypair from JSON file.

    Args:
        keypair_path: Path to keypair JSON file (solana-keygen format)

    Returns:
        SigningKey instance for signing operations

    Raises:
        ValueError: If the file is not a 64-byte keypair array
    """
    with open(Path(keypair_path).expanduser(), "r") as f:
        keypair_data = json.load(f)

    if not isinstance(keypair_data, list) or len(keypair_data) != 64:
        raise ValueError(f"Not a Solana keypair file: {keypair_path}")

    # Keypair JSON is array of bytes [secret_key + public_key]
    # First 32 bytes is the secret key
    return SigningKey(bytes(keypair_data[:32]))


class KeypairWalletSigner(IWalletSigner):
    """
    Signs challenges with a local Ed25519 key.

    An optional confirm callback plays the role of the wallet approval
    prompt; returning False rejects the request.
    """

    def __init__(
        self,
        signing_key: SigningKey,
        confirm: Optional[ConfirmCallback] = None,
    ):
        """
        Initialize signer.

        Args:
            signing_key: Ed25519 private key
            confirm: Called with the message text before signing
        """
        self._signing_key = signing_key
        self._confirm = confirm

    @classmethod
    def from_file(
        cls, keypair_path: str, confirm: Optional[ConfirmCallback] = None
    ) -> "KeypairWalletSigner":
        """Create signer from a solana-keygen JSON file."""
        return cls(load_keypair(keypair_path), confirm=confirm)

    @property
    def wallet_address(self) -> str:
        return base58.b58encode(bytes(self._signing_key.verify_key)).decode()

    async def sign_message(self, message: bytes) -> bytes:
        if self._confirm is not None:
            text = message.decode("utf-8", errors="replace")
            approved = await asyncio.to_thread(self._confirm, text)
            if not approved:
                raise SignatureRejectedError()

        return self._signing_key.sign(message).signature
