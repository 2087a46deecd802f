"""
Solana signature verifier.

Implements detached wallet signature verification using Ed25519.
"""

import base58
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

from huissier.domain.services.i_signature_verifier import ISignatureVerifier
from huissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

MESSAGE_ENCODING = "utf-8"


class SolanaSignatureVerifier(ISignatureVerifier):
    """
    Solana wallet signature verification using Ed25519.

    Fails closed: malformed keys, wrong-length signatures and any other
    error are reported as an invalid signature.
    """

    async def verify(
        self,
        message: str,
        signature: bytes,
        wallet_address: str,
    ) -> bool:
        """
        Verify Solana wallet signature.

        Args:
            message: Original message that was signed
            signature: Raw 64-byte signature
            wallet_address: Solana wallet address (base58)

        Returns:
            True if signature is valid, False otherwise
        """
        try:
            public_key_bytes = base58.b58decode(wallet_address)
            verify_key = VerifyKey(public_key_bytes)

            message_bytes = message.encode(MESSAGE_ENCODING)

            verify_key.verify(message_bytes, bytes(signature))
            return True

        except BadSignatureError:
            logger.debug(f"Signature mismatch for wallet {wallet_address}")
            return False
        except Exception as e:
            logger.debug(
                f"Signature verification failed for wallet {wallet_address}: "
                f"{type(e).__name__}: {e}"
            )
            return False
