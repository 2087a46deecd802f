"""
Wallet authentication infrastructure.
"""

from huissier.infrastructure.auth.http_authorization_client import (
    HttpAuthorizationClient,
)
from huissier.infrastructure.auth.keypair_wallet_signer import (
    KeypairWalletSigner,
    load_keypair,
)
from huissier.infrastructure.auth.session_codec import (
    AUTH_HEADERS,
    DecodedCredentials,
    SessionCodec,
)
from huissier.infrastructure.auth.solana_signature_verifier import (
    SolanaSignatureVerifier,
)

__all__ = [
    "AUTH_HEADERS",
    "DecodedCredentials",
    "HttpAuthorizationClient",
    "KeypairWalletSigner",
    "SessionCodec",
    "SolanaSignatureVerifier",
    "load_keypair",
]
