"""
Domain service interfaces and pure domain services.
"""

from huissier.domain.services.i_authorization_lookup import IAuthorizationLookup
from huissier.domain.services.i_signature_verifier import ISignatureVerifier
from huissier.domain.services.i_wallet_signer import (
    IWalletSigner,
    SignatureRejectedError,
)
from huissier.domain.services.role_gate import has_permission, require_role

__all__ = [
    "IAuthorizationLookup",
    "ISignatureVerifier",
    "IWalletSigner",
    "SignatureRejectedError",
    "has_permission",
    "require_role",
]
