"""
Application use cases.
"""

from huissier.application.use_cases.add_authorized_wallet import (
    AddAuthorizedWallet,
    AddAuthorizedWalletCommand,
)
from huissier.application.use_cases.authenticate_request import (
    RequestAuthenticator,
    now_ms,
)
from huissier.application.use_cases.build_challenge import ChallengeBuilder
from huissier.application.use_cases.list_authorized_wallets import (
    ListAuthorizedWallets,
)
from huissier.application.use_cases.lookup_authorization import (
    AuthorizationLookup,
)
from huissier.application.use_cases.update_authorized_wallet import (
    DeactivateAuthorizedWallet,
    UpdateAuthorizedWallet,
    UpdateAuthorizedWalletCommand,
)

__all__ = [
    "AddAuthorizedWallet",
    "AddAuthorizedWalletCommand",
    "AuthorizationLookup",
    "ChallengeBuilder",
    "DeactivateAuthorizedWallet",
    "ListAuthorizedWallets",
    "RequestAuthenticator",
    "UpdateAuthorizedWallet",
    "UpdateAuthorizedWalletCommand",
    "now_ms",
]
