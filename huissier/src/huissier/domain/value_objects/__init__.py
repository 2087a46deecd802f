"""
Domain value objects.
"""

from huissier.domain.value_objects.role import ROLE_LEVELS, Role
from huissier.domain.value_objects.wallet_address import WalletAddress

__all__ = [
    "ROLE_LEVELS",
    "Role",
    "WalletAddress",
]
