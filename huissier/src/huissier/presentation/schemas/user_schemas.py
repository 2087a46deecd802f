"""
Authorized wallet (user management) API schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from huissier.domain.value_objects.role import Role


class AddAuthorizedWalletRequest(BaseModel):
    """
    Request to grant a wallet access.

    Address format and role are checked by the use case so that both
    report 400 with a readable message.
    """

    wallet_address: str = Field(..., description="Solana wallet address (base58)")
    name: Optional[str] = Field(default=None, max_length=255)
    role: str = Field(default=Role.EDITOR.value, description="admin, editor or viewer")
    notes: Optional[str] = None


class UpdateAuthorizedWalletRequest(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    name: Optional[str] = Field(default=None, max_length=255)
    role: Optional[str] = None
    is_active: Optional[bool] = None
    notes: Optional[str] = None


class AuthorizedWalletResponse(BaseModel):
    """Authorized wallet record."""

    wallet_address: str
    name: str = ""
    role: Role
    is_active: bool
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime

    class Config:
        """Pydantic config."""

        from_attributes = True


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
