"""
Authentication API schemas.
"""

from pydantic import BaseModel, Field

from huissier.domain.value_objects.role import Role

# ================================================================
# Challenge Schemas
# ================================================================


class ChallengeResponse(BaseModel):
    """Challenge message the wallet must sign."""

    action: str = Field(..., description="Action named in the challenge")
    message: str = Field(..., description="Exact text to sign (UTF-8)")
    timestamp: int = Field(
        ..., description="Timestamp embedded in the message (epoch ms)"
    )
    nonce: str = Field(..., description="One-time value embedded in the message")


# ================================================================
# Authorization Schemas
# ================================================================


class AuthorizationResponse(BaseModel):
    """Unsigned authorization preview for a wallet."""

    wallet_address: str
    is_authorized: bool
    role: Role = Role.NONE
    name: str = ""


class IdentityResponse(BaseModel):
    """Authenticated caller."""

    wallet_address: str
    role: Role
    name: str = ""
