"""
Authentication API routes.

Provides endpoints for the wallet sign-in flow:
- GET /auth/challenge - Challenge message to sign
- GET /auth/authorization/{wallet_address} - Unsigned authorization preview
- GET /auth/me - Identity of the signed-in caller
"""

from fastapi import APIRouter, Depends, Query, status

from huissier.application.use_cases.authenticate_request import now_ms
from huissier.application.use_cases.build_challenge import ChallengeBuilder
from huissier.di.dependencies import (
    get_authorization_lookup,
    get_challenge_builder,
)
from huissier.domain.entities.authenticated_identity import AuthenticatedIdentity
from huissier.domain.exceptions import ValidationError
from huissier.domain.services.i_authorization_lookup import IAuthorizationLookup
from huissier.domain.value_objects.role import Role
from huissier.domain.value_objects.wallet_address import WalletAddress
from huissier.presentation.api.middleware.auth import require_role
from huissier.presentation.schemas.auth_schemas import (
    AuthorizationResponse,
    ChallengeResponse,
    IdentityResponse,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get(
    "/challenge",
    response_model=ChallengeResponse,
    status_code=status.HTTP_200_OK,
    summary="Get challenge message",
    description="Build a fresh challenge for the wallet to sign",
)
async def get_challenge(
    action: str = Query(default="login", max_length=64),
    builder: ChallengeBuilder = Depends(get_challenge_builder),
) -> ChallengeResponse:
    """
    Build challenge message.

    The client signs the returned message verbatim and sends it back
    (base64) with every authenticated request.

    Args:
        action: Action named in the challenge
        builder: ChallengeBuilder (injected)

    Returns:
        Message, timestamp and nonce

    Raises:
        ValidationError: 400 if action is empty or multi-line
    """
    try:
        challenge = builder.create(action, now_ms())
    except ValueError as e:
        raise ValidationError(field="action", reason=str(e)) from e

    return ChallengeResponse(
        action=challenge.action,
        message=challenge.render(builder.title),
        timestamp=challenge.timestamp_ms,
        nonce=challenge.nonce,
    )


@router.get(
    "/authorization/{wallet_address}",
    response_model=AuthorizationResponse,
    status_code=status.HTTP_200_OK,
    summary="Preview wallet authorization",
    description="Role and name of a wallet, without requiring a signature",
)
async def get_authorization(
    wallet_address: str,
    lookup: IAuthorizationLookup = Depends(get_authorization_lookup),
) -> AuthorizationResponse:
    """
    Look up wallet authorization without a signature.

    Only used to show the user what they will be signed in as; it grants
    nothing by itself.

    Raises:
        ValidationError: 400 if address is not a valid base58 address
    """
    if not WalletAddress.is_valid(wallet_address):
        raise ValidationError(
            field="wallet_address", reason="Invalid wallet address format"
        )

    result = await lookup.lookup(wallet_address)

    return AuthorizationResponse(
        wallet_address=wallet_address,
        is_authorized=result.is_authorized,
        role=result.role,
        name=result.name,
    )


@router.get(
    "/me",
    response_model=IdentityResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current identity",
    description="Identity resolved from the request's wallet signature",
)
async def get_me(
    identity: AuthenticatedIdentity = Depends(require_role(Role.VIEWER)),
) -> IdentityResponse:
    return IdentityResponse(**identity.to_dict())
