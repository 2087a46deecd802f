"""
Authorized wallet management API routes (admin only).

Provides endpoints for user management:
- GET /users - List authorized wallets
- POST /users - Grant a wallet access
- PUT /users/{wallet_address} - Update name, role, status or notes
- DELETE /users/{wallet_address} - Deactivate a wallet
"""

from typing import List

from fastapi import APIRouter, Depends, status

from huissier.application.use_cases.add_authorized_wallet import (
    AddAuthorizedWallet,
    AddAuthorizedWalletCommand,
)
from huissier.application.use_cases.list_authorized_wallets import (
    ListAuthorizedWallets,
)
from huissier.application.use_cases.update_authorized_wallet import (
    DeactivateAuthorizedWallet,
    UpdateAuthorizedWallet,
    UpdateAuthorizedWalletCommand,
)
from huissier.di.dependencies import (
    get_add_authorized_wallet,
    get_deactivate_authorized_wallet,
    get_list_authorized_wallets,
    get_update_authorized_wallet,
)
from huissier.domain.entities.authenticated_identity import AuthenticatedIdentity
from huissier.domain.value_objects.role import Role
from huissier.presentation.api.middleware.auth import require_role
from huissier.presentation.schemas.user_schemas import (
    AddAuthorizedWalletRequest,
    AuthorizedWalletResponse,
    MessageResponse,
    UpdateAuthorizedWalletRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])

require_admin = require_role(Role.ADMIN)


@router.get(
    "",
    response_model=List[AuthorizedWalletResponse],
    status_code=status.HTTP_200_OK,
    summary="List authorized wallets",
)
async def list_users(
    identity: AuthenticatedIdentity = Depends(require_admin),
    use_case: ListAuthorizedWallets = Depends(get_list_authorized_wallets),
) -> List[AuthorizedWalletResponse]:
    records = await use_case.execute()
    return [AuthorizedWalletResponse.model_validate(r) for r in records]


@router.post(
    "",
    response_model=AuthorizedWalletResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add authorized wallet",
    description="Grant a wallet access with the given role",
)
async def add_user(
    request: AddAuthorizedWalletRequest,
    identity: AuthenticatedIdentity = Depends(require_admin),
    use_case: AddAuthorizedWallet = Depends(get_add_authorized_wallet),
) -> AuthorizedWalletResponse:
    """
    Add authorized wallet.

    Args:
        request: Wallet address, role, name and notes
        identity: Calling administrator
        use_case: AddAuthorizedWallet use case (injected)

    Returns:
        Created record

    Raises:
        ValidationError: 400 if address or role is invalid
        DuplicateEntityError: 409 if wallet already exists
    """
    record = await use_case.execute(
        AddAuthorizedWalletCommand(
            wallet_address=request.wallet_address.strip(),
            role=request.role,
            name=request.name,
            notes=request.notes,
            added_by=identity.wallet_address,
        )
    )
    return AuthorizedWalletResponse.model_validate(record)


@router.put(
    "/{wallet_address}",
    response_model=AuthorizedWalletResponse,
    status_code=status.HTTP_200_OK,
    summary="Update authorized wallet",
)
async def update_user(
    wallet_address: str,
    request: UpdateAuthorizedWalletRequest,
    identity: AuthenticatedIdentity = Depends(require_admin),
    use_case: UpdateAuthorizedWallet = Depends(get_update_authorized_wallet),
) -> AuthorizedWalletResponse:
    """
    Update authorized wallet.

    Raises:
        ValidationError: 400 if role is invalid
        EntityNotFoundError: 404 if wallet is unknown
    """
    record = await use_case.execute(
        UpdateAuthorizedWalletCommand(
            wallet_address=wallet_address,
            **request.model_dump(exclude_unset=True),
        )
    )
    return AuthorizedWalletResponse.model_validate(record)


@router.delete(
    "/{wallet_address}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Deactivate authorized wallet",
    description="Soft delete: the record is kept with is_active=false",
)
async def deactivate_user(
    wallet_address: str,
    identity: AuthenticatedIdentity = Depends(require_admin),
    use_case: DeactivateAuthorizedWallet = Depends(
        get_deactivate_authorized_wallet
    ),
) -> MessageResponse:
    """
    Deactivate authorized wallet.

    Raises:
        ValidationError: 400 if an admin targets their own wallet
        EntityNotFoundError: 404 if wallet is unknown
    """
    await use_case.execute(
        wallet_address=wallet_address,
        requested_by=identity.wallet_address,
    )
    return MessageResponse(message="User deactivated successfully")
