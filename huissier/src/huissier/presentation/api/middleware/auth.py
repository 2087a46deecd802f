"""
Authentication dependencies for wallet-signed requests.
"""

from typing import Callable

from fastapi import Depends, Request

from huissier.application.use_cases.authenticate_request import (
    RequestAuthenticator,
)
from huissier.di.dependencies import get_request_authenticator
from huissier.domain.entities.authenticated_identity import AuthenticatedIdentity
from huissier.domain.exceptions.auth import InsufficientPermissionsError
from huissier.domain.services.role_gate import require_role as enforce_role
from huissier.domain.value_objects.role import Role
from huissier.infrastructure.monitoring import metrics
from huissier.infrastructure.monitoring.logger import get_logger, set_request_wallet

logger = get_logger(__name__)


async def get_authenticated_identity(
    request: Request,
    authenticator: RequestAuthenticator = Depends(get_request_authenticator),
) -> AuthenticatedIdentity:
    """
    Authenticate the current request from its wallet headers.

    Errors propagate as domain exceptions and are mapped to 401/403 by
    the exception handler.

    Args:
        request: Incoming request
        authenticator: RequestAuthenticator (injected)

    Returns:
        AuthenticatedIdentity for this request
    """
    identity = await authenticator.authenticate(request.headers)
    request.state.identity = identity
    set_request_wallet(identity.wallet_address)
    return identity


def require_role(required: Role) -> Callable:
    """
    Build a dependency enforcing a minimum role.

    Usage:
        @router.get("/users")
        async def list_users(
            identity: AuthenticatedIdentity = Depends(require_role(Role.ADMIN)),
        ): ...

    Args:
        required: Minimum role

    Returns:
        FastAPI dependency returning the AuthenticatedIdentity
    """

    async def dependency(
        identity: AuthenticatedIdentity = Depends(get_authenticated_identity),
    ) -> AuthenticatedIdentity:
        try:
            enforce_role(identity.role, required)
        except InsufficientPermissionsError:
            metrics.role_gate_denials_total.labels(
                required_role=required.value
            ).inc()
            logger.warning(
                f"Wallet {identity.wallet_address} ({identity.role}) "
                f"denied: {required} required"
            )
            raise
        return identity

    return dependency
