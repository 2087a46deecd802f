"""
FastAPI dependency injection.

Provides dependencies for FastAPI routes using the DI container.
Every session-scoped dependency shares the request's single database
session, so the request identity set during authentication applies to
all queries of that request.
"""

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from huissier.di.container import get_container

# ================================================================
# Database Dependencies
# ================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get database session dependency.

    Yields async database session from container.
    Session is committed and closed after request.
    """
    container = get_container()
    async with container.database.session() as session:
        yield session


# ================================================================
# Service Dependencies
# ================================================================


def get_challenge_builder():
    """Get ChallengeBuilder dependency."""
    return get_container().challenge_builder


def get_authorization_lookup(
    session: AsyncSession = Depends(get_db_session),
):
    """Get AuthorizationLookup dependency."""
    return get_container().get_authorization_lookup(session)


def get_request_authenticator(
    session: AsyncSession = Depends(get_db_session),
):
    """Get RequestAuthenticator dependency."""
    return get_container().get_request_authenticator(session)


# ================================================================
# Use Case Dependencies
# ================================================================


def get_list_authorized_wallets(
    session: AsyncSession = Depends(get_db_session),
):
    """Get ListAuthorizedWallets use case dependency."""
    return get_container().get_list_authorized_wallets(session)


def get_add_authorized_wallet(
    session: AsyncSession = Depends(get_db_session),
):
    """Get AddAuthorizedWallet use case dependency."""
    return get_container().get_add_authorized_wallet(session)


def get_update_authorized_wallet(
    session: AsyncSession = Depends(get_db_session),
):
    """Get UpdateAuthorizedWallet use case dependency."""
    return get_container().get_update_authorized_wallet(session)


def get_deactivate_authorized_wallet(
    session: AsyncSession = Depends(get_db_session),
):
    """Get DeactivateAuthorizedWallet use case dependency."""
    return get_container().get_deactivate_authorized_wallet(session)
