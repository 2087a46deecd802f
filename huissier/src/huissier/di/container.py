"""
Dependency Injection Container for Huissier.

Manages all service instances and their dependencies.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from huissier.application.use_cases.add_authorized_wallet import (
    AddAuthorizedWallet,
)
from huissier.application.use_cases.authenticate_request import (
    RequestAuthenticator,
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
)
from huissier.config.settings import Settings, get_settings
from huissier.domain.repositories.i_metadata_store import IMetadataStore
from huissier.domain.services.i_authorization_lookup import IAuthorizationLookup
from huissier.domain.services.i_signature_verifier import ISignatureVerifier
from huissier.infrastructure.auth.session_codec import SessionCodec
from huissier.infrastructure.auth.solana_signature_verifier import (
    SolanaSignatureVerifier,
)
from huissier.infrastructure.persistence.database import Database
from huissier.infrastructure.persistence.metadata_store import SqlMetadataStore
from huissier.infrastructure.persistence.models import Base


class DIContainer:
    """
    Dependency Injection Container.

    Manages singleton instances of stateless services.
    Uses factory pattern for session-scoped dependencies.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize container with None instances.

        Args:
            settings: Optional Settings instance (for testing)
        """
        self._settings = settings

        # Infrastructure
        self._database: Optional[Database] = None

        # Stateless services
        self._signature_verifier: Optional[ISignatureVerifier] = None
        self._challenge_builder: Optional[ChallengeBuilder] = None
        self._session_codec: Optional[SessionCodec] = None

    @property
    def settings(self) -> Settings:
        """Get settings (explicit or global)."""
        return self._settings or get_settings()

    async def initialize(self) -> None:
        """Initialize all services and establish connections."""
        await self.database.connect()

        # SQLite is only used locally and in tests; create schema on start
        if self.database.is_sqlite:
            await self.database.create_tables(Base.metadata)

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._database:
            await self._database.disconnect()

    # Infrastructure Getters

    @property
    def database(self) -> Database:
        """Get database instance."""
        if self._database is None:
            self._database = Database(
                database_url=self.settings.DATABASE_URL,
                echo=self.settings.DATABASE_ECHO,
            )
        return self._database

    # Service Getters

    @property
    def signature_verifier(self) -> ISignatureVerifier:
        """Get signature verifier (stateless singleton)."""
        if self._signature_verifier is None:
            self._signature_verifier = SolanaSignatureVerifier()
        return self._signature_verifier

    @property
    def challenge_builder(self) -> ChallengeBuilder:
        """Get challenge builder titled with the application name."""
        if self._challenge_builder is None:
            self._challenge_builder = ChallengeBuilder(title=self.settings.APP_TITLE)
        return self._challenge_builder

    @property
    def session_codec(self) -> SessionCodec:
        """Get auth header codec."""
        if self._session_codec is None:
            self._session_codec = SessionCodec()
        return self._session_codec

    # Session-scoped Getters

    def get_metadata_store(self, session: AsyncSession) -> IMetadataStore:
        """Get metadata store bound to one request's session."""
        return SqlMetadataStore(
            session, row_level_security=not self.database.is_sqlite
        )

    def get_authorization_lookup(
        self, session: AsyncSession
    ) -> IAuthorizationLookup:
        """Get authorization lookup use case."""
        return AuthorizationLookup(self.get_metadata_store(session))

    def get_request_authenticator(
        self, session: AsyncSession
    ) -> RequestAuthenticator:
        """
        Get request authenticator.

        Lookup and request identity share the same store, so the
        identity is set on the session the route will query with.
        """
        metadata_store = self.get_metadata_store(session)
        return RequestAuthenticator(
            signature_verifier=self.signature_verifier,
            authorization_lookup=AuthorizationLookup(metadata_store),
            metadata_store=metadata_store,
            codec=self.session_codec,
            timestamp_window_ms=self.settings.auth_timestamp_window_ms,
        )

    def get_list_authorized_wallets(
        self, session: AsyncSession
    ) -> ListAuthorizedWallets:
        return ListAuthorizedWallets(self.get_metadata_store(session))

    def get_add_authorized_wallet(
        self, session: AsyncSession
    ) -> AddAuthorizedWallet:
        return AddAuthorizedWallet(self.get_metadata_store(session))

    def get_update_authorized_wallet(
        self, session: AsyncSession
    ) -> UpdateAuthorizedWallet:
        return UpdateAuthorizedWallet(self.get_metadata_store(session))

    def get_deactivate_authorized_wallet(
        self, session: AsyncSession
    ) -> DeactivateAuthorizedWallet:
        return DeactivateAuthorizedWallet(self.get_metadata_store(session))


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get global DI container instance."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def set_container(container: Optional[DIContainer]) -> None:
    """Replace global DI container (application factory, tests)."""
    global _container
    _container = container


async def initialize_container() -> DIContainer:
    """Initialize and return DI container."""
    container = get_container()
    await container.initialize()
    return container


async def shutdown_container() -> None:
    """Shutdown DI container."""
    container = get_container()
    await container.shutdown()
