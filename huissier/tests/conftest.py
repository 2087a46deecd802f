"""
Test fixtures and configuration.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from helpers.fakes import FakeClock, FakeMetadataStore
from helpers.sign_message import ALICE, BOB, CAROL
from huissier.application.use_cases.authenticate_request import now_ms
from huissier.application.use_cases.build_challenge import ChallengeBuilder
from huissier.config.settings import Settings, override_settings, reset_settings
from huissier.di.container import get_container, set_container
from huissier.domain.entities.authorization_record import AuthorizationRecord
from huissier.domain.value_objects.role import Role
from huissier.infrastructure.persistence.database import Database
from huissier.infrastructure.persistence.metadata_store import SqlMetadataStore
from huissier.infrastructure.persistence.models import Base

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ALLOWED_ORIGIN = "http://localhost:3000"


@pytest.fixture
def clock() -> FakeClock:
    """Fixed clock at T0."""
    return FakeClock()


@pytest.fixture
def metadata_store() -> FakeMetadataStore:
    """In-memory store with Alice (editor) and Bob (admin)."""
    store = FakeMetadataStore()
    store.grant(ALICE.address, Role.EDITOR, "Alice")
    store.grant(BOB.address, Role.ADMIN, "Bob")
    return store


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings for an isolated test application."""
    settings = Settings(
        ENV="test",
        LOG_LEVEL="WARNING",
        DATABASE_URL=TEST_DATABASE_URL,
        CORS_ORIGINS=[ALLOWED_ORIGIN],
        SESSION_FILE=str(tmp_path / "session.json"),
    )
    override_settings(settings)
    yield settings
    reset_settings()


@pytest_asyncio.fixture
async def test_db() -> AsyncGenerator[Database, None]:
    """
    Create in-memory test database and tables.

    Each test gets a clean database.
    """
    db = Database(database_url=TEST_DATABASE_URL, echo=False)
    await db.connect()
    await db.create_tables(Base.metadata)

    yield db

    await db.disconnect()


@pytest_asyncio.fixture
async def db_session(test_db: Database) -> AsyncGenerator[AsyncSession, None]:
    """Provide database session for tests."""
    async with test_db.session() as session:
        yield session


@pytest_asyncio.fixture
async def app(test_settings: Settings):
    """
    Application with lifespan running and seeded wallets.

    Alice is editor, Bob is admin, Carol is unknown.
    """
    from huissier.main import create_app

    application = create_app(test_settings)

    async with application.router.lifespan_context(application):
        async with get_container().database.session() as session:
            store = SqlMetadataStore(session, row_level_security=False)
            await store.add_authorization(
                AuthorizationRecord(
                    wallet_address=ALICE.address, role=Role.EDITOR, name="Alice"
                )
            )
            await store.add_authorization(
                AuthorizationRecord(
                    wallet_address=BOB.address, role=Role.ADMIN, name="Bob"
                )
            )
        yield application

    set_container(None)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client sending an allowed Origin header."""
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"Origin": ALLOWED_ORIGIN},
    ) as http_client:
        yield http_client


@pytest.fixture
def wallets():
    """Deterministic test wallets."""
    return {"alice": ALICE, "bob": BOB, "carol": CAROL}


@pytest.fixture
def auth_headers():
    """
    Factory for freshly signed auth headers.

    Usage:
        headers = auth_headers(ALICE)
        headers = auth_headers(ALICE, timestamp_ms=now_ms() - 31 * MINUTE_MS)
    """

    def _build(wallet, action: str = "login", timestamp_ms: int | None = None):
        if timestamp_ms is None:
            timestamp_ms = now_ms()
        message = ChallengeBuilder().build(action, timestamp_ms)
        return wallet.auth_headers(message, timestamp_ms)

    return _build
