"""
Unit tests for ClientSessionManager.

Covers every state transition, stored session reuse and header
revalidation.

Usage:
    pytest huissier/tests/unit/application/test_session_manager.py
"""

import asyncio

import pytest

from helpers.fakes import (
    MINUTE_MS,
    T0,
    FailingSessionStore,
    FakeWalletSigner,
    StaticAuthorizationLookup,
)
from helpers.sign_message import ALICE, BOB, CAROL
from huissier.application.client.session_manager import (
    LOOKUP_FAILED_MESSAGE,
    NOT_AUTHORIZED_MESSAGE,
    SESSION_SAVE_FAILED_MESSAGE,
    SIGNING_CANCELLED_MESSAGE,
    SIGNING_FAILED_MESSAGE,
    VERIFICATION_FAILED_MESSAGE,
    AuthState,
    ClientSessionManager,
    SessionState,
)
from huissier.application.use_cases.authenticate_request import (
    RequestAuthenticator,
)
from huissier.application.use_cases.build_challenge import ChallengeBuilder
from huissier.application.use_cases.lookup_authorization import (
    AuthorizationLookup,
)
from huissier.domain.entities.authorization_record import AuthorizationResult
from huissier.domain.entities.session import SESSION_MAX_AGE_MS, Session
from huissier.domain.value_objects.role import Role
from huissier.infrastructure.auth.solana_signature_verifier import (
    SolanaSignatureVerifier,
)
from huissier.infrastructure.session.memory_session_store import (
    InMemorySessionStore,
)

HOUR_MS = 60 * MINUTE_MS


@pytest.fixture
def lookup() -> StaticAuthorizationLookup:
    return StaticAuthorizationLookup(
        {
            ALICE.address: AuthorizationResult(True, Role.EDITOR, "Alice"),
            BOB.address: AuthorizationResult(True, Role.ADMIN, "Bob"),
        }
    )


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def manager(session_store, lookup, clock) -> ClientSessionManager:
    return ClientSessionManager(
        session_store=session_store,
        authorization_lookup=lookup,
        signature_verifier=SolanaSignatureVerifier(),
        clock=clock,
    )


def _stored_record(wallet, timestamp_ms: int = T0, role: str = "editor") -> dict:
    message = ChallengeBuilder().build("login", timestamp_ms)
    return Session(
        wallet_address=wallet.address,
        message=message,
        signature=wallet.sign(message),
        timestamp_ms=timestamp_ms,
        role=role,
        name="Stored",
    ).to_record()


async def _wait_until_signing(manager: ClientSessionManager) -> None:
    for _ in range(10):
        if manager.state.state is SessionState.SIGNING:
            return
        await asyncio.sleep(0)
    raise AssertionError("manager never reached SIGNING")


class TestConnect:
    """Tests for connect() and stored session reuse."""

    def test_initial_state(self, manager):
        """Test new manager is disconnected."""
        assert manager.state == AuthState()
        assert manager.wallet_address is None

    async def test_connect_authorized_unsigned(self, manager, lookup):
        """Test authorized wallet without session is known but unsigned."""
        state = await manager.connect(FakeWalletSigner(ALICE))

        assert state.state is SessionState.AUTHORIZATION_KNOWN_UNSIGNED
        assert (state.role, state.name) == (Role.EDITOR, "Alice")
        assert state.is_authorized is True
        assert state.is_authenticated is False
        assert lookup.calls == [ALICE.address]

    async def test_connect_unknown_wallet(self, manager):
        """Test unknown wallet ends unauthorized with a message."""
        state = await manager.connect(FakeWalletSigner(CAROL))

        assert state.state is SessionState.UNAUTHORIZED
        assert state.error == NOT_AUTHORIZED_MESSAGE
        assert state.role is Role.NONE

    async def test_connect_lookup_error(self, manager, lookup):
        """Test lookup failure is surfaced, never treated as authorized."""
        lookup.error = ConnectionError("offline")

        state = await manager.connect(FakeWalletSigner(ALICE))

        assert state.state is SessionState.UNAUTHORIZED
        assert state.error == LOOKUP_FAILED_MESSAGE

    async def test_restore_valid_session(self, manager, session_store, lookup, clock):
        """Test fresh stored session is reused without signing or lookup."""
        session_store.save(_stored_record(ALICE))
        clock.advance(HOUR_MS)
        signer = FakeWalletSigner(ALICE)

        state = await manager.connect(signer)

        assert state.state is SessionState.AUTHENTICATED
        assert (state.role, state.name) == (Role.EDITOR, "Stored")
        assert signer.requests == []
        assert lookup.calls == []

    async def test_expired_session_discarded(
        self, manager, session_store, lookup, clock
    ):
        """Test session at 24h is deleted and authorization re-checked."""
        session_store.save(_stored_record(ALICE))
        clock.advance(SESSION_MAX_AGE_MS)

        state = await manager.connect(FakeWalletSigner(ALICE))

        assert state.state is SessionState.AUTHORIZATION_KNOWN_UNSIGNED
        assert session_store.load() is None
        assert lookup.calls == [ALICE.address]

    async def test_session_of_other_wallet_discarded(self, manager, session_store):
        """Test Bob's session is never used for Alice."""
        session_store.save(_stored_record(BOB, role="admin"))

        state = await manager.connect(FakeWalletSigner(ALICE))

        assert state.state is SessionState.AUTHORIZATION_KNOWN_UNSIGNED
        assert state.role is Role.EDITOR
        assert session_store.load() is None

    async def test_legacy_session_discarded(self, manager, session_store):
        """Test comma signature records are deleted on connect."""
        record = _stored_record(ALICE)
        record["signature"] = "12,34,56"
        session_store.save(record)

        state = await manager.connect(FakeWalletSigner(ALICE))

        assert state.state is SessionState.AUTHORIZATION_KNOWN_UNSIGNED
        assert session_store.load() is None

    async def test_corrupted_session_discarded(self, manager, session_store):
        """Test incomplete records are deleted on connect."""
        session_store.save({"wallet_address": ALICE.address})

        await manager.connect(FakeWalletSigner(ALICE))

        assert session_store.load() is None


class TestAuthenticate:
    """Tests for authenticate() and the signing flow."""

    async def test_authenticate_success(self, manager, session_store, clock):
        """Test signing stores session with role and name."""
        signer = FakeWalletSigner(ALICE)
        await manager.connect(signer)

        assert await manager.authenticate() is True

        state = manager.state
        assert state.state is SessionState.AUTHENTICATED
        assert (state.role, state.name) == (Role.EDITOR, "Alice")
        assert state.error is None

        record = session_store.load()
        assert record["wallet_address"] == ALICE.address
        assert record["timestamp"] == clock()
        assert record["role"] == "editor"
        assert "," not in record["signature"]

    async def test_signed_message_names_action(self, manager, clock):
        """Test wallet is asked to sign the challenge for the action."""
        signer = FakeWalletSigner(ALICE)
        await manager.connect(signer)

        await manager.authenticate(action="publish")

        [request] = signer.requests
        text = request.decode("utf-8")
        assert "Action: publish\n" in text
        assert f"Timestamp: {clock()}\n" in text
        assert manager.session.message == text

    async def test_authenticate_without_wallet(self, manager):
        """Test authenticate() requires a connected wallet."""
        assert await manager.authenticate() is False
        assert manager.state.error == "Wallet not connected"
        assert manager.state.state is SessionState.DISCONNECTED

    async def test_rejection_is_retryable(self, manager):
        """Test declined signature leaves a retryable error state."""
        signer = FakeWalletSigner(ALICE)
        await manager.connect(signer)
        signer.reject = True

        assert await manager.authenticate() is False
        assert manager.state.state is SessionState.UNAUTHORIZED
        assert manager.state.error == "User rejected the request"

        signer.reject = False
        assert await manager.authenticate() is True
        assert manager.state.error is None

    async def test_invalid_signature(self, manager, session_store):
        """Test locally unverifiable signature is not stored."""
        signer = FakeWalletSigner(ALICE)
        await manager.connect(signer)
        signer.signature = b"\x00" * 64

        assert await manager.authenticate() is False
        assert manager.state.error == VERIFICATION_FAILED_MESSAGE
        assert session_store.load() is None

    async def test_signature_of_other_key(self, manager):
        """Test signature from another key fails verification."""
        signer = FakeWalletSigner(ALICE)
        await manager.connect(signer)
        signer.signature = BOB.sign("anything")

        assert await manager.authenticate() is False
        assert manager.state.error == VERIFICATION_FAILED_MESSAGE

    async def test_unauthorized_after_signing(self, manager, session_store):
        """Test valid signature from unknown wallet stores nothing."""
        await manager.connect(FakeWalletSigner(CAROL))

        assert await manager.authenticate() is False
        assert manager.state.state is SessionState.UNAUTHORIZED
        assert manager.state.error == NOT_AUTHORIZED_MESSAGE
        assert manager.state.role is Role.NONE
        assert session_store.load() is None

    async def test_revoked_between_connect_and_sign(self, manager, lookup):
        """Test authorization is re-checked after signing."""
        await manager.connect(FakeWalletSigner(ALICE))
        lookup.results.pop(ALICE.address)

        assert await manager.authenticate() is False
        assert manager.state.error == NOT_AUTHORIZED_MESSAGE

    async def test_lookup_error_after_signing(self, manager, lookup):
        """Test lookup failure after signing is reported as such."""
        await manager.connect(FakeWalletSigner(ALICE))
        lookup.error = TimeoutError("timeout")

        assert await manager.authenticate() is False
        assert manager.state.error == LOOKUP_FAILED_MESSAGE

    async def test_second_request_while_signing(self, manager):
        """Test only one signing prompt is open at a time."""
        signer = FakeWalletSigner(ALICE)
        await manager.connect(signer)
        signer.hold()

        first = asyncio.create_task(manager.authenticate())
        await _wait_until_signing(manager)

        assert await manager.authenticate() is False

        signer.release()
        assert await first is True
        assert len(signer.requests) == 1

    async def test_cancel_while_signing(self, manager, session_store):
        """Test cancellation ends unauthorized, and a retry still works."""
        signer = FakeWalletSigner(ALICE)
        await manager.connect(signer)
        signer.hold()

        task = asyncio.create_task(manager.authenticate())
        await _wait_until_signing(manager)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert manager.state.state is SessionState.UNAUTHORIZED
        assert manager.state.error == SIGNING_CANCELLED_MESSAGE
        assert session_store.load() is None

        signer.release()
        assert await manager.authenticate() is True

    async def test_wallet_error_is_retryable(self, manager):
        """Test unexpected wallet failure does not leave the manager signing."""
        signer = FakeWalletSigner(ALICE)
        await manager.connect(signer)
        signer.error = RuntimeError("wallet disconnected")

        assert await manager.authenticate() is False
        assert manager.state.state is SessionState.UNAUTHORIZED
        assert manager.state.error == SIGNING_FAILED_MESSAGE

        signer.error = None
        assert await manager.authenticate() is True
        assert manager.state.state is SessionState.AUTHENTICATED

    @pytest.mark.parametrize("action", ["", "publish\nRole: admin"])
    async def test_invalid_action_leaves_state(self, manager, action):
        """Test bad action raises before any signing prompt opens."""
        signer = FakeWalletSigner(ALICE)
        await manager.connect(signer)

        with pytest.raises(ValueError):
            await manager.authenticate(action)

        assert manager.state.state is SessionState.AUTHORIZATION_KNOWN_UNSIGNED
        assert signer.requests == []
        assert await manager.authenticate() is True

    async def test_session_save_error_is_retryable(self, lookup, clock):
        """Test failing session storage ends unauthorized, then recovers."""
        store = FailingSessionStore(save_error=OSError("disk full"))
        manager = ClientSessionManager(
            session_store=store,
            authorization_lookup=lookup,
            signature_verifier=SolanaSignatureVerifier(),
            clock=clock,
        )
        await manager.connect(FakeWalletSigner(ALICE))

        assert await manager.authenticate() is False
        assert manager.state.state is SessionState.UNAUTHORIZED
        assert manager.state.error == SESSION_SAVE_FAILED_MESSAGE
        assert manager.session is None

        store.save_error = None
        assert await manager.authenticate() is True
        assert store.load()["wallet_address"] == ALICE.address


class TestSessionUse:
    """Tests for headers, roles and logout."""

    async def _login(self, manager, wallet=ALICE) -> FakeWalletSigner:
        signer = FakeWalletSigner(wallet)
        await manager.connect(signer)
        assert await manager.authenticate() is True
        return signer

    async def test_headers_accepted_by_server(self, manager, metadata_store, clock):
        """Test headers from the client authenticate server-side."""
        await self._login(manager)
        clock.advance(10 * MINUTE_MS)

        authenticator = RequestAuthenticator(
            signature_verifier=SolanaSignatureVerifier(),
            authorization_lookup=AuthorizationLookup(metadata_store),
            metadata_store=metadata_store,
            clock=clock,
        )
        identity = await authenticator.authenticate(manager.get_auth_headers())

        assert identity.wallet_address == ALICE.address
        assert identity.role is Role.EDITOR

    async def test_headers_empty_when_unauthenticated(self, manager):
        """Test no session means no headers."""
        await manager.connect(FakeWalletSigner(ALICE))
        assert manager.get_auth_headers() == {}

    async def test_headers_after_expiry_disconnects(
        self, manager, session_store, clock
    ):
        """Test expired session is discarded when headers are requested."""
        await self._login(manager)
        clock.advance(SESSION_MAX_AGE_MS)

        assert manager.get_auth_headers() == {}
        assert manager.state.state is SessionState.DISCONNECTED
        assert manager.wallet_address is None
        assert session_store.load() is None

    async def test_has_role(self, manager):
        """Test role checks use the hierarchy and require authentication."""
        await manager.connect(FakeWalletSigner(ALICE))
        assert manager.has_role(Role.VIEWER) is False

        await manager.authenticate()

        assert manager.has_role(Role.VIEWER) is True
        assert manager.has_role("editor") is True
        assert manager.has_role(Role.ADMIN) is False

    async def test_logout_clears_everything(self, manager, session_store):
        """Test logout returns to disconnected and deletes the session."""
        await self._login(manager, wallet=BOB)

        manager.logout()

        assert manager.state == AuthState()
        assert manager.session is None
        assert session_store.load() is None
        assert manager.get_auth_headers() == {}

    async def test_reconnect_reuses_session(self, manager, session_store, lookup):
        """Test session stored by authenticate() survives a reconnect."""
        await self._login(manager)
        lookup.calls.clear()

        other = ClientSessionManager(
            session_store=session_store,
            authorization_lookup=lookup,
            signature_verifier=SolanaSignatureVerifier(),
            clock=manager.clock,
        )
        state = await other.connect(FakeWalletSigner(ALICE))

        assert state.state is SessionState.AUTHENTICATED
        assert lookup.calls == []
