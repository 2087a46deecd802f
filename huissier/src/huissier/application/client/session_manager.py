"""
Client session manager - wallet login state machine.

    DISCONNECTED
        | connect()
    CHECKING_STORED_SESSION --(valid stored session)--> AUTHENTICATED
        |                                                  |
        | (lookup, no signature)                           | disconnect/logout
    AUTHORIZATION_KNOWN_UNSIGNED | UNAUTHORIZED            | failed revalidation
        | authenticate()                                   v
    SIGNING --> AUTHENTICATED | UNAUTHORIZED (retryable)  DISCONNECTED
"""

import asyncio
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional

from huissier.application.use_cases.authenticate_request import Clock, now_ms
from huissier.application.use_cases.build_challenge import ChallengeBuilder
from huissier.config.rpc import RpcClientConfig
from huissier.domain.entities.session import SESSION_MAX_AGE_MS, Session
from huissier.domain.exceptions.auth import LegacySignatureFormatError
from huissier.domain.repositories.i_session_store import ISessionStore
from huissier.domain.services.i_authorization_lookup import IAuthorizationLookup
from huissier.domain.services.i_signature_verifier import ISignatureVerifier
from huissier.domain.services.i_wallet_signer import (
    IWalletSigner,
    SignatureRejectedError,
)
from huissier.domain.services.role_gate import RoleLike, has_permission
from huissier.domain.value_objects.role import Role
from huissier.infrastructure.auth.session_codec import SessionCodec
from huissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

LOOKUP_FAILED_MESSAGE = "Failed to check wallet authorization"
NOT_AUTHORIZED_MESSAGE = "Wallet not authorized"
VERIFICATION_FAILED_MESSAGE = "Signature verification failed"
SIGNING_CANCELLED_MESSAGE = "Signing cancelled"
SIGNING_FAILED_MESSAGE = "Wallet failed to sign the message"
SESSION_SAVE_FAILED_MESSAGE = "Could not store session"


class SessionState(str, Enum):
    """Client authentication state."""

    DISCONNECTED = "disconnected"
    CHECKING_STORED_SESSION = "checking_stored_session"
    AUTHORIZATION_KNOWN_UNSIGNED = "authorization_known_unsigned"
    SIGNING = "signing"
    AUTHENTICATED = "authenticated"
    UNAUTHORIZED = "unauthorized"


@dataclass(frozen=True)
class AuthState:
    """Snapshot of what the client currently knows about its wallet."""

    state: SessionState = SessionState.DISCONNECTED
    wallet_address: Optional[str] = None
    role: Role = Role.NONE
    name: str = ""
    error: Optional[str] = None
    session: Optional[Session] = field(default=None, compare=False)

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    @property
    def is_authorized(self) -> bool:
        """Authorization is known to be granted (signed or not)."""
        return self.state in (
            SessionState.AUTHORIZATION_KNOWN_UNSIGNED,
            SessionState.AUTHENTICATED,
        )


class ClientSessionManager:
    """
    Drive wallet connection, challenge signing and local session reuse.

    One manager per client. All state lives in the injected session
    store; nothing is kept on the server between requests.
    """

    def __init__(
        self,
        session_store: ISessionStore,
        authorization_lookup: IAuthorizationLookup,
        signature_verifier: ISignatureVerifier,
        challenge_builder: Optional[ChallengeBuilder] = None,
        codec: Optional[SessionCodec] = None,
        rpc_config: Optional[RpcClientConfig] = None,
        session_max_age_ms: int = SESSION_MAX_AGE_MS,
        clock: Clock = now_ms,
    ):
        """
        Initialize manager with dependencies.

        Args:
            session_store: Local persistence for the signed session
            authorization_lookup: Unsigned wallet -> role resolution
            signature_verifier: Local check of the wallet's signature
            challenge_builder: Source of challenge messages
            codec: Header codec
            rpc_config: Network the wallet signer is bound to
            session_max_age_ms: Maximum reuse period of a session
            clock: Time source in epoch milliseconds
        """
        self.session_store = session_store
        self.authorization_lookup = authorization_lookup
        self.signature_verifier = signature_verifier
        self.challenge_builder = challenge_builder or ChallengeBuilder()
        self.codec = codec or SessionCodec()
        self.rpc_config = rpc_config or RpcClientConfig()
        self.session_max_age_ms = session_max_age_ms
        self.clock = clock

        self._signer: Optional[IWalletSigner] = None
        self._state = AuthState()

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def session(self) -> Optional[Session]:
        return self._state.session

    @property
    def wallet_address(self) -> Optional[str]:
        return self._signer.wallet_address if self._signer else None

    async def connect(self, signer: IWalletSigner) -> AuthState:
        """
        Attach a wallet and restore or preview its authorization.

        A stored session is reused only if it belongs to this wallet,
        is younger than the maximum age and uses the current signature
        format. Anything else is deleted.

        Args:
            signer: Connected wallet

        Returns:
            Resulting state (AUTHENTICATED, AUTHORIZATION_KNOWN_UNSIGNED
            or UNAUTHORIZED)
        """
        self._signer = signer
        wallet_address = signer.wallet_address
        self._set(
            AuthState(
                state=SessionState.CHECKING_STORED_SESSION,
                wallet_address=wallet_address,
            )
        )

        session = self._load_session(wallet_address)
        if session is not None:
            logger.info(f"Restored session for {wallet_address}")
            return self._set(
                AuthState(
                    state=SessionState.AUTHENTICATED,
                    wallet_address=wallet_address,
                    role=session.role,
                    name=session.name,
                    session=session,
                )
            )

        self.session_store.clear()
        return await self._preview_authorization(wallet_address)

    async def authenticate(self, action: str = "login") -> bool:
        """
        Ask the wallet to sign a fresh challenge and store the session.

        Wallet, verification, lookup and storage failures leave the
        manager in UNAUTHORIZED with an error and may be retried.
        Cancellation while the wallet prompt is open also ends in
        UNAUTHORIZED before propagating.

        Args:
            action: Action named in the challenge

        Returns:
            True if authenticated, False otherwise

        Raises:
            ValueError: If action is empty or spans several lines; the
                state is left unchanged
        """
        signer = self._signer
        if signer is None:
            self._set(replace(self._state, error="Wallet not connected"))
            return False
        if self._state.state is SessionState.SIGNING:
            logger.warning("Sign request already in progress")
            return False

        wallet_address = signer.wallet_address
        timestamp_ms = self.clock()
        message = self.challenge_builder.build(action, timestamp_ms)

        self._set(
            replace(
                self._state,
                state=SessionState.SIGNING,
                wallet_address=wallet_address,
                error=None,
                session=None,
            )
        )

        try:
            signature = await signer.sign_message(message.encode("utf-8"))
        except SignatureRejectedError as e:
            return self._fail(e.message)
        except asyncio.CancelledError:
            self._fail(SIGNING_CANCELLED_MESSAGE)
            raise
        except Exception as e:
            logger.error(f"Wallet failed to sign for {wallet_address}: {e}")
            return self._fail(SIGNING_FAILED_MESSAGE)

        try:
            is_valid = await self.signature_verifier.verify(
                message=message,
                signature=signature,
                wallet_address=wallet_address,
            )
        except Exception as e:
            logger.error(f"Signature verification raised: {e}")
            return self._fail(VERIFICATION_FAILED_MESSAGE)
        if not is_valid:
            return self._fail(VERIFICATION_FAILED_MESSAGE)

        try:
            auth = await self.authorization_lookup.lookup(wallet_address)
        except asyncio.CancelledError:
            self._fail(SIGNING_CANCELLED_MESSAGE)
            raise
        except Exception as e:
            logger.error(f"Authorization check failed for {wallet_address}: {e}")
            return self._fail(LOOKUP_FAILED_MESSAGE)

        if not auth.is_authorized:
            return self._fail(NOT_AUTHORIZED_MESSAGE, role=Role.NONE, name="")

        session = Session(
            wallet_address=wallet_address,
            message=message,
            signature=bytes(signature),
            timestamp_ms=timestamp_ms,
            role=auth.role,
            name=auth.name,
        )
        try:
            self.session_store.save(session.to_record())
        except Exception as e:
            logger.error(f"Could not store session for {wallet_address}: {e}")
            return self._fail(SESSION_SAVE_FAILED_MESSAGE)

        self._set(
            AuthState(
                state=SessionState.AUTHENTICATED,
                wallet_address=wallet_address,
                role=auth.role,
                name=auth.name,
                session=session,
            )
        )
        logger.info(f"Authenticated {wallet_address} as {auth.role}")
        return True

    def disconnect(self) -> None:
        """Forget the wallet and delete all local session state."""
        self.session_store.clear()
        self._signer = None
        self._set(AuthState())

    def logout(self) -> None:
        """Explicit logout; same effect as a wallet disconnect."""
        if self._state.wallet_address:
            logger.info(f"Logged out {self._state.wallet_address}")
        self.disconnect()

    def get_auth_headers(self) -> Dict[str, str]:
        """
        Headers for an authenticated API call.

        The session is revalidated first; a session that no longer
        qualifies is discarded and the manager disconnects.

        Returns:
            Four auth headers, or {} when not authenticated
        """
        session = self._state.session
        if session is None:
            return {}

        if not self._is_usable(session, self.wallet_address):
            logger.info("Local session no longer valid, disconnecting")
            self.disconnect()
            return {}

        headers = self.codec.encode(session)
        if not headers:
            self.disconnect()
        return headers

    def has_role(self, required: RoleLike) -> bool:
        """Check the authenticated role against a minimum role."""
        if not self._state.is_authenticated:
            return False
        return has_permission(self._state.role, required)

    def _load_session(self, wallet_address: str) -> Optional[Session]:
        record = self.session_store.load()
        if record is None:
            return None

        try:
            session = Session.from_record(record)
        except LegacySignatureFormatError:
            logger.info("Discarding stored session with legacy signature format")
            return None
        except ValueError as e:
            logger.warning(f"Discarding corrupted stored session: {e}")
            return None

        if not self._is_usable(session, wallet_address):
            return None
        return session

    def _is_usable(self, session: Session, wallet_address: Optional[str]) -> bool:
        if wallet_address is None or not session.belongs_to(wallet_address):
            return False
        return session.is_valid(self.clock(), self.session_max_age_ms)

    async def _preview_authorization(self, wallet_address: str) -> AuthState:
        try:
            auth = await self.authorization_lookup.lookup(wallet_address)
        except Exception as e:
            logger.error(f"Authorization check failed for {wallet_address}: {e}")
            return self._set(
                AuthState(
                    state=SessionState.UNAUTHORIZED,
                    wallet_address=wallet_address,
                    error=LOOKUP_FAILED_MESSAGE,
                )
            )

        if not auth.is_authorized:
            return self._set(
                AuthState(
                    state=SessionState.UNAUTHORIZED,
                    wallet_address=wallet_address,
                    error=NOT_AUTHORIZED_MESSAGE,
                )
            )

        return self._set(
            AuthState(
                state=SessionState.AUTHORIZATION_KNOWN_UNSIGNED,
                wallet_address=wallet_address,
                role=auth.role,
                name=auth.name,
            )
        )

    def _fail(self, error: str, **changes) -> bool:
        logger.warning(f"Authentication failed: {error}")
        self._set(
            replace(
                self._state,
                state=SessionState.UNAUTHORIZED,
                error=error,
                session=None,
                **changes,
            )
        )
        return False

    def _set(self, state: AuthState) -> AuthState:
        if state.state is not self._state.state:
            logger.debug(f"Session state {self._state.state} -> {state.state}")
        self._state = state
        return state
