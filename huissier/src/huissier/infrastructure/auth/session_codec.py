"""
Session codec - session <-> HTTP authentication headers.

Header set:
    Authorization:     Bearer <base64(signature)>
    X-Wallet-Address:  <wallet address>
    X-Auth-Message:    <base64(utf8(message))>
    X-Auth-Timestamp:  <epoch milliseconds>
"""

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Dict, Mapping

from huissier.domain.entities.session import Session, is_legacy_signature
from huissier.domain.exceptions.auth import (
    LegacySignatureFormatError,
    MalformedHeaderError,
    MissingHeadersError,
)
from huissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

AUTHORIZATION_HEADER = "Authorization"
WALLET_ADDRESS_HEADER = "X-Wallet-Address"
AUTH_MESSAGE_HEADER = "X-Auth-Message"
AUTH_TIMESTAMP_HEADER = "X-Auth-Timestamp"

AUTH_HEADERS = (
    AUTHORIZATION_HEADER,
    WALLET_ADDRESS_HEADER,
    AUTH_MESSAGE_HEADER,
    AUTH_TIMESTAMP_HEADER,
)

BEARER_PREFIX = "Bearer "

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_DECIMAL = re.compile(r"^-?[0-9]+$")


def is_valid_header_value(value: object) -> bool:
    """Check value is a non-empty string without ASCII control characters."""
    return (
        isinstance(value, str)
        and len(value) > 0
        and _CONTROL_CHARS.search(value) is None
    )


@dataclass(frozen=True)
class DecodedCredentials:
    """Credentials recovered from request headers, not yet verified."""

    wallet_address: str
    message: str
    signature: bytes
    timestamp_ms: int


class SessionCodec:
    """
    Encode sessions into headers and decode headers into credentials.

    Encoding is all-or-nothing: one bad value yields an empty header set.
    """

    def encode(self, session: Session | None) -> Dict[str, str]:
        """
        Produce authentication headers for an outgoing request.

        Args:
            session: Current client session

        Returns:
            Four headers, or {} if the session cannot be encoded safely
        """
        if session is None:
            return {}

        if (
            not session.signature
            or not session.wallet_address
            or not session.message
            or session.timestamp_ms is None
        ):
            logger.error("Invalid session data, refusing to build auth headers")
            return {}

        headers = {
            AUTHORIZATION_HEADER: f"{BEARER_PREFIX}{session.encoded_signature}",
            WALLET_ADDRESS_HEADER: session.wallet_address,
            AUTH_MESSAGE_HEADER: base64.b64encode(
                session.message.encode("utf-8")
            ).decode("ascii"),
            AUTH_TIMESTAMP_HEADER: str(session.timestamp_ms),
        }

        for key, value in headers.items():
            if not is_valid_header_value(value):
                logger.error(f"Header {key} contains invalid characters")
                return {}

        return headers

    def decode(self, headers: Mapping[str, str]) -> DecodedCredentials:
        """
        Recover credentials from inbound request headers.

        Args:
            headers: Request headers (any mapping; names are
                case-insensitive)

        Returns:
            DecodedCredentials

        Raises:
            MissingHeadersError: If any header is absent or empty
            MalformedHeaderError: If any header cannot be decoded
            LegacySignatureFormatError: If signature is a comma list
        """
        values = self._collect(headers)

        authorization = values[AUTHORIZATION_HEADER]
        if not authorization.startswith(BEARER_PREFIX):
            raise MalformedHeaderError(
                AUTHORIZATION_HEADER, "expected 'Bearer <signature>'"
            )

        signature = self._decode_signature(authorization[len(BEARER_PREFIX):])
        message = self._decode_message(values[AUTH_MESSAGE_HEADER])
        timestamp_ms = self._decode_timestamp(values[AUTH_TIMESTAMP_HEADER])

        return DecodedCredentials(
            wallet_address=values[WALLET_ADDRESS_HEADER],
            message=message,
            signature=signature,
            timestamp_ms=timestamp_ms,
        )

    # ================================================================
    # Helpers
    # ================================================================

    def _collect(self, headers: Mapping[str, str]) -> Dict[str, str]:
        lowered = {str(k).lower(): v for k, v in headers.items()}

        values: Dict[str, str] = {}
        missing = []
        for name in AUTH_HEADERS:
            value = lowered.get(name.lower())
            if value is None or value == "":
                missing.append(name)
                continue
            values[name] = value

        if missing:
            raise MissingHeadersError(missing)

        for name, value in values.items():
            if not is_valid_header_value(value):
                raise MalformedHeaderError(name, "contains control characters")

        return values

    def _decode_signature(self, encoded: str) -> bytes:
        if is_legacy_signature(encoded):
            raise LegacySignatureFormatError()

        if not encoded:
            raise MalformedHeaderError(AUTHORIZATION_HEADER, "empty signature")

        try:
            return base64.b64decode(encoded, validate=True)
        except binascii.Error as e:
            raise MalformedHeaderError(
                AUTHORIZATION_HEADER, "signature is not base64"
            ) from e

    def _decode_message(self, encoded: str) -> str:
        try:
            message = base64.b64decode(encoded, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise MalformedHeaderError(
                AUTH_MESSAGE_HEADER, "message is not base64 UTF-8"
            ) from e

        if not message:
            raise MalformedHeaderError(AUTH_MESSAGE_HEADER, "empty message")

        return message

    def _decode_timestamp(self, raw: str) -> int:
        if not _DECIMAL.match(raw):
            raise MalformedHeaderError(
                AUTH_TIMESTAMP_HEADER, "timestamp must be decimal milliseconds"
            )
        return int(raw)
