"""
Authentication and authorization domain exceptions.

Two families, mapped by the HTTP layer:
- AuthenticationError: caller could not be identified (401)
- AuthorizationError: caller identified but not allowed (403)

Every error is terminal for the current request.
"""

from huissier.domain.exceptions.base import HuissierException


class AuthenticationError(HuissierException):
    """Raised when the caller cannot be authenticated."""

    def __init__(
        self,
        message: str = "Authentication failed",
        code: str = "AUTHENTICATION_ERROR",
    ):
        super().__init__(message, code=code)


class MissingHeadersError(AuthenticationError):
    """Raised when any of the four authentication headers is absent."""

    def __init__(self, missing: list[str] | None = None):
        self.missing = list(missing or [])
        message = "Missing authentication headers"
        if self.missing:
            message = f"{message}: {', '.join(self.missing)}"
        super().__init__(message, code="MISSING_HEADERS")


class MalformedHeaderError(AuthenticationError):
    """Raised when an authentication header cannot be decoded."""

    def __init__(self, header: str, reason: str = "invalid format"):
        self.header = header
        super().__init__(
            f"Malformed {header} header: {reason}",
            code="MALFORMED_HEADER",
        )


class LegacySignatureFormatError(AuthenticationError):
    """
    Raised when the signature uses the old comma-separated byte array.

    Kept distinct from MalformedHeaderError so the client can ask the
    user to sign again instead of reporting a generic failure.
    """

    def __init__(self):
        super().__init__(
            "Invalid signature format - please re-authenticate",
            code="LEGACY_SIGNATURE_FORMAT",
        )


class TimestampExpiredError(AuthenticationError):
    """Raised when the signed timestamp is outside the accepted window."""

    def __init__(self, skew_ms: int | None = None):
        self.skew_ms = skew_ms
        super().__init__(
            "Authentication timestamp expired",
            code="TIMESTAMP_EXPIRED",
        )


class InvalidSignatureError(AuthenticationError):
    """Raised when wallet signature is invalid."""

    def __init__(self):
        super().__init__("Invalid wallet signature", code="INVALID_SIGNATURE")


class AuthorizationError(HuissierException):
    """Raised when an authenticated caller lacks access."""


class NotAuthorizedError(AuthorizationError):
    """Raised when the wallet is not (or no longer) authorized."""

    def __init__(self, wallet_address: str | None = None):
        self.wallet_address = wallet_address
        super().__init__("Wallet not authorized", code="NOT_AUTHORIZED")


class InsufficientPermissionsError(AuthorizationError):
    """Raised when the caller's role is below the required role."""

    def __init__(self, required_role: str, actual_role: str | None = None):
        self.required_role = str(required_role)
        self.actual_role = str(actual_role) if actual_role is not None else None
        super().__init__(
            f"Insufficient permissions: {self.required_role} role required",
            code="INSUFFICIENT_PERMISSIONS",
        )
