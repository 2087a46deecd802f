"""
Global error handling middleware.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from huissier.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    HuissierException,
)

STATUS_CODE_MAP = {
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DUPLICATE_ENTITY": status.HTTP_409_CONFLICT,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "AUTHENTICATION_ERROR": status.HTTP_401_UNAUTHORIZED,
    "MISSING_HEADERS": status.HTTP_401_UNAUTHORIZED,
    "MALFORMED_HEADER": status.HTTP_401_UNAUTHORIZED,
    "LEGACY_SIGNATURE_FORMAT": status.HTTP_401_UNAUTHORIZED,
    "TIMESTAMP_EXPIRED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_SIGNATURE": status.HTTP_401_UNAUTHORIZED,
    "NOT_AUTHORIZED": status.HTTP_403_FORBIDDEN,
    "INSUFFICIENT_PERMISSIONS": status.HTTP_403_FORBIDDEN,
}


def status_code_for(exc: HuissierException) -> int:
    """Resolve HTTP status for a domain exception."""
    if exc.code in STATUS_CODE_MAP:
        return STATUS_CODE_MAP[exc.code]
    if isinstance(exc, AuthenticationError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, AuthorizationError):
        return status.HTTP_403_FORBIDDEN
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def huissier_exception_handler(
    request: Request, exc: HuissierException
) -> JSONResponse:
    """
    Handle Huissier domain exceptions.

    Converts domain exceptions to appropriate HTTP responses.
    """
    status_code = status_code_for(exc)

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=status_code,
        content=exc.to_dict(),
        headers=headers,
    )
