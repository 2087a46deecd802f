"""
Origin guard for API routes.

Browsers always send Origin or Referer on cross-site API calls; requests
carrying neither an allowed Origin nor an allowed Referer prefix are
rejected before reaching any route.
"""

from typing import Callable, Iterable, Optional

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from huissier.infrastructure.auth.session_codec import AUTH_HEADERS
from huissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

API_PREFIX = "/api/"
ALLOWED_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOWED_HEADERS = ", ".join(("Content-Type",) + AUTH_HEADERS)
PREFLIGHT_MAX_AGE = "86400"


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """
    Reject /api requests from origins outside the allowlist.

    Preflight requests from allowed origins are answered directly with
    the CORS headers the wallet-auth headers need.
    """

    def __init__(self, app: ASGIApp, allowed_origins: Iterable[str]):
        super().__init__(app)
        self.allowed_origins = [o.rstrip("/") for o in allowed_origins]

    def is_allowed(self, origin: Optional[str], referer: Optional[str]) -> bool:
        """Check Origin exactly, or Referer by allowed prefix."""
        if origin and origin.rstrip("/") in self.allowed_origins:
            return True
        if referer and any(referer.startswith(o) for o in self.allowed_origins):
            return True
        return False

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not request.url.path.startswith(API_PREFIX):
            return await call_next(request)

        origin = request.headers.get("origin")
        referer = request.headers.get("referer")

        if not self.is_allowed(origin, referer):
            logger.warning(
                "Blocked request from unauthorized origin",
                extra={"origin": origin, "referer": referer},
            )
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"error": "Unauthorized origin"},
            )

        if request.method == "OPTIONS":
            return Response(
                status_code=status.HTTP_200_OK,
                headers={
                    "Access-Control-Allow-Origin": origin
                    or self.allowed_origins[0],
                    "Access-Control-Allow-Methods": ALLOWED_METHODS,
                    "Access-Control-Allow-Headers": ALLOWED_HEADERS,
                    "Access-Control-Max-Age": PREFLIGHT_MAX_AGE,
                },
            )

        response = await call_next(request)
        if origin and origin.rstrip("/") in self.allowed_origins:
            response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
        response.headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
        return response
