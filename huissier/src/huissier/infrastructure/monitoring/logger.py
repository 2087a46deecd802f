"""
Logging configuration with per-request context.

Every record carries the request ID and, once the request has been
authenticated, the caller's wallet address. Production emits one JSON
object per line; other environments use a compact text format.
"""

import json
import logging
import re
import sys
from contextvars import ContextVar
from typing import Any, Optional
from uuid import uuid4

request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
wallet_ctx: ContextVar[Optional[str]] = ContextVar("wallet", default=None)

MAX_REQUEST_ID_LENGTH = 128
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:\-]+$")

# Attributes every LogRecord has; anything else came in through extra=
_RESERVED_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "request_id", "wallet"}

TEXT_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(request_id)s %(wallet)s | %(message)s"
)


class RequestContextFilter(logging.Filter):
    """Copy request ID and wallet from the current context onto records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get() or "-"
        record.wallet = _short_wallet(wallet_ctx.get())
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record; extra= fields are kept as keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_ctx.get()
        if request_id:
            log_data["request_id"] = request_id

        wallet = wallet_ctx.get()
        if wallet:
            log_data["wallet"] = wallet

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        log_data["location"] = f"{record.module}:{record.lineno}"

        return json.dumps(log_data, default=str)


def setup_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure root logger.

    Safe to call more than once (CLI and app factory both do); previous
    handlers are replaced.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_logs: Use JSON format (True) or plain text (False)
    """
    numeric_level = getattr(logging, level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.addFilter(RequestContextFilter())

    if json_logs:
        handler.setFormatter(JSONFormatter(datefmt="%Y-%m-%dT%H:%M:%S"))
    else:
        handler.setFormatter(
            logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )

    root_logger.addHandler(handler)

    for noisy in ("asyncio", "httpx", "httpcore", "aiosqlite"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get logger with given name (usually __name__)."""
    return logging.getLogger(name)


def is_valid_request_id(value: Optional[str]) -> bool:
    """Check a client-supplied request ID is short and log-safe."""
    return (
        value is not None
        and 0 < len(value) <= MAX_REQUEST_ID_LENGTH
        and _REQUEST_ID_PATTERN.match(value) is not None
    )


def set_request_id(request_id: Optional[str] = None) -> str:
    """
    Set request ID for current context.

    Client-supplied IDs that are not log-safe are replaced by a UUID.

    Args:
        request_id: Incoming request ID, if any

    Returns:
        Request ID that was set
    """
    if not is_valid_request_id(request_id):
        request_id = str(uuid4())
    request_id_ctx.set(request_id)
    wallet_ctx.set(None)
    return request_id


def get_request_id() -> Optional[str]:
    """Get request ID from current context."""
    return request_id_ctx.get()


def set_request_wallet(wallet_address: Optional[str]) -> None:
    """Attach the authenticated wallet to the current context."""
    wallet_ctx.set(wallet_address)


def get_request_wallet() -> Optional[str]:
    return wallet_ctx.get()


def _short_wallet(wallet_address: Optional[str]) -> str:
    if not wallet_address:
        return "-"
    if len(wallet_address) <= 10:
        return wallet_address
    return f"{wallet_address[:6]}...{wallet_address[-4:]}"
