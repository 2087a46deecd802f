"""
Monitoring: structured logging and Prometheus metrics.
"""

from huissier.infrastructure.monitoring.logger import (
    get_logger,
    get_request_id,
    get_request_wallet,
    set_request_id,
    set_request_wallet,
    setup_logging,
)

__all__ = [
    "get_logger",
    "get_request_id",
    "get_request_wallet",
    "set_request_id",
    "set_request_wallet",
    "setup_logging",
]
