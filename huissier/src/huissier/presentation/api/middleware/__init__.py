"""
API middleware.
"""

from huissier.presentation.api.middleware.error_handler import (
    huissier_exception_handler,
)

__all__ = ["huissier_exception_handler"]
