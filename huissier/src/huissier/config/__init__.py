"""
Configuration module for Huissier.
"""

from huissier.config.rpc import RpcClientConfig
from huissier.config.settings import (
    Settings,
    get_settings,
    load_config,
    override_settings,
    reset_settings,
)

__all__ = [
    "RpcClientConfig",
    "Settings",
    "get_settings",
    "load_config",
    "override_settings",
    "reset_settings",
]
