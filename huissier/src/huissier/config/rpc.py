"""
Solana RPC client configuration value object.
"""

from dataclasses import dataclass
from typing import Optional

from huissier.config.settings import SOLANA_NETWORKS, Settings
from huissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

DEFAULT_NETWORK = "mainnet-beta"

CLUSTER_URLS = {
    "mainnet-beta": "https://api.mainnet-beta.solana.com",
    "testnet": "https://api.testnet.solana.com",
    "devnet": "https://api.devnet.solana.com",
}

NETWORK_DISPLAY_NAMES = {
    "mainnet-beta": "Mainnet",
    "testnet": "Testnet",
    "devnet": "Devnet",
}


@dataclass(frozen=True)
class RpcClientConfig:
    """
    Where the client's wallet talks to Solana.

    Passed explicitly to whoever needs it instead of a process-wide
    connection object.
    """

    network: str = DEFAULT_NETWORK
    rpc_url: str = CLUSTER_URLS[DEFAULT_NETWORK]
    commitment: str = "confirmed"

    @classmethod
    def resolve(
        cls,
        network: Optional[str],
        custom_rpc_url: Optional[str] = None,
        commitment: str = "confirmed",
    ) -> "RpcClientConfig":
        """
        Build config from a network name and optional custom RPC URL.

        Unknown networks fall back to mainnet-beta with a warning.

        Args:
            network: Cluster name (mainnet-beta, testnet, devnet)
            custom_rpc_url: RPC URL overriding the cluster default
            commitment: Commitment level for RPC queries

        Returns:
            RpcClientConfig instance
        """
        name = (network or DEFAULT_NETWORK).strip().lower()
        if name not in SOLANA_NETWORKS:
            logger.warning(
                f"Invalid SOLANA_NETWORK: {network}, defaulting to {DEFAULT_NETWORK}"
            )
            name = DEFAULT_NETWORK

        if custom_rpc_url:
            logger.info(f"Using custom Solana RPC: {custom_rpc_url}")
            rpc_url = custom_rpc_url
        else:
            rpc_url = CLUSTER_URLS[name]
            logger.info(f"Using default Solana RPC for {name}: {rpc_url}")

        return cls(network=name, rpc_url=rpc_url, commitment=commitment)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RpcClientConfig":
        """Build config from application settings."""
        return cls.resolve(
            network=settings.SOLANA_NETWORK,
            custom_rpc_url=settings.SOLANA_RPC_URL,
            commitment=settings.SOLANA_COMMITMENT,
        )

    @property
    def display_name(self) -> str:
        """Human-readable network name."""
        return NETWORK_DISPLAY_NAMES.get(self.network, "Unknown")
