"""
Huissier - wallet-based authentication and role gating.

Proves control of a Solana keypair over a stateless HTTP API and enforces
a role hierarchy on every request without a server-side session store.
"""

__version__ = "0.1.0"
