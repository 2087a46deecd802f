"""
Test helper utilities.

Contains shared utilities for tests:
- sign_message: Deterministic Ed25519 test wallets and header builders
- fakes: In-memory metadata store, authorization lookup and clock
"""
