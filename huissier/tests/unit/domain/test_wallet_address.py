"""
Unit tests for WalletAddress value object.

Usage:
    pytest huissier/tests/unit/domain/test_wallet_address.py
"""

import pytest

from helpers.sign_message import ALICE
from huissier.domain.value_objects.wallet_address import WalletAddress


class TestWalletAddress:
    """Unit tests for WalletAddress value object."""

    def _generate_valid_wallet(self) -> str:
        """Valid Base58 wallet address (44 chars)."""
        return "kshy5yns5FGGXcFVfjT2fTzVsQLFnbZzL9zuh1ZKR2y"

    def test_create_valid_address(self):
        """Test creating WalletAddress with a valid address."""
        address = WalletAddress(self._generate_valid_wallet())
        assert str(address) == self._generate_valid_wallet()

    def test_real_public_key_is_valid(self):
        """Test address derived from an Ed25519 key is accepted."""
        assert WalletAddress.is_valid(ALICE.address)

    def test_reject_empty_address(self):
        """Test empty address is rejected."""
        with pytest.raises(ValueError, match="cannot be empty"):
            WalletAddress("")

    @pytest.mark.parametrize("address", ["short123", "1" * 45])
    def test_reject_invalid_length(self, address):
        """Test addresses outside 32-44 chars are rejected."""
        with pytest.raises(ValueError, match="length"):
            WalletAddress(address)

    @pytest.mark.parametrize("char", ["0", "O", "I", "l", "+", "/"])
    def test_reject_non_base58_characters(self, char):
        """Test characters outside the base58 alphabet are rejected."""
        address = char + self._generate_valid_wallet()[1:]
        assert WalletAddress.is_valid(address) is False

    def test_is_valid_handles_non_strings(self):
        """Test is_valid never raises."""
        assert WalletAddress.is_valid(None) is False

    def test_truncated(self):
        """Test display form keeps head and tail."""
        address = WalletAddress(self._generate_valid_wallet())
        assert address.truncated() == "kshy5y...KR2y"
