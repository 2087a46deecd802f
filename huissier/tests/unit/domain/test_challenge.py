"""
Unit tests for Challenge entity and ChallengeBuilder.

Usage:
    pytest huissier/tests/unit/domain/test_challenge.py
"""

import pytest

from helpers.fakes import T0
from huissier.application.use_cases.build_challenge import ChallengeBuilder
from huissier.domain.entities.challenge import Challenge


class TestChallenge:
    """Unit tests for Challenge entity."""

    def test_render_fixed_template(self):
        """Test message follows the fixed template exactly."""
        challenge = Challenge(action="login", timestamp_ms=T0, nonce="abc")

        assert challenge.render("Token Metadata CMS") == (
            "Token Metadata CMS Authentication\n"
            "\n"
            "Action: login\n"
            f"Timestamp: {T0}\n"
            "Nonce: abc\n"
            "\n"
            "Please sign this message to verify your wallet ownership.\n"
            "This signature will not trigger any blockchain transaction."
        )

    def test_reject_empty_action(self):
        """Test action is required."""
        with pytest.raises(ValueError, match="action is required"):
            Challenge(action="", timestamp_ms=T0, nonce="abc")

    def test_reject_multiline_action(self):
        """Test action cannot inject extra lines into the message."""
        with pytest.raises(ValueError, match="single line"):
            Challenge(action="login\nAction: admin", timestamp_ms=T0, nonce="abc")

    def test_reject_empty_nonce(self):
        """Test nonce is required."""
        with pytest.raises(ValueError, match="nonce is required"):
            Challenge(action="login", timestamp_ms=T0, nonce="")


class TestChallengeBuilder:
    """Unit tests for ChallengeBuilder."""

    def test_build_embeds_action_and_timestamp(self):
        """Test built message names action and timestamp."""
        message = ChallengeBuilder().build("login", T0)

        assert "Action: login\n" in message
        assert f"Timestamp: {T0}\n" in message

    def test_two_challenges_differ(self):
        """Test same action and timestamp still produce distinct messages."""
        builder = ChallengeBuilder()
        assert builder.build("login", T0) != builder.build("login", T0)

    def test_custom_title_and_nonce(self):
        """Test title and nonce source are configurable."""
        builder = ChallengeBuilder(title="Acme", nonce_factory=lambda: "n1")
        message = builder.build("publish", T0)

        assert message.startswith("Acme Authentication\n")
        assert "Nonce: n1\n" in message

    def test_create_returns_entity(self):
        """Test create() exposes the challenge fields."""
        challenge = ChallengeBuilder(nonce_factory=lambda: "n2").create("login", T0)

        assert challenge == Challenge(action="login", timestamp_ms=T0, nonce="n2")
