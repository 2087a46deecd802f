"""
Integration tests for authentication API routes.

Usage:
    pytest huissier/tests/integration/api/test_api_auth.py
"""

import base64

from helpers.fakes import MINUTE_MS
from helpers.sign_message import ALICE, BOB, CAROL
from huissier.application.use_cases.authenticate_request import now_ms


class TestChallengeEndpoint:
    """Tests for GET /api/auth/challenge."""

    async def test_challenge(self, client):
        """Test challenge names the action and carries a nonce."""
        response = await client.get("/api/auth/challenge", params={"action": "login"})

        assert response.status_code == 200
        data = response.json()
        assert data["action"] == "login"
        assert "Action: login\n" in data["message"]
        assert f"Timestamp: {data['timestamp']}\n" in data["message"]
        assert f"Nonce: {data['nonce']}\n" in data["message"]
        assert abs(now_ms() - data["timestamp"]) < MINUTE_MS

    async def test_challenges_differ(self, client):
        """Test two challenges never share a nonce."""
        first = (await client.get("/api/auth/challenge")).json()
        second = (await client.get("/api/auth/challenge")).json()

        assert first["nonce"] != second["nonce"]

    async def test_multiline_action_rejected(self, client):
        """Test action cannot inject extra challenge lines."""
        response = await client.get(
            "/api/auth/challenge", params={"action": "login\nRole: admin"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_signed_challenge_authenticates(self, client):
        """Test server-issued challenge signed by the wallet is accepted."""
        data = (await client.get("/api/auth/challenge")).json()
        headers = ALICE.auth_headers(data["message"], data["timestamp"])

        response = await client.get("/api/auth/me", headers=headers)

        assert response.status_code == 200


class TestAuthorizationEndpoint:
    """Tests for GET /api/auth/authorization/{wallet_address}."""

    async def test_known_wallet(self, client):
        """Test preview returns role and name without a signature."""
        response = await client.get(f"/api/auth/authorization/{ALICE.address}")

        assert response.status_code == 200
        assert response.json() == {
            "wallet_address": ALICE.address,
            "is_authorized": True,
            "role": "editor",
            "name": "Alice",
        }

    async def test_unknown_wallet(self, client):
        """Test unknown wallet previews as unauthorized."""
        response = await client.get(f"/api/auth/authorization/{CAROL.address}")

        assert response.status_code == 200
        assert response.json()["is_authorized"] is False
        assert response.json()["role"] == "none"

    async def test_invalid_address(self, client):
        """Test malformed address is a 400."""
        response = await client.get("/api/auth/authorization/not-a-wallet")
        assert response.status_code == 400


class TestMeEndpoint:
    """Tests for GET /api/auth/me."""

    async def test_me(self, client, auth_headers):
        """Test identity reflects the stored role."""
        response = await client.get("/api/auth/me", headers=auth_headers(BOB))

        assert response.status_code == 200
        assert response.json() == {
            "wallet_address": BOB.address,
            "role": "admin",
            "name": "Bob",
        }

    async def test_missing_headers(self, client):
        """Test unauthenticated request is a 401 with challenge header."""
        response = await client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["error"] == "MISSING_HEADERS"
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_expired_timestamp(self, client, auth_headers):
        """Test 31 minute old signature is a 401."""
        headers = auth_headers(ALICE, timestamp_ms=now_ms() - 31 * MINUTE_MS)

        response = await client.get("/api/auth/me", headers=headers)

        assert response.status_code == 401
        assert response.json()["error"] == "TIMESTAMP_EXPIRED"

    async def test_legacy_signature(self, client, auth_headers):
        """Test comma signature is a 401 asking for re-authentication."""
        headers = auth_headers(ALICE)
        headers["Authorization"] = "Bearer " + ",".join(
            str(b) for b in ALICE.sign("x")
        )

        response = await client.get("/api/auth/me", headers=headers)

        assert response.status_code == 401
        assert response.json()["error"] == "LEGACY_SIGNATURE_FORMAT"

    async def test_invalid_signature(self, client, auth_headers):
        """Test signature of another key is a 401."""
        headers = auth_headers(ALICE)
        headers["Authorization"] = "Bearer " + base64.b64encode(
            BOB.sign("x")
        ).decode()

        response = await client.get("/api/auth/me", headers=headers)

        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_SIGNATURE"

    async def test_unknown_wallet(self, client, auth_headers):
        """Test valid signature of unknown wallet is a 403."""
        response = await client.get("/api/auth/me", headers=auth_headers(CAROL))

        assert response.status_code == 403
        assert response.json()["error"] == "NOT_AUTHORIZED"
        assert "www-authenticate" not in response.headers
