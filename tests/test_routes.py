# SPDX-License-Identifier: MIT
# Copyright (c) 2025 ripple-auth contributors

"""Tests for the FastAPI login routes."""

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ripple_auth import AuthenticationError, RippleStrategy, create_auth_router


def _verify(access_token, refresh_token, profile):
    return profile.to_dict()


@pytest.fixture
def make_app(base_options):
    """Build a test client around a strategy using the given OAuth2 client."""
    def _make(oauth_client, verify=_verify):
        strategy = RippleStrategy({**base_options, "scope": ["user"]}, verify, client=oauth_client)
        app = FastAPI()
        app.include_router(create_auth_router(strategy))
        return TestClient(app)
    return _make


class TestLoginRoutes:
    """Tests for the redirect endpoints."""

    def test_login_redirects(self, make_app, fake_client):
        """Test /login redirects to the authorization dialog."""
        response = make_app(fake_client).get("/auth/ripple/login", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"].startswith("https://id.ripple.com/dialog/authorize")
        assert fake_client.authorization_calls == [{"params": {}, "scope": "user"}]

    def test_register_requests_signup(self, make_app, fake_client):
        """Test /register asks Ripple ID for the registration dialog."""
        response = make_app(fake_client).get("/auth/ripple/register", follow_redirects=False)

        assert response.status_code == 302
        assert fake_client.authorization_calls[0]["params"] == {"_login": "register"}

    def test_cip_done_forwarded(self, make_app, fake_client):
        """Test _cip_done is forwarded from the query string."""
        make_app(fake_client).get("/auth/ripple/login?_cip_done=1", follow_redirects=False)

        assert fake_client.authorization_calls[0]["params"] == {"_cip_done": "1"}


class TestCallbackRoute:
    """Tests for the callback endpoint."""

    def test_success(self, make_app, fake_client):
        """Test a valid callback returns the verified user."""
        response = make_app(fake_client).get("/auth/ripple/callback?code=code-1&state=state-1")

        assert response.status_code == 200
        assert response.json() == {
            "user": {
                "provider": "Ripple",
                "identity": "alice",
                "email": "a@x.com",
                "attestations": ["kyc"],
                "created_at": "2020-01-01",
            }
        }
        assert fake_client.exchange_calls == [("code-1", "state-1")]

    def test_provider_error(self, make_app, fake_client):
        """Test an error from Ripple ID is reported as 401."""
        response = make_app(fake_client).get(
            "/auth/ripple/callback?error=access_denied&error_description=User+denied"
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "User denied"
        assert fake_client.exchange_calls == []

    def test_missing_code(self, make_app, fake_client):
        """Test a callback without code is a bad request."""
        response = make_app(fake_client).get("/auth/ripple/callback?state=state-1")

        assert response.status_code == 400

    def test_invalid_state(self, make_app, make_client):
        """Test authentication errors map to 401."""
        client = make_client(exchange_error=AuthenticationError("Invalid or expired state"))

        response = make_app(client).get("/auth/ripple/callback?code=code-1&state=forged")

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired state"

    def test_identity_lookup_failure(self, make_app, make_client):
        """Test provider failures map to 502."""
        client = make_client(error=httpx.ConnectError("down"))

        response = make_app(client).get("/auth/ripple/callback?code=code-1&state=state-1")

        assert response.status_code == 502

    def test_malformed_profile(self, make_app, make_client):
        """Test a malformed identity response maps to 502."""
        response = make_app(make_client(body="not json")).get(
            "/auth/ripple/callback?code=code-1&state=state-1"
        )

        assert response.status_code == 502

    def test_deeply_nested_profile(self, make_app, make_client):
        """Test an unparseable nested identity response maps to 502."""
        response = make_app(make_client(body="[" * 100000 + "]" * 100000)).get(
            "/auth/ripple/callback?code=code-1&state=state-1"
        )

        assert response.status_code == 502

    def test_verify_rejection(self, make_app, fake_client):
        """Test a rejected user maps to 401."""
        response = make_app(fake_client, verify=lambda at, rt, profile: False).get(
            "/auth/ripple/callback?code=code-1&state=state-1"
        )

        assert response.status_code == 401
