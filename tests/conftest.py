# SPDX-License-Identifier: MIT
# Copyright (c) 2025 ripple-auth contributors

"""Shared fixtures for ripple_auth tests."""

import json

import pytest

from ripple_auth import InternalOAuthError, OAuth2Client, SilentLogger

PROFILE_BODY = {
    "identity": "alice",
    "email": "a@x.com",
    "attestations": ["kyc"],
    "created_at": "2020-01-01",
}


class FakeOAuth2Client(OAuth2Client):
    """In-memory OAuth2Client recording every call."""

    def __init__(self, body=None, error=None, token_response=None, exchange_error=None):
        self.body = json.dumps(PROFILE_BODY) if body is None else body
        self.error = error
        self.token_response = token_response or {
            "access_token": "access-123",
            "refresh_token": "refresh-456",
            "token_type": "bearer",
        }
        self.exchange_error = exchange_error
        self.get_calls = []
        self.authorization_calls = []
        self.exchange_calls = []

    def authorization_url(self, params=None, scope=None):
        self.authorization_calls.append({"params": dict(params or {}), "scope": scope})
        return "https://id.ripple.com/dialog/authorize?state=state-1", "state-1"

    def exchange_code(self, code, state):
        self.exchange_calls.append((code, state))
        if self.exchange_error is not None:
            raise self.exchange_error
        return self.token_response

    def get(self, url, access_token, headers=None):
        self.get_calls.append({"url": url, "access_token": access_token, "headers": dict(headers or {})})
        if self.error is not None:
            raise InternalOAuthError(f"GET {url} failed", self.error)
        return self.body


@pytest.fixture
def fake_client():
    """Fake OAuth2 client returning a valid profile body."""
    return FakeOAuth2Client()


@pytest.fixture
def silent_logger():
    """Logger that captures records in memory."""
    return SilentLogger(name="ripple_auth.test")


@pytest.fixture
def verify_calls():
    """List collecting the arguments passed to verify callbacks."""
    return []


@pytest.fixture
def base_options():
    """Minimal valid strategy options."""
    return {
        "clientID": "123-456-789",
        "clientSecret": "shhh-its-a-secret",
        "callbackURL": "https://www.example.net/auth/ripple/callback",
    }


@pytest.fixture
def make_client():
    """Factory for FakeOAuth2Client instances with custom behavior."""
    return FakeOAuth2Client
