# SPDX-License-Identifier: MIT
# Copyright (c) 2025 ripple-auth contributors

"""Default OAuth 2.0 client built on httpx.

Implements the authorization-code flow pieces the strategy delegates:
redirect construction with a single-use ``state``, code exchange at the
token endpoint and bearer-authenticated GET requests.
"""

import secrets
import threading
import time
from typing import Any, Dict, Mapping, Optional

import httpx

from .log import create_logger
from .oauth2 import AuthenticationError, InternalOAuthError, OAuth2Client

logger = create_logger(name="ripple_auth.httpx_client")


class HttpxOAuth2Client(OAuth2Client):
    """OAuth 2.0 authorization-code client using httpx.

    Attributes:
        client_id: OAuth client ID
        client_secret: OAuth client secret
        callback_url: Redirect URI registered with the provider
        authorization_endpoint: Provider authorization dialog URL
        token_endpoint: Provider token URL
        custom_headers: Headers sent with every request to the provider
        state_ttl: Seconds an issued state remains valid
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        client_id: Optional[Any],
        client_secret: Optional[Any],
        callback_url: Optional[Any],
        authorization_endpoint: str,
        token_endpoint: str,
        custom_headers: Optional[Mapping[str, Any]] = None,
        state_ttl: int = 600,
        timeout: float = 10.0,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.callback_url = callback_url
        self.authorization_endpoint = authorization_endpoint
        self.token_endpoint = token_endpoint
        self.custom_headers = _header_values(custom_headers)
        self.state_ttl = state_ttl
        self.timeout = timeout

        # state -> monotonic issue time
        self._pending_states: Dict[str, float] = {}
        self._lock = threading.Lock()

    def authorization_url(
        self,
        params: Optional[Mapping[str, Any]] = None,
        scope: Optional[str] = None,
    ) -> tuple[str, str]:
        """Build the authorization redirect and register a fresh state.

        Standard parameters take precedence over ``params`` with the same name.

        Returns:
            Tuple of (authorization_url, state)
        """
        state = secrets.token_urlsafe(32)

        query: Dict[str, Any] = dict(params or {})
        query.update({
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.callback_url,
            "state": state,
        })
        if scope:
            query["scope"] = scope

        query = {k: v for k, v in query.items() if v is not None}
        url = httpx.URL(self.authorization_endpoint).copy_merge_params(query)

        with self._lock:
            self._purge_expired_states()
            self._pending_states[state] = time.monotonic()

        return str(url), state

    def exchange_code(self, code: str, state: str) -> Dict[str, Any]:
        """Validate ``state`` and exchange ``code`` at the token endpoint.

        The state is consumed whether or not the exchange succeeds.

        Raises:
            AuthenticationError: If the state is unknown or expired, the
                provider rejects the code, or no access token is returned
            InternalOAuthError: If the token endpoint is unavailable or
                returns a malformed body
        """
        self._consume_state(state)

        data = {
            "grant_type": "authorization_code",
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.callback_url,
        }

        try:
            response = httpx.post(
                self.token_endpoint,
                data={k: v for k, v in data.items() if v is not None},
                headers={**self.custom_headers, "Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            token_response = response.json()

        except httpx.HTTPStatusError as e:
            logger.warning(
                "Token exchange rejected by provider",
                status_code=e.response.status_code,
            )
            raise AuthenticationError(f"Token exchange failed: {e}") from e
        except httpx.HTTPError as e:
            raise InternalOAuthError("failed to obtain access token", e) from e
        except ValueError as e:
            raise InternalOAuthError("failed to parse token response", e) from e

        if not isinstance(token_response, dict) or not token_response.get("access_token"):
            raise AuthenticationError("No access token in response")

        logger.debug("Exchanged authorization code for access token")
        return token_response

    def get(
        self,
        url: str,
        access_token: str,
        headers: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """GET ``url`` with a bearer token and return the response text.

        Raises:
            InternalOAuthError: If the request fails or returns an error status
        """
        request_headers = {**self.custom_headers, **_header_values(headers)}
        request_headers["Authorization"] = f"Bearer {access_token}"

        try:
            response = httpx.get(url, headers=request_headers, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise InternalOAuthError(f"GET {url} failed", e) from e

        return response.text

    def pending_state_count(self) -> int:
        """Number of issued states not yet consumed or expired."""
        with self._lock:
            self._purge_expired_states()
            return len(self._pending_states)

    def _consume_state(self, state: str) -> None:
        with self._lock:
            issued_at = self._pending_states.pop(state, None) if state else None

        if issued_at is None:
            raise AuthenticationError("Invalid or expired state")
        if time.monotonic() - issued_at > self.state_ttl:
            raise AuthenticationError("Invalid or expired state")

    def _purge_expired_states(self) -> None:
        # Caller holds self._lock
        now = time.monotonic()
        expired = [s for s, issued in self._pending_states.items() if now - issued > self.state_ttl]
        for s in expired:
            del self._pending_states[s]
        if expired:
            logger.debug(f"Purged {len(expired)} expired authorization states")



def _header_values(headers: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    # httpx only accepts str or bytes header values
    return {name: str(value) for name, value in (headers or {}).items()}
