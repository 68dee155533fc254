# SPDX-License-Identifier: MIT
# Copyright (c) 2025 ripple-auth contributors

"""OAuth 2.0 client interface used by the Ripple ID strategy.

The strategy does not implement the authorization-code flow itself. It
holds an ``OAuth2Client`` and talks to it through the three operations
defined here, so the default httpx implementation can be swapped for any
other client (or a fake in tests).
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional


class OAuth2Client(ABC):
    """Abstract OAuth 2.0 authorization-code client."""

    @abstractmethod
    def authorization_url(
        self,
        params: Optional[Mapping[str, Any]] = None,
        scope: Optional[str] = None,
    ) -> tuple[str, str]:
        """Build the provider authorization redirect.

        Args:
            params: Extra query parameters to merge into the redirect URL
            scope: Scope string to request, already joined

        Returns:
            Tuple of (authorization_url, state)
        """
        pass

    @abstractmethod
    def exchange_code(self, code: str, state: str) -> Dict[str, Any]:
        """Exchange an authorization code for tokens.

        Args:
            code: Authorization code from the callback
            state: State value from the callback

        Returns:
            Token response containing at least ``access_token``

        Raises:
            AuthenticationError: If the state or code is rejected
            InternalOAuthError: If the token endpoint is unavailable
        """
        pass

    @abstractmethod
    def get(
        self,
        url: str,
        access_token: str,
        headers: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Issue an authenticated GET and return the raw response body.

        Raises:
            InternalOAuthError: On any transport or provider error
        """
        pass


class AuthenticationError(Exception):
    """Raised when a login attempt is rejected."""
    pass


class InternalOAuthError(Exception):
    """Raised when a request to the provider fails.

    Attributes:
        oauth_error: The underlying transport or provider error
    """

    def __init__(self, message: str, oauth_error: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.oauth_error = oauth_error
        if oauth_error is not None:
            self.__cause__ = oauth_error

    def __str__(self) -> str:
        if self.oauth_error is None:
            return self.message
        return f"{self.message}: {self.oauth_error}"
