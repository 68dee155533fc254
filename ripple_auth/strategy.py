# SPDX-License-Identifier: MIT
# Copyright (c) 2025 ripple-auth contributors

"""Ripple ID authentication strategy.

The strategy authenticates users by delegating to Ripple ID over OAuth 2.0.
Applications supply a ``verify`` callable that receives the access token,
optionally the refresh token and raw token response, and the normalized
``RippleProfile``, and returns the application user (or a falsy value if
the credentials are not acceptable).

Example:
    >>> def verify(access_token, refresh_token, profile):
    ...     return users.find_or_create(ripple_name=profile.identity)
    >>>
    >>> strategy = RippleStrategy(
    ...     {
    ...         "clientID": "123-456-789",
    ...         "clientSecret": "shhh-its-a-secret",
    ...         "callbackURL": "https://www.example.net/auth/ripple/callback",
    ...         "userAgent": "myapp.com",
    ...     },
    ...     verify,
    ... )
"""

import inspect
import json
from typing import Any, Callable, Dict, Mapping, Optional

from .config import OptionsInput, resolve_options
from .httpx_client import HttpxOAuth2Client
from .log import Logger, create_logger
from .models import RippleProfile
from .oauth2 import AuthenticationError, InternalOAuthError, OAuth2Client

ProfileCallback = Callable[[Optional[BaseException], Optional[RippleProfile]], Any]

SUPPORTED_VERIFY_ARITIES = (2, 3, 4)

# Raised by json.loads for malformed, non-text or too deeply nested bodies
PROFILE_PARSE_ERRORS = (ValueError, TypeError, RecursionError)


class RippleStrategy:
    """OAuth 2.0 strategy for Ripple ID.

    Attributes:
        name: Strategy identifier used by host registries ("ripple")
        options: Resolved, immutable StrategyOptions
        client: OAuth2Client that performs the authorization-code flow
    """

    name = "ripple"

    def __init__(
        self,
        options: OptionsInput,
        verify: Callable[..., Any],
        client: Optional[OAuth2Client] = None,
        logger: Optional[Logger] = None,
    ):
        """Initialize the strategy.

        Args:
            options: Strategy options (clientID, clientSecret, callbackURL,
                scope, userAgent, ...); missing endpoints get defaults
            verify: Callable taking (access_token, profile),
                (access_token, refresh_token, profile) or
                (access_token, refresh_token, params, profile)
            client: OAuth2Client to delegate to; an HttpxOAuth2Client is
                built from the options when omitted
            logger: Logger; defaults to a stdout logger

        Raises:
            TypeError: If verify is not callable or has an unsupported arity
        """
        if not callable(verify):
            raise TypeError("RippleStrategy requires a verify callback")

        self.options = resolve_options(options)
        self._verify = verify
        self._verify_arity = _positional_arity(verify)
        self.logger = logger or create_logger(name="ripple_auth.strategy")

        self.client = client or HttpxOAuth2Client(
            client_id=self.options.client_id,
            client_secret=self.options.client_secret,
            callback_url=self.options.callback_url,
            authorization_endpoint=self.options.authorization_url,
            token_endpoint=self.options.token_url,
            custom_headers=self.options.custom_headers,
        )

    @property
    def user_profile_url(self) -> str:
        return self.options.user_profile_url

    def user_profile(self, access_token: str, done: ProfileCallback) -> None:
        """Retrieve the user profile from Ripple ID.

        ``done`` is called exactly once, either as ``done(error, None)`` or
        as ``done(None, profile)``. Transport errors are wrapped in an
        InternalOAuthError; a body that cannot be parsed is reported as the
        raw parse error (usually ``json.JSONDecodeError``).

        Args:
            access_token: Access token obtained from the token exchange
            done: Completion callback accepting (error, profile)
        """
        try:
            profile = self.fetch_profile(access_token)
        except (InternalOAuthError, *PROFILE_PARSE_ERRORS) as e:
            done(e, None)
            return

        done(None, profile)

    def fetch_profile(self, access_token: str) -> RippleProfile:
        """Retrieve the user profile, raising instead of using a callback.

        Returns:
            RippleProfile with provider set to "Ripple"

        Raises:
            InternalOAuthError: If the identity endpoint request fails
            ValueError: If the response body is not valid JSON (including
                json.JSONDecodeError and UnicodeDecodeError)
            RecursionError: If the body is nested too deeply to parse
        """
        try:
            body = self.client.get(
                self.options.user_profile_url,
                access_token,
                headers=self.options.custom_headers,
            )
        except InternalOAuthError as e:
            self.logger.warning("Identity lookup failed", error=str(e))
            raise InternalOAuthError("failed to fetch user profile", e.oauth_error or e) from e

        try:
            parsed = json.loads(body)
        except PROFILE_PARSE_ERRORS as e:
            self.logger.warning("Identity response is not valid JSON", error_type=type(e).__name__)
            raise

        profile = RippleProfile.from_response(parsed)
        self.logger.debug("Fetched Ripple ID profile", identity=profile.identity)
        return profile

    def authorization_params(self, options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Return extra parameters for the authorization request.

        Recognized options:
            _type: "signup" tells Ripple ID to register a new user
            _cip_done: marks that the user completed the Customer
                Identification Process with the caller; forwarded verbatim

        Args:
            options: Per-request options

        Returns:
            Query parameters to merge into the authorization redirect
        """
        options = options or {}
        params: Dict[str, Any] = {}

        if options.get("_type") == "signup":
            params["_login"] = "register"
        if options.get("_cip_done"):
            params["_cip_done"] = options["_cip_done"]

        return params

    def authorization_url(self, **options: Any) -> tuple[str, str]:
        """Build the Ripple ID authorization redirect for one login attempt.

        Args:
            **options: Per-request options; ``scope`` overrides the
                configured scopes, see authorization_params for the rest

        Returns:
            Tuple of (authorization_url, state)
        """
        scope_override = options.pop("scope", None)
        if scope_override:
            scope = resolve_options(self.options, scope=scope_override).scope_string
        else:
            scope = self.options.scope_string

        url, state = self.client.authorization_url(
            params=self.authorization_params(options),
            scope=scope,
        )
        self.logger.info(
            "Initiated Ripple ID login",
            signup=options.get("_type") == "signup",
        )
        return url, state

    def authenticate(self, code: str, state: str) -> Any:
        """Complete a login from the provider callback.

        Exchanges the code, fetches the profile and hands both to the verify
        callback.

        Returns:
            Whatever the verify callback returns

        Raises:
            AuthenticationError: If the code/state is rejected or verify
                returns a falsy user
            InternalOAuthError: If the provider cannot be reached
            ValueError, RecursionError: If the identity response is malformed
        """
        token_response = self.client.exchange_code(code, state)
        access_token = token_response["access_token"]
        refresh_token = token_response.get("refresh_token")

        profile = self.fetch_profile(access_token)

        if self._verify_arity == 4:
            user = self._verify(access_token, refresh_token, token_response, profile)
        elif self._verify_arity == 3:
            user = self._verify(access_token, refresh_token, profile)
        else:
            user = self._verify(access_token, profile)

        if not user:
            self.logger.warning("Verify callback rejected user", identity=profile.identity)
            raise AuthenticationError("User rejected by verify callback")

        self.logger.info("Ripple ID login succeeded", identity=profile.identity)
        return user


def _positional_arity(func: Callable[..., Any]) -> int:
    """Number of positional arguments ``func`` accepts."""
    params = inspect.signature(func).parameters.values()
    if any(p.kind == inspect.Parameter.VAR_POSITIONAL for p in params):
        return 4

    arity = sum(
        1 for p in params
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    )
    if arity not in SUPPORTED_VERIFY_ARITIES:
        raise TypeError(
            f"verify callback must accept {', '.join(map(str, SUPPORTED_VERIFY_ARITIES))} "
            f"positional arguments, got {arity}"
        )
    return arity
