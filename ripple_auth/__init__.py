# SPDX-License-Identifier: MIT
# Copyright (c) 2025 ripple-auth contributors

"""Ripple ID OAuth 2.0 authentication strategy.

Lets a host application delegate user login to Ripple ID. The strategy
configures the Ripple ID endpoints, sends the required User-Agent header,
normalizes the identity profile and forwards Ripple-specific authorization
parameters; the authorization-code flow runs in a pluggable OAuth2Client.
"""

__version__ = "0.1.0"

from .config import (
    DEFAULT_AUTHORIZATION_URL,
    DEFAULT_TOKEN_URL,
    DEFAULT_USER_AGENT,
    DEFAULT_USER_PROFILE_URL,
    StrategyOptions,
    load_options_from_env,
    resolve_options,
)
from .factory import create_strategy, get_strategy_class
from .httpx_client import HttpxOAuth2Client
from .log import Logger, SilentLogger, StdoutLogger, create_logger
from .models import RippleProfile
from .oauth2 import AuthenticationError, InternalOAuthError, OAuth2Client
from .routes import create_auth_router
from .strategy import RippleStrategy

Strategy = RippleStrategy

__all__ = [
    # Version
    "__version__",
    # Strategy
    "RippleStrategy",
    "Strategy",
    "create_strategy",
    "get_strategy_class",
    # Configuration
    "StrategyOptions",
    "resolve_options",
    "load_options_from_env",
    "DEFAULT_AUTHORIZATION_URL",
    "DEFAULT_TOKEN_URL",
    "DEFAULT_USER_PROFILE_URL",
    "DEFAULT_USER_AGENT",
    # Models
    "RippleProfile",
    # OAuth 2.0 client
    "OAuth2Client",
    "HttpxOAuth2Client",
    # Exceptions
    "AuthenticationError",
    "InternalOAuthError",
    # Logging
    "Logger",
    "StdoutLogger",
    "SilentLogger",
    "create_logger",
    # Routes
    "create_auth_router",
]
