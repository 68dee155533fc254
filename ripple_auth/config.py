# SPDX-License-Identifier: MIT
# Copyright (c) 2025 ripple-auth contributors

"""Strategy configuration.

Options are accepted under the camelCase keys used by Ripple ID client
libraries (``clientID``, ``callbackURL``, ...) or the snake_case field
names. ``resolve_options`` returns a new, fully-populated and frozen
``StrategyOptions`` value; the caller's mapping is never modified.
"""

import os
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

DEFAULT_AUTHORIZATION_URL = "https://id.ripple.com/dialog/authorize"
DEFAULT_TOKEN_URL = "https://id.ripple.com/oauth/token"
DEFAULT_USER_PROFILE_URL = "https://id.ripple.com/api/identity/profile"
DEFAULT_SCOPE_SEPARATOR = ","
DEFAULT_USER_AGENT = "ripple-auth"

USER_AGENT_HEADER = "User-Agent"

# Environment variable -> option field
ENV_VARS = {
    "RIPPLE_CLIENT_ID": "client_id",
    "RIPPLE_CLIENT_SECRET": "client_secret",
    "RIPPLE_CALLBACK_URL": "callback_url",
    "RIPPLE_SCOPE": "scope",
    "RIPPLE_AUTHORIZATION_URL": "authorization_url",
    "RIPPLE_TOKEN_URL": "token_url",
    "RIPPLE_USER_PROFILE_URL": "user_profile_url",
    "RIPPLE_USER_AGENT": "user_agent",
}


class StrategyOptions(BaseModel):
    """Resolved Ripple ID strategy options.

    Attributes:
        client_id: Ripple ID application client ID
        client_secret: Ripple ID application client secret
        callback_url: URL Ripple ID redirects to after authorization
        scope: Permission scopes to request ("user", "funds" or none)
        authorization_url: Authorization dialog endpoint
        token_url: Token exchange endpoint
        user_profile_url: Identity profile endpoint
        scope_separator: Separator used to join scopes in the redirect
        user_agent: Identifies the calling application, e.g. its domain
        custom_headers: Read-only headers sent with every API request;
            always contains a non-empty ``User-Agent``
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    client_id: Optional[Any] = Field(default=None, alias="clientID")
    client_secret: Optional[Any] = Field(default=None, alias="clientSecret")
    callback_url: Optional[Any] = Field(default=None, alias="callbackURL")
    scope: List[str] = Field(default_factory=list)
    authorization_url: str = Field(default=DEFAULT_AUTHORIZATION_URL, alias="authorizationURL")
    token_url: str = Field(default=DEFAULT_TOKEN_URL, alias="tokenURL")
    user_profile_url: str = Field(default=DEFAULT_USER_PROFILE_URL, alias="userProfileURL")
    scope_separator: str = Field(default=DEFAULT_SCOPE_SEPARATOR, alias="scopeSeparator")
    user_agent: Optional[Any] = Field(default=None, alias="userAgent")
    custom_headers: Mapping[str, Any] = Field(default_factory=dict, alias="customHeaders")

    @field_validator("scope", mode="before")
    @classmethod
    def _coerce_scope(cls, value: Any) -> List[str]:
        if not value:
            return []
        if isinstance(value, str):
            return [value]
        return list(value)

    @field_validator(
        "authorization_url", "token_url", "user_profile_url", "scope_separator", mode="before"
    )
    @classmethod
    def _default_when_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if not value:
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("custom_headers", mode="before")
    @classmethod
    def _copy_headers(cls, value: Any) -> Dict[str, Any]:
        return dict(value or {})

    @model_validator(mode="after")
    def _ensure_user_agent(self) -> "StrategyOptions":
        headers = dict(self.custom_headers)
        if not headers.get(USER_AGENT_HEADER):
            headers[USER_AGENT_HEADER] = self.user_agent or DEFAULT_USER_AGENT
        # Bypasses frozen assignment; headers are exposed read-only
        object.__setattr__(self, "custom_headers", MappingProxyType(headers))
        return self

    @property
    def scope_string(self) -> Optional[str]:
        """Scopes joined with the configured separator, or None if empty."""
        if not self.scope:
            return None
        return self.scope_separator.join(self.scope)


OptionsInput = Union[StrategyOptions, Mapping[str, Any], None]

_FIELD_NAMES = {f.alias: name for name, f in StrategyOptions.model_fields.items() if f.alias}


def _by_field_name(options: Mapping[str, Any]) -> Dict[str, Any]:
    return {_FIELD_NAMES.get(key, key): value for key, value in options.items()}


def resolve_options(options: OptionsInput = None, **overrides: Any) -> StrategyOptions:
    """Return fully-populated strategy options.

    Missing endpoints and the scope separator get Ripple ID defaults. The
    ``User-Agent`` header is taken from ``customHeaders`` if present, else
    from ``userAgent``, else ``DEFAULT_USER_AGENT``. Client credentials are
    not checked here.

    Args:
        options: Partial options mapping or an existing StrategyOptions
        **overrides: Options that take precedence over ``options``

    Returns:
        A new frozen StrategyOptions value
    """
    if isinstance(options, StrategyOptions):
        if not overrides:
            return options
        data: Dict[str, Any] = {name: getattr(options, name) for name in StrategyOptions.model_fields}
    else:
        data = _by_field_name(options or {})

    data.update(_by_field_name(overrides))
    return StrategyOptions.model_validate(data)


def load_options_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Read strategy options from ``RIPPLE_*`` environment variables.

    Empty variables are skipped. ``RIPPLE_SCOPE`` is comma separated.

    Returns:
        Options mapping suitable for resolve_options
    """
    environ = os.environ if environ is None else environ
    options: Dict[str, Any] = {}

    for env_var, field_name in ENV_VARS.items():
        value = environ.get(env_var)
        if not value:
            continue
        if field_name == "scope":
            options[field_name] = [s.strip() for s in value.split(",") if s.strip()]
        else:
            options[field_name] = value

    return options
