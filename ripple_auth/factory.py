# SPDX-License-Identifier: MIT
# Copyright (c) 2025 ripple-auth contributors

"""Factory for creating strategies from explicit options or the environment."""

from typing import Any, Callable, Dict, Optional, Type

from .config import OptionsInput, load_options_from_env, resolve_options
from .oauth2 import OAuth2Client
from .strategy import RippleStrategy

STRATEGIES: Dict[str, Type[RippleStrategy]] = {
    RippleStrategy.name: RippleStrategy,
}


def get_strategy_class(name: str) -> Type[RippleStrategy]:
    """Look up a strategy class by its registry name.

    Raises:
        ValueError: If no strategy is registered under ``name``
    """
    try:
        return STRATEGIES[name.lower()]
    except (KeyError, AttributeError):
        raise ValueError(
            f"Unknown strategy: {name}. "
            f"Supported strategies: {', '.join(sorted(STRATEGIES))}"
        ) from None


def create_strategy(
    options: OptionsInput = None,
    verify: Optional[Callable[..., Any]] = None,
    client: Optional[OAuth2Client] = None,
    name: str = RippleStrategy.name,
    **kwargs: Any,
) -> RippleStrategy:
    """Create a strategy.

    When ``options`` is omitted they are read from the ``RIPPLE_*``
    environment variables. Keyword arguments override either source.

    Args:
        options: Strategy options mapping or StrategyOptions
        verify: Verify callback (required)
        client: Optional OAuth2Client to delegate to
        name: Registry name of the strategy to build
        **kwargs: Option overrides, e.g. user_agent="myapp.com"

    Returns:
        Configured strategy instance

    Raises:
        ValueError: If verify is missing or the strategy name is unknown

    Examples:
        >>> strategy = create_strategy(verify=verify)  # RIPPLE_CLIENT_ID etc.

        >>> strategy = create_strategy(
        ...     {"clientID": "id", "clientSecret": "secret"},
        ...     verify=verify,
        ...     user_agent="myapp.com",
        ... )
    """
    if verify is None:
        raise ValueError("verify callback is required to create a strategy")

    strategy_class = get_strategy_class(name)

    if options is None:
        options = load_options_from_env()

    return strategy_class(resolve_options(options, **kwargs), verify, client=client)
