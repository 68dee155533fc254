# SPDX-License-Identifier: MIT
# Copyright (c) 2025 ripple-auth contributors

"""FastAPI routes that drive a Ripple ID login.

Mount the router on a host application::

    app = FastAPI()
    app.include_router(create_auth_router(strategy))

    # GET /auth/ripple/login     -> redirect to Ripple ID
    # GET /auth/ripple/register  -> redirect to Ripple ID registration
    # GET /auth/ripple/callback  -> {"user": <verify result>}
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import RedirectResponse

from .log import create_logger
from .oauth2 import AuthenticationError, InternalOAuthError
from .strategy import PROFILE_PARSE_ERRORS, RippleStrategy

logger = create_logger(name="ripple_auth.routes")


def create_auth_router(strategy: RippleStrategy, prefix: str = "/auth/ripple") -> APIRouter:
    """Create a router exposing login, register and callback endpoints.

    Args:
        strategy: Configured RippleStrategy
        prefix: Path prefix for the endpoints

    Returns:
        FastAPI APIRouter
    """
    router = APIRouter(prefix=prefix, tags=[strategy.name])

    def _redirect(options: Dict[str, Any]) -> RedirectResponse:
        url, _ = strategy.authorization_url(**options)
        return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)

    # Endpoints are sync so the blocking provider calls run in the threadpool
    @router.get("/login")
    def login(
        cip_done: Optional[str] = Query(None, alias="_cip_done"),
    ) -> RedirectResponse:
        """Redirect to the Ripple ID authorization dialog."""
        return _redirect({"_cip_done": cip_done})

    @router.get("/register")
    def register(
        cip_done: Optional[str] = Query(None, alias="_cip_done"),
    ) -> RedirectResponse:
        """Redirect to the Ripple ID dialog in registration mode."""
        return _redirect({"_type": "signup", "_cip_done": cip_done})

    @router.get("/callback")
    def callback(
        code: Optional[str] = Query(None),
        state: Optional[str] = Query(None),
        error: Optional[str] = Query(None),
        error_description: Optional[str] = Query(None),
    ) -> Dict[str, Any]:
        """Complete the login and return the verified user."""
        if error:
            logger.warning("Ripple ID returned an authorization error", error=error)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=error_description or error,
            )

        if not code or not state:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing code or state",
            )

        try:
            user = strategy.authenticate(code, state)
        except AuthenticationError as e:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
        except (InternalOAuthError, *PROFILE_PARSE_ERRORS) as e:
            logger.error(f"Ripple ID login failed: {e}")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Identity provider request failed",
            )

        return {"user": user}

    return router
