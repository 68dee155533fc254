# SPDX-License-Identifier: MIT
# Copyright (c) 2025 ripple-auth contributors

"""Example FastAPI application logging users in with Ripple ID.

Run with:
    RIPPLE_CLIENT_ID=... RIPPLE_CLIENT_SECRET=... \
    RIPPLE_CALLBACK_URL=http://localhost:8000/auth/ripple/callback \
    RIPPLE_USER_AGENT=localhost uvicorn examples.fastapi_app:app
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from fastapi import FastAPI

from ripple_auth import RippleProfile, create_auth_router, create_logger, create_strategy

logger = create_logger(logger_type="stdout", level="INFO", name="example")

# In-memory user table keyed by Ripple name
users: dict[str, dict] = {}


def verify(access_token: str, refresh_token: str, profile: RippleProfile) -> dict:
    """Find or create the local user for a Ripple ID profile."""
    user = users.setdefault(profile.identity, {"ripple_name": profile.identity})
    user["email"] = profile.email
    logger.info("User logged in", ripple_name=profile.identity)
    return user


app = FastAPI(title="Ripple ID login example")
app.include_router(create_auth_router(create_strategy(verify=verify)))
