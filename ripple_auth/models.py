# SPDX-License-Identifier: MIT
# Copyright (c) 2025 ripple-auth contributors

"""Profile model returned by the Ripple ID identity endpoint."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

PROVIDER_NAME = "Ripple"

# Fields copied from the identity response into the normalized profile
PROFILE_FIELDS = ("identity", "email", "attestations", "created_at")


@dataclass
class RippleProfile:
    """Normalized Ripple ID user profile.

    Values are copied verbatim from the identity response without coercion
    or presence checks, so a field the provider omits is ``None``.

    Attributes:
        identity: Provider-assigned user identifier (the user's Ripple name)
        email: User's email address
        attestations: Opaque list of verification claims
        created_at: Account creation timestamp as formatted by the provider
        provider: Always ``"Ripple"``
        raw: The full parsed response body
    """
    identity: Any = None
    email: Any = None
    attestations: Any = None
    created_at: Any = None
    provider: str = PROVIDER_NAME
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, body: Any) -> "RippleProfile":
        """Build a profile from a parsed identity response.

        Anything other than a JSON object yields an empty profile.
        """
        data = body if isinstance(body, dict) else {}
        return cls(
            **{name: data.get(name) for name in PROFILE_FIELDS},
            raw=dict(data),
        )

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """Dictionary-style access to the normalized fields."""
        return self.to_dict().get(key, default)

    def to_dict(self) -> dict:
        """Convert the profile to a dictionary for serialization.

        Returns:
            Dictionary with ``provider`` and the four normalized fields
        """
        return {
            "provider": self.provider,
            "identity": self.identity,
            "email": self.email,
            "attestations": self.attestations,
            "created_at": self.created_at,
        }
