"""Credential record and issuer"""

import secrets
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from settings import CREDENTIAL_LIFETIME_SECONDS


def now_ms() -> int:
    """Current wall-clock time in milliseconds since epoch"""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class CredentialIngredients:
    """What an adapter hands back on a successful exchange

    Any field left as None is generated by the issuer.

    Attributes:
        access_token: Bearer token returned by the provider
        refresh_token: Refresh token returned by the provider
        user_id: Account identifier reported by the provider
        lifetime_seconds: Access token lifetime
    """
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    user_id: Optional[str] = None
    lifetime_seconds: int = CREDENTIAL_LIFETIME_SECONDS


@dataclass(frozen=True)
class Credential:
    """Token bundle produced by a successful authentication

    Attributes:
        provider: Provider id the credential belongs to
        access_token: Opaque bearer token
        refresh_token: Opaque refresh token
        expires_at: Milliseconds since epoch after which access_token is invalid
        user_id: Opaque account identifier, unique per provider + account
    """
    provider: str
    access_token: str
    refresh_token: str
    expires_at: int
    user_id: str

    def is_expired(self, at_ms: Optional[int] = None) -> bool:
        """Check whether the access token is past its expiry"""
        return (at_ms if at_ms is not None else now_ms()) >= self.expires_at

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the callback payload shape"""
        return {
            "provider": self.provider,
            "accessToken": self.access_token,
            "refreshToken": self.refresh_token,
            "expiresAt": self.expires_at,
            "userId": self.user_id,
        }

    def __repr__(self) -> str:
        # Tokens stay out of logs and tracebacks
        return (
            f"Credential(provider={self.provider!r}, user_id={self.user_id!r}, "
            f"expires_at={self.expires_at}, access_token='***', refresh_token='***')"
        )


def _random_token(prefix: str) -> str:
    return f"{prefix}_{secrets.token_urlsafe(24)}"


def issue_credential(
    provider_id: str,
    ingredients: Optional[CredentialIngredients] = None,
    issued_at_ms: Optional[int] = None,
) -> Credential:
    """Assemble a Credential from a successful adapter result

    Every call generates fresh values for whatever the adapter did not
    supply, so two successful attempts never share a token or user id.

    Args:
        provider_id: Provider the credential was issued for
        ingredients: Adapter result (defaults to all-generated)
        issued_at_ms: Issue time override, milliseconds since epoch

    Returns:
        Credential with expires_at = issue time + lifetime

    Raises:
        ValueError: If the lifetime is not positive
    """
    ingredients = ingredients or CredentialIngredients()
    if ingredients.lifetime_seconds <= 0:
        raise ValueError(f"Credential lifetime must be positive, got {ingredients.lifetime_seconds}")

    issued_at = issued_at_ms if issued_at_ms is not None else now_ms()

    return Credential(
        provider=provider_id,
        access_token=ingredients.access_token or _random_token("access"),
        refresh_token=ingredients.refresh_token or _random_token("refresh"),
        expires_at=issued_at + int(ingredients.lifetime_seconds * 1000),
        user_id=ingredients.user_id or f"user_{secrets.token_hex(6)}",
    )
