"""
OAuth authorization flow with PKCE
"""
import base64
import hashlib
import secrets
from typing import NamedTuple
from urllib.parse import urlencode

from .constants import ProviderEndpoints, REDIRECT_URI


class PKCEPair(NamedTuple):
    """PKCE code verifier and challenge pair"""
    verifier: str
    challenge: str


class AuthorizationFlow(NamedTuple):
    """OAuth authorization flow data"""
    pkce: PKCEPair
    state: str
    url: str


def generate_pkce() -> PKCEPair:
    """
    Generate PKCE code verifier and challenge.

    RFC 7636 PKCE standard:
    - Verifier: 43-128 characters, base64url encoded (32 bytes -> 43 chars)
    - Challenge: SHA-256 hash of verifier, base64url encoded

    Returns:
        PKCEPair: Tuple of (verifier, challenge)
    """
    verifier = secrets.token_urlsafe(32)

    challenge_bytes = hashlib.sha256(verifier.encode('utf-8')).digest()
    challenge = base64.urlsafe_b64encode(challenge_bytes).decode('utf-8').rstrip('=')

    return PKCEPair(verifier=verifier, challenge=challenge)


def create_state() -> str:
    """
    Generate random state parameter for CSRF protection.

    Returns:
        str: 32-byte random state string
    """
    return secrets.token_urlsafe(32)


def create_authorization_flow(
    endpoints: ProviderEndpoints,
    client_id: str,
    redirect_uri: str = REDIRECT_URI,
) -> AuthorizationFlow:
    """
    Create an authorization-code flow for a provider.

    Args:
        endpoints: Provider OAuth endpoints and scopes
        client_id: OAuth client ID registered with the provider
        redirect_uri: Where the provider sends the user back

    Returns:
        AuthorizationFlow: Tuple of (pkce, state, url)
    """
    pkce = generate_pkce()
    state = create_state()

    params = {
        "response_type": "code",
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "scope": " ".join(endpoints.scopes),
        "state": state,
        "code_challenge": pkce.challenge,
        "code_challenge_method": "S256",
    }
    params.update(dict(endpoints.extra_params))

    url = f"{endpoints.authorize_url}?{urlencode(params)}"

    return AuthorizationFlow(pkce=pkce, state=state, url=url)
