"""
OAuth authorization code exchange
"""
import logging
from typing import Any, Dict, Optional

import httpx

from cloud_auth.errors import ExchangeFailed
from settings import CREDENTIAL_LIFETIME_SECONDS, HTTP_TIMEOUT

logger = logging.getLogger(__name__)


class TokenResponse:
    """OAuth token response"""

    def __init__(
        self,
        access_token: str,
        refresh_token: Optional[str],
        expires_in: int,
        token_type: str = "Bearer",
        id_token: Optional[str] = None,
        account_id: Optional[str] = None,
    ):
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.expires_in = expires_in
        self.token_type = token_type
        self.id_token = id_token
        self.account_id = account_id

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenResponse":
        """Build from a token endpoint JSON body"""
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_in=int(data.get("expires_in") or CREDENTIAL_LIFETIME_SECONDS),
            token_type=data.get("token_type", "Bearer"),
            id_token=data.get("id_token"),
            # Dropbox reports the account directly
            account_id=data.get("account_id"),
        )


async def exchange_code_for_tokens(
    token_url: str,
    client_id: str,
    code: str,
    code_verifier: str,
    redirect_uri: str,
    client: Optional[httpx.AsyncClient] = None,
) -> TokenResponse:
    """
    Exchange authorization code for access and refresh tokens.

    Args:
        token_url: Provider token endpoint
        client_id: OAuth client ID
        code: Authorization code from callback
        code_verifier: PKCE code verifier
        redirect_uri: OAuth redirect URI used in the authorization request
        client: Optional shared HTTP client

    Returns:
        TokenResponse

    Raises:
        ExchangeFailed: If the endpoint rejects the code or cannot be reached
    """
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=HTTP_TIMEOUT)

    try:
        response = await client.post(
            token_url,
            data={
                "grant_type": "authorization_code",
                "client_id": client_id,
                "code": code,
                "code_verifier": code_verifier,
                "redirect_uri": redirect_uri,
            },
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
            },
        )
    except httpx.HTTPError as e:
        logger.error(f"Token endpoint unreachable: {e}")
        raise ExchangeFailed(f"Token exchange failed: {e}")
    finally:
        if owns_client:
            await client.aclose()

    if response.status_code != 200:
        logger.error(f"Token exchange failed: {response.status_code}")
        logger.debug(f"Token endpoint response: {response.text}")
        raise ExchangeFailed(f"Token exchange failed: {response.status_code} - {response.text}")

    try:
        data = response.json()
        return TokenResponse.from_dict(data)
    except (ValueError, KeyError) as e:
        raise ExchangeFailed(f"Token exchange returned an invalid response: {e}")
