"""
Redirect-based OAuth adapter

Runs the authorization-code + PKCE exchange through the user's browser
and a local callback server.
"""
import logging
import webbrowser
from typing import Awaitable, Callable, Optional

import httpx

from cloud_auth.credentials import CredentialIngredients
from cloud_auth.errors import ExchangeFailed, UserCancelled
from providers.base_adapter import ProviderAuthAdapter
from settings import CLIENT_ID_ENV_VARS
from .authorization import create_authorization_flow
from .callback_server import OAuthCallbackServer, start_callback_server
from .constants import CALLBACK_TIMEOUT_SECONDS, REDIRECT_URI, ProviderEndpoints
from .jwt_utils import extract_subject
from .token_exchange import exchange_code_for_tokens
from .validators import is_valid_client_id

logger = logging.getLogger(__name__)

# Provider error codes that mean the user declined rather than a failure
USER_DECLINED_ERRORS = {"access_denied", "consent_required", "user_cancelled"}


class OAuthRedirectAdapter(ProviderAuthAdapter):
    """Authenticate with a provider through a browser redirect"""

    def __init__(
        self,
        provider_id: str,
        endpoints: ProviderEndpoints,
        client_id: str,
        redirect_uri: str = REDIRECT_URI,
        callback_timeout: float = CALLBACK_TIMEOUT_SECONDS,
        open_browser: Callable[[str], bool] = webbrowser.open,
        server_factory: Callable[[str], Awaitable[OAuthCallbackServer]] = start_callback_server,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize OAuth adapter

        Args:
            provider_id: Catalog id
            endpoints: Provider OAuth endpoints and scopes
            client_id: OAuth client ID from the environment
            redirect_uri: Callback URL registered with the provider
            callback_timeout: Seconds to wait for the browser round-trip
            open_browser: Opens the authorization URL, returns False on failure
            server_factory: Starts a callback server for an expected state
            http_client: Optional shared client for the token exchange
        """
        super().__init__(provider_id)
        self.endpoints = endpoints
        self.client_id = client_id
        self.redirect_uri = redirect_uri
        self.callback_timeout = callback_timeout
        self._open_browser = open_browser
        self._server_factory = server_factory
        self._http_client = http_client

    async def authenticate(self) -> CredentialIngredients:
        if not is_valid_client_id(self.client_id):
            env_var = CLIENT_ID_ENV_VARS.get(self.provider_id, "the provider client ID")
            raise ExchangeFailed(f"No valid OAuth client ID configured for {self.provider_id} (set {env_var})")

        flow = create_authorization_flow(self.endpoints, self.client_id, self.redirect_uri)

        try:
            server = await self._server_factory(flow.state)
        except OSError as e:
            raise ExchangeFailed(f"Could not start OAuth callback server: {e}")

        try:
            logger.info(f"[{self.provider_id}] Opening browser for authorization")
            if not self._open_browser(flow.url):
                logger.warning(f"[{self.provider_id}] Could not open browser, visit manually: {flow.url}")
            result = await server.wait_for_callback(timeout=self.callback_timeout)
        finally:
            await server.stop()

        if result is None:
            raise ExchangeFailed(f"Authorization timeout after {self.callback_timeout:g} seconds")

        if not result.ok:
            if result.error in USER_DECLINED_ERRORS:
                raise UserCancelled()
            detail = result.error_description or result.error or "no authorization code returned"
            raise ExchangeFailed(f"Authorization failed: {detail}")

        logger.debug(f"[{self.provider_id}] Authorization code received, exchanging")
        tokens = await exchange_code_for_tokens(
            self.endpoints.token_url,
            self.client_id,
            result.code,
            flow.pkce.verifier,
            self.redirect_uri,
            client=self._http_client,
        )

        return CredentialIngredients(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            user_id=tokens.account_id or extract_subject(tokens.id_token),
            lifetime_seconds=tokens.expires_in,
        )
