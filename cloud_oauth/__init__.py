"""
Redirect-based OAuth for cloud storage providers
"""
from .constants import (
    ProviderEndpoints,
    PROVIDER_ENDPOINTS,
    REDIRECT_URI,
    CALLBACK_TIMEOUT_SECONDS,
)
from .authorization import (
    PKCEPair,
    AuthorizationFlow,
    generate_pkce,
    create_state,
    create_authorization_flow,
)
from .token_exchange import (
    TokenResponse,
    exchange_code_for_tokens,
)
from .jwt_utils import (
    decode_jwt,
    extract_subject,
)
from .callback_server import (
    CallbackResult,
    OAuthCallbackServer,
    start_callback_server,
)
from .validators import is_valid_client_id, get_configured_providers
from .adapter import OAuthRedirectAdapter

__all__ = [
    # Constants
    "ProviderEndpoints",
    "PROVIDER_ENDPOINTS",
    "REDIRECT_URI",
    "CALLBACK_TIMEOUT_SECONDS",
    # Authorization
    "PKCEPair",
    "AuthorizationFlow",
    "generate_pkce",
    "create_state",
    "create_authorization_flow",
    # Token Exchange
    "TokenResponse",
    "exchange_code_for_tokens",
    # JWT Utilities
    "decode_jwt",
    "extract_subject",
    # Callback Server
    "CallbackResult",
    "OAuthCallbackServer",
    "start_callback_server",
    # Validation
    "is_valid_client_id",
    "get_configured_providers",
    # Adapter
    "OAuthRedirectAdapter",
]
