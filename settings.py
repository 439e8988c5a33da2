from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

# Logging
LOG_LEVEL = config.get("LOG_LEVEL", "warning")
DEBUG_LOG_FILE = config.get("DEBUG_LOG_FILE", "onboarding_debug.log")

# Flow configuration
# AUTH_MODE selects which adapters back the catalog:
# - simulated: delayed mock exchange (no network, no client IDs needed)
# - oauth: browser redirect + authorization code exchange
AUTH_MODE = config.get_choice("AUTH_MODE", "simulated", ("simulated", "oauth"))
DEFAULT_PURPOSE = config.get_choice("DEFAULT_PURPOSE", "backup", ("backup", "primary", "hybrid"))

# Time the success confirmation stays on screen before the credential is handed off
SUCCESS_DISPLAY_DELAY = config.get("SUCCESS_DISPLAY_DELAY", 1.0)
# Upper bound for a single adapter call (includes the user's browser round-trip)
ADAPTER_TIMEOUT = config.get("ADAPTER_TIMEOUT", 300.0)
# Access token lifetime used when a provider does not report one
CREDENTIAL_LIFETIME_SECONDS = config.get("CREDENTIAL_LIFETIME_SECONDS", 3600)

# Simulated exchange
SIMULATED_AUTH_DELAY = config.get("SIMULATED_AUTH_DELAY", 2.0)
SIMULATED_FAILURE_RATE = config.get("SIMULATED_FAILURE_RATE", 0.1)

# OAuth callback server (redirect URI is derived from these)
OAUTH_CALLBACK_HOST = config.get("OAUTH_CALLBACK_HOST", "localhost")
OAUTH_CALLBACK_PORT = config.get("OAUTH_CALLBACK_PORT", 8765)
OAUTH_CALLBACK_PATH = config.get("OAUTH_CALLBACK_PATH", "/auth/callback")

# Token endpoint HTTP timeout
HTTP_TIMEOUT = config.get("HTTP_TIMEOUT", 30.0)

# Provider client IDs (consumed by OAuth adapters only)
CLIENT_ID_ENV_VARS = {
    "google-drive": "GOOGLE_CLIENT_ID",
    "dropbox": "DROPBOX_CLIENT_ID",
    "onedrive": "ONEDRIVE_CLIENT_ID",
}
CLIENT_IDS = config.get_client_ids(CLIENT_ID_ENV_VARS)
