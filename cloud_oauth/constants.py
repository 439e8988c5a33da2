"""
OAuth endpoint configuration per cloud storage provider
"""
from typing import Dict, NamedTuple, Tuple

from settings import OAUTH_CALLBACK_HOST, OAUTH_CALLBACK_PORT, OAUTH_CALLBACK_PATH


class ProviderEndpoints(NamedTuple):
    """OAuth endpoints and scopes for one provider"""
    authorize_url: str
    token_url: str
    scopes: Tuple[str, ...]
    extra_params: Tuple[Tuple[str, str], ...] = ()


# Local callback server
REDIRECT_URI = f"http://{OAUTH_CALLBACK_HOST}:{OAUTH_CALLBACK_PORT}{OAUTH_CALLBACK_PATH}"

# Callback wait (user completes login in the browser)
CALLBACK_TIMEOUT_SECONDS = 300

PROVIDER_ENDPOINTS: Dict[str, ProviderEndpoints] = {
    "google-drive": ProviderEndpoints(
        authorize_url="https://accounts.google.com/o/oauth2/v2/auth",
        token_url="https://oauth2.googleapis.com/token",
        scopes=("openid", "https://www.googleapis.com/auth/drive.file"),
        # Offline access is required to receive a refresh token
        extra_params=(("access_type", "offline"), ("prompt", "consent")),
    ),
    "dropbox": ProviderEndpoints(
        authorize_url="https://www.dropbox.com/oauth2/authorize",
        token_url="https://api.dropboxapi.com/oauth2/token",
        scopes=("files.content.write", "files.content.read"),
        extra_params=(("token_access_type", "offline"),),
    ),
    "onedrive": ProviderEndpoints(
        authorize_url="https://login.microsoftonline.com/common/oauth2/v2.0/authorize",
        token_url="https://login.microsoftonline.com/common/oauth2/v2.0/token",
        scopes=("openid", "Files.ReadWrite.AppFolder", "offline_access"),
    ),
}
