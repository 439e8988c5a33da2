"""
Static catalog of supported cloud storage providers.

Unavailable providers stay in the listing so the view can render them
disabled ("Coming Soon") instead of hiding them.
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


@dataclass(frozen=True)
class ProviderDescriptor:
    """Description of a cloud storage provider

    Attributes:
        id: Unique slug (e.g. "google-drive")
        display_name: Human-readable name
        description: One-line pitch shown on the provider card
        setup_steps: Ordered setup instructions
        is_available: Whether the provider can be connected today
        auth_url: Provider authorization endpoint, informational
    """
    id: str
    display_name: str
    description: str
    setup_steps: Tuple[str, ...]
    is_available: bool
    auth_url: Optional[str] = None


class ProviderCatalog:
    """Immutable, ordered provider registry"""

    def __init__(self, providers: Iterable[ProviderDescriptor]):
        self._providers = tuple(providers)
        self._by_id = {p.id: p for p in self._providers}
        if len(self._by_id) != len(self._providers):
            raise ValueError("Duplicate provider id in catalog")

    def list_providers(self) -> Tuple[ProviderDescriptor, ...]:
        """All providers in display order, including unavailable ones"""
        return self._providers

    def find_provider(self, provider_id: Optional[str]) -> Optional[ProviderDescriptor]:
        """Look up a provider by id, None if not found"""
        if provider_id is None:
            return None
        return self._by_id.get(provider_id)

    def available_ids(self) -> Tuple[str, ...]:
        return tuple(p.id for p in self._providers if p.is_available)

    def __iter__(self):
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)


GOOGLE_DRIVE = ProviderDescriptor(
    id="google-drive",
    display_name="Google Drive",
    description="Store your health data securely in Google Drive with end-to-end encryption",
    setup_steps=(
        'Click "Connect to Google Drive"',
        "Sign in to your Google account",
        "Grant permission to store files",
        "Your data will be encrypted before upload",
    ),
    is_available=True,
    auth_url="https://accounts.google.com/o/oauth2/v2/auth",
)

DROPBOX = ProviderDescriptor(
    id="dropbox",
    display_name="Dropbox",
    description="Sync your health data with Dropbox storage",
    setup_steps=(
        "Connect to your Dropbox account",
        "Authorize app access",
        "Data will be encrypted and synced",
    ),
    is_available=False,
    auth_url="https://www.dropbox.com/oauth2/authorize",
)

ONEDRIVE = ProviderDescriptor(
    id="onedrive",
    display_name="Microsoft OneDrive",
    description="Store data in Microsoft OneDrive with enterprise security",
    setup_steps=(
        "Sign in to Microsoft account",
        "Grant storage permissions",
        "Enable encrypted sync",
    ),
    is_available=False,
    auth_url="https://login.microsoftonline.com/common/oauth2/v2.0/authorize",
)

DEFAULT_CATALOG = ProviderCatalog([GOOGLE_DRIVE, DROPBOX, ONEDRIVE])


def list_providers() -> Tuple[ProviderDescriptor, ...]:
    """List providers from the default catalog"""
    return DEFAULT_CATALOG.list_providers()


def find_provider(provider_id: Optional[str]) -> Optional[ProviderDescriptor]:
    """Find a provider in the default catalog"""
    return DEFAULT_CATALOG.find_provider(provider_id)
