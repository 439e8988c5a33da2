"""OAuth client ID validation utilities"""

import re
from typing import Mapping, Optional, Tuple

from providers.catalog import DEFAULT_CATALOG, ProviderCatalog

# Real client IDs issued by Google, Dropbox and Microsoft are all longer than this
MIN_CLIENT_ID_LENGTH = 10

_PLACEHOLDER_PATTERNS = (
    re.compile(r'^x+$', re.IGNORECASE),
    re.compile(r'^0{8}-0{4}-0{4}-0{4}-0{12}$'),
    re.compile(r'^(test|example|placeholder)', re.IGNORECASE),
)


def is_valid_client_id(client_id: Optional[str]) -> bool:
    """Check that a client ID looks like a real production value

    Rejects empty values, demo/template values (demo-..., your-...,
    ...client-id), common placeholders and values that are too short.

    Args:
        client_id: The client ID to validate

    Returns:
        True if the client ID is usable, False otherwise
    """
    if not client_id:
        return False

    client_id = client_id.strip()

    if client_id.startswith(("demo-", "your-")):
        return False
    if client_id.lower().endswith("client-id"):
        return False

    for pattern in _PLACEHOLDER_PATTERNS:
        if pattern.search(client_id):
            return False

    return len(client_id) >= MIN_CLIENT_ID_LENGTH


def get_configured_providers(
    client_ids: Mapping[str, Optional[str]],
    catalog: ProviderCatalog = DEFAULT_CATALOG,
) -> Tuple[str, ...]:
    """List catalog providers that have a valid client ID configured

    Args:
        client_ids: provider id -> client ID
        catalog: Catalog providing the display order

    Returns:
        Provider ids in catalog order
    """
    return tuple(
        provider.id
        for provider in catalog
        if is_valid_client_id(client_ids.get(provider.id))
    )
