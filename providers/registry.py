"""
Provider id -> adapter mapping, built once at startup.
"""
import logging
from typing import Dict, Iterator, Mapping, Optional

from settings import AUTH_MODE, CLIENT_IDS
from .base_adapter import ProviderAuthAdapter
from .catalog import DEFAULT_CATALOG, ProviderCatalog
from .simulated import SimulatedAuthAdapter

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Registry of auth adapters keyed by provider id"""

    def __init__(self, adapters: Optional[Mapping[str, ProviderAuthAdapter]] = None):
        self._adapters: Dict[str, ProviderAuthAdapter] = {}
        for provider_id, adapter in (adapters or {}).items():
            self.register(adapter, provider_id=provider_id)

    def register(self, adapter: ProviderAuthAdapter, provider_id: Optional[str] = None) -> None:
        """Register an adapter

        Args:
            adapter: Adapter instance
            provider_id: Key override (defaults to adapter.provider_id)

        Raises:
            ValueError: If an adapter is already registered for the id
        """
        key = provider_id or adapter.provider_id
        if key in self._adapters:
            raise ValueError(f"Adapter already registered for {key}")
        self._adapters[key] = adapter
        logger.debug(f"Registered {adapter!r} for {key}")

    def get(self, provider_id: str) -> Optional[ProviderAuthAdapter]:
        return self._adapters.get(provider_id)

    def __contains__(self, provider_id: str) -> bool:
        return provider_id in self._adapters

    def __iter__(self) -> Iterator[str]:
        return iter(self._adapters)

    def __len__(self) -> int:
        return len(self._adapters)


def build_default_registry(
    mode: str = AUTH_MODE,
    catalog: ProviderCatalog = DEFAULT_CATALOG,
    client_ids: Optional[Mapping[str, str]] = None,
) -> AdapterRegistry:
    """Build the registry for every provider in the catalog

    Args:
        mode: "simulated" or "oauth"
        catalog: Provider catalog to cover
        client_ids: provider id -> OAuth client ID (oauth mode only)

    Returns:
        AdapterRegistry with one adapter per catalog entry
    """
    registry = AdapterRegistry()

    if mode == "simulated":
        for provider in catalog:
            registry.register(SimulatedAuthAdapter(provider.id))
    elif mode == "oauth":
        from cloud_oauth.adapter import OAuthRedirectAdapter
        from cloud_oauth.constants import PROVIDER_ENDPOINTS

        client_ids = CLIENT_IDS if client_ids is None else client_ids
        for provider in catalog:
            endpoints = PROVIDER_ENDPOINTS.get(provider.id)
            if endpoints is None:
                logger.warning(f"No OAuth endpoints configured for {provider.id}, skipping")
                continue
            registry.register(OAuthRedirectAdapter(
                provider.id,
                endpoints=endpoints,
                client_id=client_ids.get(provider.id, ""),
            ))
    else:
        raise ValueError(f"Unknown auth mode: {mode}")

    logger.info(f"Adapter registry ready ({mode}): {list(registry)}")
    return registry
