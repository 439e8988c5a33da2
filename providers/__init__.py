"""
Cloud storage provider catalog and authentication adapters.

The catalog describes what can be connected; adapters perform the
provider-specific exchange and are looked up by provider id.
"""
from providers.catalog import (
    ProviderDescriptor,
    ProviderCatalog,
    DEFAULT_CATALOG,
    list_providers,
    find_provider,
)
from providers.base_adapter import ProviderAuthAdapter
from providers.simulated import SimulatedAuthAdapter
from providers.registry import AdapterRegistry, build_default_registry

__all__ = [
    'ProviderDescriptor',
    'ProviderCatalog',
    'DEFAULT_CATALOG',
    'list_providers',
    'find_provider',
    'ProviderAuthAdapter',
    'SimulatedAuthAdapter',
    'AdapterRegistry',
    'build_default_registry',
]
