"""
Base adapter interface for provider authentication.
Defines the contract that every provider auth implementation must follow.
"""
from abc import ABC, abstractmethod

from cloud_auth.credentials import CredentialIngredients


class ProviderAuthAdapter(ABC):
    """Abstract base class for provider authentication exchanges

    Implementations must settle exactly once: return ingredients on
    success or raise an AuthFailure subclass (UserCancelled,
    ProviderUnavailable, ExchangeFailed). Timeouts are imposed by the
    caller.
    """

    def __init__(self, provider_id: str):
        """
        Initialize adapter for a provider

        Args:
            provider_id: Catalog id this adapter authenticates against
        """
        self.provider_id = provider_id

    @abstractmethod
    async def authenticate(self) -> CredentialIngredients:
        """Run the provider-specific authentication exchange

        Returns:
            Credential ingredients from the provider

        Raises:
            AuthFailure: Typed failure describing why the exchange failed
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(provider_id={self.provider_id!r})"
