"""
Simulated provider exchange.

Stands in for a real OAuth redirect: waits, then succeeds or reports a
user cancellation at a configurable rate.
"""
import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional

from cloud_auth.credentials import CredentialIngredients
from cloud_auth.errors import UserCancelled
from settings import CREDENTIAL_LIFETIME_SECONDS, SIMULATED_AUTH_DELAY, SIMULATED_FAILURE_RATE
from .base_adapter import ProviderAuthAdapter

logger = logging.getLogger(__name__)


class SimulatedAuthAdapter(ProviderAuthAdapter):
    """Adapter that resolves after a delay without touching the network"""

    def __init__(
        self,
        provider_id: str,
        delay: float = SIMULATED_AUTH_DELAY,
        failure_rate: float = SIMULATED_FAILURE_RATE,
        lifetime_seconds: int = CREDENTIAL_LIFETIME_SECONDS,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize simulated adapter

        Args:
            provider_id: Catalog id
            delay: Seconds before the exchange settles
            failure_rate: Probability (0-1) of a simulated cancellation
            lifetime_seconds: Lifetime reported for issued tokens
            rng: Random source (seed it for deterministic runs)
            sleep: Awaitable sleep function
        """
        super().__init__(provider_id)
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError(f"failure_rate must be between 0 and 1, got {failure_rate}")
        self.delay = delay
        self.failure_rate = failure_rate
        self.lifetime_seconds = lifetime_seconds
        self._rng = rng or random.Random()
        self._sleep = sleep

    async def authenticate(self) -> CredentialIngredients:
        logger.debug(f"[{self.provider_id}] Simulating exchange ({self.delay}s)")
        await self._sleep(self.delay)

        if self._rng.random() < self.failure_rate:
            logger.info(f"[{self.provider_id}] Simulated exchange cancelled")
            raise UserCancelled()

        logger.info(f"[{self.provider_id}] Simulated exchange succeeded")
        # Tokens and user id are left for the issuer to generate
        return CredentialIngredients(lifetime_seconds=self.lifetime_seconds)
