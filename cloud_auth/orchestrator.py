"""Authentication orchestrator

Owns one AuthSession and drives it through the state machine:

    idle -> authenticating -> success | error

success and error return to idle on reset() or a new selection; error
also allows a direct retry with authenticate().

The authenticating status is the only mutual exclusion: at most one
adapter call is outstanding per orchestrator.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set, Tuple, TYPE_CHECKING

from providers.catalog import DEFAULT_CATALOG, ProviderCatalog, ProviderDescriptor
from settings import ADAPTER_TIMEOUT, SUCCESS_DISPLAY_DELAY
from .credentials import Credential, CredentialIngredients, issue_credential
from .errors import (
    AuthFailure,
    ExchangeFailed,
    InvalidStateTransition,
    NoProviderSelected,
    ProviderUnavailable,
    SelectionLocked,
    UnknownProvider,
    UserCancelled,
)
from .session import AuthSession, AuthStatus

if TYPE_CHECKING:
    from providers.base_adapter import ProviderAuthAdapter
    from providers.registry import AdapterRegistry

logger = logging.getLogger(__name__)

AuthCompleteCallback = Callable[[str, Credential], None]
SkipCallback = Callable[[], None]
StatusCallback = Callable[[AuthSession], None]


class AuthOrchestrator:
    """State machine for a single cloud provider authentication flow"""

    def __init__(
        self,
        registry: "AdapterRegistry",
        catalog: ProviderCatalog = DEFAULT_CATALOG,
        on_auth_complete: Optional[AuthCompleteCallback] = None,
        on_skip: Optional[SkipCallback] = None,
        on_status_change: Optional[StatusCallback] = None,
        display_delay: float = SUCCESS_DISPLAY_DELAY,
        adapter_timeout: Optional[float] = ADAPTER_TIMEOUT,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the orchestrator

        Args:
            registry: Adapters keyed by provider id
            catalog: Provider catalog used for lookups and availability
            on_auth_complete: Called once per successful attempt, after the display delay
            on_skip: Called when the flow is abandoned via skip()
            on_status_change: Called with a session snapshot after every change
            display_delay: Seconds between the success transition and credential hand-off
            adapter_timeout: Upper bound for one adapter call, None for no bound
            sleep: Awaitable sleep used for the display delay
        """
        self.registry = registry
        self.catalog = catalog
        self.on_auth_complete = on_auth_complete
        self.on_skip = on_skip
        self.on_status_change = on_status_change
        self.display_delay = display_delay
        self.adapter_timeout = adapter_timeout
        self._sleep = sleep

        self._session = AuthSession()
        self._inflight: Optional[asyncio.Future] = None
        # Adapter calls cancelled on purpose by cancel() or reset()
        self._abandoned: Set[asyncio.Future] = set()
        # Bumped by reset() so a stale attempt cannot write into a fresh session
        self._attempt = 0

    # Read-only views

    @property
    def session(self) -> AuthSession:
        """Snapshot of the current session"""
        return self._session.snapshot()

    @property
    def status(self) -> AuthStatus:
        return self._session.status

    @property
    def selected_provider(self) -> Optional[ProviderDescriptor]:
        return self.catalog.find_provider(self._session.selected_provider_id)

    # Transitions

    def select_provider(self, provider_id: str) -> None:
        """Select the provider to authenticate with

        Raises:
            UnknownProvider: If the id is not in the catalog
            SelectionLocked: If a different provider is selected while authenticating
        """
        if self.catalog.find_provider(provider_id) is None:
            raise UnknownProvider(provider_id)

        session = self._session
        if session.status is AuthStatus.AUTHENTICATING:
            if provider_id == session.selected_provider_id:
                return
            raise SelectionLocked(session.selected_provider_id, provider_id)

        if session.status is AuthStatus.SUCCESS:
            # Drops a credential hand-off still waiting out the display delay
            self._attempt += 1

        session.selected_provider_id = provider_id
        session.error_message = None
        if session.status in (AuthStatus.ERROR, AuthStatus.SUCCESS):
            session.status = AuthStatus.IDLE

        logger.info(f"Provider selected: {provider_id}")
        self._notify()

    async def authenticate(self) -> Optional[Credential]:
        """Run one authentication attempt for the selected provider

        Precondition failures raise before any await and leave the session
        untouched. Adapter failures are captured into the session
        (status=error) and reported by returning None.

        Returns:
            The issued credential, or None if the attempt failed or was abandoned

        Raises:
            InvalidStateTransition: If called while authenticating or after success
            NoProviderSelected: If nothing is selected
            ProviderUnavailable: If the provider is unavailable or has no adapter
        """
        provider, adapter = self._check_preconditions()
        provider_id = provider.id

        self._attempt += 1
        attempt = self._attempt
        self._set_status(AuthStatus.AUTHENTICATING)
        logger.info(f"Authenticating with {provider_id}")

        try:
            ingredients = await self._run_adapter(adapter)
            credential = self._issue(provider_id, ingredients)
        except AuthFailure as failure:
            if attempt == self._attempt:
                self._fail(failure)
            return None
        except asyncio.CancelledError:
            # The caller's task was cancelled; never strand the session
            if attempt == self._attempt:
                self._fail(UserCancelled())
            raise

        if attempt != self._attempt:
            logger.info(f"Discarding result for {provider_id}: flow was reset")
            return None

        self._set_status(AuthStatus.SUCCESS)
        logger.info(f"Authenticated with {provider_id} (user {credential.user_id})")

        if self.display_delay and self.display_delay > 0:
            await self._sleep(self.display_delay)

        if attempt != self._attempt:
            logger.info(f"Flow reset during confirmation, credential for {provider_id} not delivered")
            return None

        if self.on_auth_complete:
            self.on_auth_complete(provider_id, credential)
        return credential

    def cancel(self) -> bool:
        """Cancel the in-flight adapter call

        The attempt ends in status=error with a UserCancelled message.

        Returns:
            True if an adapter call was cancelled
        """
        if self._inflight is None or self._inflight.done():
            return False
        logger.info("Cancelling in-flight authentication")
        self._abandon_inflight()
        return True

    def reset(self) -> None:
        """Return to idle, clearing the selection and any error"""
        self._attempt += 1
        if self._inflight is not None and not self._inflight.done():
            self._abandon_inflight()
        self._session = AuthSession()
        logger.info("Authentication flow reset")
        self._notify()

    def skip(self) -> None:
        """Abandon the flow and notify the caller"""
        self.reset()
        if self.on_skip:
            self.on_skip()

    # Internals

    def _check_preconditions(self) -> Tuple[ProviderDescriptor, "ProviderAuthAdapter"]:
        session = self._session
        if session.status not in (AuthStatus.IDLE, AuthStatus.ERROR):
            raise InvalidStateTransition("authenticate", session.status.value)

        if not session.selected_provider_id:
            raise NoProviderSelected()

        provider = self.catalog.find_provider(session.selected_provider_id)
        if provider is None or not provider.is_available:
            raise ProviderUnavailable(session.selected_provider_id)

        adapter = self.registry.get(provider.id)
        if adapter is None:
            raise ProviderUnavailable(
                provider.id, f"No authentication adapter for {provider.display_name}"
            )
        return provider, adapter

    async def _run_adapter(self, adapter: "ProviderAuthAdapter") -> CredentialIngredients:
        future = asyncio.ensure_future(adapter.authenticate())
        self._inflight = future
        try:
            if self.adapter_timeout is None:
                return await future
            return await asyncio.wait_for(future, timeout=self.adapter_timeout)
        except asyncio.TimeoutError:
            raise ExchangeFailed(f"Authentication timeout after {self.adapter_timeout:g} seconds")
        except asyncio.CancelledError:
            if future in self._abandoned:
                raise UserCancelled()
            raise
        except AuthFailure:
            raise
        except Exception as e:
            logger.exception(f"Adapter {adapter!r} raised an unexpected error")
            raise ExchangeFailed(str(e) or e.__class__.__name__)
        finally:
            self._abandoned.discard(future)
            if self._inflight is future:
                self._inflight = None

    def _abandon_inflight(self) -> None:
        self._abandoned.add(self._inflight)
        self._inflight.cancel()

    def _issue(self, provider_id: str, ingredients: Optional[CredentialIngredients]) -> Credential:
        try:
            return issue_credential(provider_id, ingredients)
        except ValueError as e:
            raise ExchangeFailed(str(e))

    def _fail(self, failure: AuthFailure) -> None:
        self._session.status = AuthStatus.ERROR
        self._session.error_message = failure.detail
        logger.warning(f"Authentication with {self._session.selected_provider_id} failed: {failure.detail}")
        self._notify()

    def _set_status(self, status: AuthStatus) -> None:
        self._session.status = status
        self._session.error_message = None
        self._notify()

    def _notify(self) -> None:
        if self.on_status_change:
            self.on_status_change(self._session.snapshot())
