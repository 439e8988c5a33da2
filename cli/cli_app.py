"""Onboarding wizard for connecting a cloud storage provider"""

import asyncio
import json
import logging
from typing import Optional

from rich.console import Console
from rich.prompt import Confirm, Prompt

from cloud_auth import (
    AuthOrchestrator,
    AuthSession,
    AuthStatus,
    Credential,
    Purpose,
    UsageError,
)
from cloud_oauth.validators import get_configured_providers
from providers import DEFAULT_CATALOG, AdapterRegistry, ProviderCatalog, build_default_registry
from settings import (
    ADAPTER_TIMEOUT,
    AUTH_MODE,
    CLIENT_ID_ENV_VARS,
    CLIENT_IDS,
    DEFAULT_PURPOSE,
    SUCCESS_DISPLAY_DELAY,
)
from cli.debug_setup import setup_debug_console
from cli.menu import (
    clear_screen,
    display_auth_error,
    display_header,
    display_providers,
    display_retry_menu,
    display_security_notes,
    display_setup_steps,
)
from cli.status_display import describe_status, show_credential_summary

logger = logging.getLogger(__name__)


class OnboardingCLI:
    """Interactive cloud storage connection flow"""

    def __init__(
        self,
        purpose: str = DEFAULT_PURPOSE,
        mode: str = AUTH_MODE,
        display_delay: float = SUCCESS_DISPLAY_DELAY,
        adapter_timeout: Optional[float] = ADAPTER_TIMEOUT,
        debug: bool = False,
        emit_json: bool = False,
        catalog: ProviderCatalog = DEFAULT_CATALOG,
        registry: Optional[AdapterRegistry] = None,
        console: Optional[Console] = None,
    ):
        self.purpose = Purpose(purpose)
        self.debug = debug
        self.emit_json = emit_json
        self.console = console or setup_debug_console(debug, stderr=emit_json)
        self.catalog = catalog
        self.registry = registry or build_default_registry(mode, catalog)

        self.credential: Optional[Credential] = None
        self.skipped = False
        self.last_error: Optional[str] = None

        self.orchestrator = AuthOrchestrator(
            self.registry,
            catalog=catalog,
            on_auth_complete=self._handle_auth_complete,
            on_skip=self._handle_skip,
            on_status_change=self._handle_status_change,
            display_delay=display_delay,
            adapter_timeout=adapter_timeout,
        )

        self.loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)

        if mode == "oauth" and registry is None:
            self._warn_missing_client_ids()

    def _warn_missing_client_ids(self):
        """Flag connectable providers that have no usable OAuth client ID"""
        configured = get_configured_providers(CLIENT_IDS, self.catalog)
        for provider_id in self.catalog.available_ids():
            if provider_id in configured:
                continue
            provider = self.catalog.find_provider(provider_id)
            env_var = CLIENT_ID_ENV_VARS.get(provider_id, "its client ID")
            logger.warning(f"No valid OAuth client ID for {provider_id}")
            self.console.print(
                f"[yellow]{provider.display_name} has no valid OAuth client ID configured (set {env_var}).[/yellow]"
            )

    # Orchestrator callbacks

    def _handle_status_change(self, session: AuthSession):
        if session.status not in (AuthStatus.AUTHENTICATING, AuthStatus.SUCCESS):
            return
        provider = self.catalog.find_provider(session.selected_provider_id)
        label, detail = describe_status(session, provider)
        self.console.print(f"{label} {detail}")

    def _handle_auth_complete(self, provider_id: str, credential: Credential):
        self.credential = credential
        self.console.print("\n[bold green]✓ Successfully Connected![/bold green]")
        self.console.print("[green]Your data will be encrypted before upload[/green]\n")
        show_credential_summary(credential, self.console)
        if self.emit_json:
            # Hand-off to the calling process; never written to disk here
            print(json.dumps(credential.to_dict()))

    def _handle_skip(self):
        self.skipped = True
        self.console.print("\n[yellow]Cloud storage setup skipped. You can connect later.[/yellow]")

    # Actions

    def choose_provider(self) -> Optional[str]:
        """Prompt for a provider

        Returns:
            Selected provider id, or None when the user skips
        """
        providers = self.catalog.list_providers()
        selected = self.orchestrator.session.selected_provider_id

        while True:
            display_providers(providers, selected, self.console)
            choices = [str(i) for i in range(1, len(providers) + 1)] + ["s"]
            choice = Prompt.ask("Select provider (s to skip)", choices=choices, console=self.console)
            if choice == "s":
                return None

            provider = providers[int(choice) - 1]
            if not provider.is_available:
                self.console.print(f"[yellow]{provider.display_name} is coming soon and cannot be selected yet.[/yellow]")
                continue
            return provider.id

    def authenticate(self) -> Optional[Credential]:
        """Run one attempt for the current selection

        Returns:
            Credential on success, None otherwise (reason in last_error)
        """
        self.last_error = None
        provider = self.orchestrator.selected_provider
        name = provider.display_name if provider else "provider"

        try:
            with self.console.status(f"Connecting to {name}..."):
                credential = self.loop.run_until_complete(self.orchestrator.authenticate())
        except UsageError as e:
            self.last_error = str(e)
            return None

        if credential is None:
            self.last_error = self.orchestrator.session.error_message
        return credential

    def run_once(self, provider_id: str) -> Optional[Credential]:
        """Non-interactive connection to a single provider"""
        display_header(self.purpose, self.console)
        try:
            self.orchestrator.select_provider(provider_id)
        except UsageError as e:
            display_auth_error(str(e), self.console)
            return None

        credential = self.authenticate()
        if credential is None:
            display_auth_error(self.last_error or "Authentication failed", self.console)
        return credential

    def run(self) -> Optional[Credential]:
        """Main interactive loop"""
        clear_screen(self.console)
        display_header(self.purpose, self.console)

        while True:
            provider_id = self.choose_provider()
            if provider_id is None:
                self.orchestrator.skip()
                return None

            self.orchestrator.select_provider(provider_id)
            provider = self.orchestrator.selected_provider
            display_setup_steps(provider, self.console)
            display_security_notes(self.console)

            if not Confirm.ask(f"Connect {provider.display_name}?", default=True, console=self.console):
                continue

            while True:
                credential = self.authenticate()
                if credential is not None:
                    return credential

                display_auth_error(self.last_error or "Authentication failed", self.console)
                display_retry_menu(self.console)
                choice = Prompt.ask("Select option", choices=["r", "c", "s"], default="r", console=self.console)

                if choice == "r":
                    continue
                if choice == "s":
                    self.orchestrator.skip()
                    return None
                break

    def close(self):
        self.loop.close()
