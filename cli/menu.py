"""Menu display functionality for CLI"""

from typing import Iterable, Optional

from rich.panel import Panel
from rich.table import Table

from cloud_auth.purpose import purpose_copy
from providers.catalog import ProviderDescriptor

SECURITY_NOTES = (
    "All data is encrypted with AES-256 before leaving your device",
    "Your encryption keys never leave your device",
    "Cloud providers only store encrypted data they cannot read",
    "You can revoke access at any time",
)


def clear_screen(console):
    """Clear the terminal screen"""
    console.clear()


def display_header(purpose, console):
    """Display the purpose-specific title and description

    Args:
        purpose: Purpose enum value or string
        console: Rich console for output
    """
    copy = purpose_copy(purpose)
    console.print(Panel.fit(
        f"[bold cyan]{copy.title}[/bold cyan]\n[dim]{copy.description}[/dim]",
        border_style="cyan"
    ))


def build_provider_table(providers: Iterable[ProviderDescriptor], selected_id: Optional[str] = None) -> Table:
    """Build the provider selection table

    Unavailable providers are listed as disabled instead of omitted.
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", style="cyan", width=3)
    table.add_column("Provider")
    table.add_column("Description")
    table.add_column("Status")

    for index, provider in enumerate(providers, start=1):
        marker = " [blue]✓[/blue]" if provider.id == selected_id else ""
        if provider.is_available:
            table.add_row(str(index), f"{provider.display_name}{marker}", provider.description, "[green]Available[/green]")
        else:
            table.add_row(
                f"[dim]{index}[/dim]",
                f"[dim]{provider.display_name}[/dim]",
                f"[dim]{provider.description}[/dim]",
                "[dim]Coming Soon[/dim]",
            )
    return table


def display_providers(providers: Iterable[ProviderDescriptor], selected_id: Optional[str], console):
    console.print("\n[bold]Choose a provider:[/bold]\n")
    console.print(build_provider_table(providers, selected_id))
    console.print()


def display_setup_steps(provider: ProviderDescriptor, console):
    """Display ordered setup steps for the selected provider"""
    console.print(f"\n[bold]Setup Steps for {provider.display_name}:[/bold]")
    for index, step in enumerate(provider.setup_steps, start=1):
        console.print(f"  [cyan]{index}[/cyan]. {step}")
    console.print()


def display_security_notes(console):
    lines = "\n".join(f"• {note}" for note in SECURITY_NOTES)
    console.print(Panel(lines, title="Security & Privacy", border_style="blue"))


def display_auth_error(message: str, console):
    console.print(Panel(f"[red]{message}[/red]", title="Authentication Failed", border_style="red"))


def display_retry_menu(console):
    """Display options after a failed attempt"""
    console.print(" r. Retry")
    console.print(" c. Choose another provider")
    console.print(" s. Skip for now")
