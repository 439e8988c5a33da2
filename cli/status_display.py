"""Status display functionality for CLI"""

from datetime import datetime
from typing import Optional

from rich.table import Table

from cloud_auth.credentials import Credential, now_ms
from cloud_auth.session import AuthSession, AuthStatus
from providers.catalog import ProviderDescriptor


def describe_status(session: AuthSession, provider: Optional[ProviderDescriptor]) -> tuple[str, str]:
    """
    Get a styled status label and detail message for a session

    Args:
        session: Session snapshot
        provider: Descriptor of the selected provider, if any

    Returns:
        Tuple of (styled_status, detail_message)
    """
    name = provider.display_name if provider else "provider"

    if session.status is AuthStatus.AUTHENTICATING:
        return "[yellow]CONNECTING[/yellow]", f"Connecting to {name}..."
    if session.status is AuthStatus.SUCCESS:
        return "[green]CONNECTED[/green]", f"{name} is now connected and ready to sync your health data."
    if session.status is AuthStatus.ERROR:
        return "[red]ERROR[/red]", session.error_message or "Authentication failed"
    if provider:
        return "[dim]IDLE[/dim]", f"{name} selected"
    return "[dim]IDLE[/dim]", "No provider selected"


def format_time_until(expires_at_ms: int, at_ms: Optional[int] = None) -> str:
    """Format remaining token lifetime as "Xh Ym" / "Ym" / "expired" """
    remaining = (expires_at_ms - (at_ms if at_ms is not None else now_ms())) / 1000
    if remaining <= 0:
        return "expired"

    hours = int(remaining // 3600)
    minutes = int((remaining % 3600) // 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def show_credential_summary(credential: Credential, console):
    """
    Display the issued credential without revealing tokens

    Args:
        credential: Issued credential
        console: Rich console for output
    """
    table = Table(title="Connection Details")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Provider", credential.provider)
    table.add_row("Account", credential.user_id)
    table.add_row("Status", "[red]Expired[/red]" if credential.is_expired() else "[green]Active[/green]")
    table.add_row("Expires At", datetime.fromtimestamp(credential.expires_at / 1000).isoformat(timespec="seconds"))
    table.add_row("Time Until Expiry", format_time_until(credential.expires_at))
    table.add_row("Refresh Token", "Yes" if credential.refresh_token else "No")

    console.print(table)
