"""Error taxonomy for the authentication flow

Two families:
- UsageError: the caller asked for something the current state does not
  allow. Raised synchronously, session state is left untouched.
- AuthFailure: the provider exchange itself failed. Captured into the
  session (status=error) and re-raised to the awaiting caller.

ProviderUnavailable belongs to both: the orchestrator raises it before
calling an adapter, and an adapter may raise it mid-exchange.
"""

from typing import Optional


class CloudAuthError(Exception):
    """Base class for all authentication flow errors"""


class UsageError(CloudAuthError):
    """Caller-usage error detected before any asynchronous work"""


class AuthFailure(CloudAuthError):
    """Failure reported by a provider auth adapter

    Attributes:
        detail: Human-readable reason, shown to the user as the error message
    """

    default_detail = "Authentication failed"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NoProviderSelected(UsageError):
    def __init__(self):
        super().__init__("No provider selected")


class UnknownProvider(UsageError):
    def __init__(self, provider_id: str):
        self.provider_id = provider_id
        super().__init__(f"Unknown provider: {provider_id}")


class SelectionLocked(UsageError):
    """Raised when a different provider is selected mid-authentication"""

    def __init__(self, current: Optional[str], requested: str):
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot select {requested} while authenticating with {current}"
        )


class InvalidStateTransition(UsageError):
    def __init__(self, operation: str, status: str):
        self.operation = operation
        self.status = status
        super().__init__(f"Cannot {operation} while status is {status}")


class ProviderUnavailable(UsageError, AuthFailure):
    default_detail = "Selected provider is not available yet"

    def __init__(self, provider_id: Optional[str] = None, detail: Optional[str] = None):
        self.provider_id = provider_id
        AuthFailure.__init__(self, detail)


class UserCancelled(AuthFailure):
    default_detail = "User cancelled authentication"


class ExchangeFailed(AuthFailure):
    default_detail = "Token exchange failed"
