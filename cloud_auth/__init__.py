"""Cloud storage authentication flow

Drives a provider authentication attempt from selection to a finished
credential or a reported error.
"""

from .errors import (
    CloudAuthError,
    UsageError,
    AuthFailure,
    NoProviderSelected,
    UnknownProvider,
    SelectionLocked,
    InvalidStateTransition,
    ProviderUnavailable,
    UserCancelled,
    ExchangeFailed,
)
from .credentials import Credential, CredentialIngredients, issue_credential
from .session import AuthSession, AuthStatus
from .purpose import Purpose, PurposeCopy, purpose_copy
from .orchestrator import AuthOrchestrator

__all__ = [
    "CloudAuthError",
    "UsageError",
    "AuthFailure",
    "NoProviderSelected",
    "UnknownProvider",
    "SelectionLocked",
    "InvalidStateTransition",
    "ProviderUnavailable",
    "UserCancelled",
    "ExchangeFailed",
    "Credential",
    "CredentialIngredients",
    "issue_credential",
    "AuthSession",
    "AuthStatus",
    "Purpose",
    "PurposeCopy",
    "purpose_copy",
    "AuthOrchestrator",
]
