"""Authentication session state"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class AuthStatus(str, Enum):
    IDLE = "idle"
    AUTHENTICATING = "authenticating"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class AuthSession:
    """State of one authentication flow

    Attributes:
        selected_provider_id: Provider chosen by the user, if any
        status: Current state machine status
        error_message: Failure detail, only set while status is ERROR
    """
    selected_provider_id: Optional[str] = None
    status: AuthStatus = AuthStatus.IDLE
    error_message: Optional[str] = None

    def snapshot(self) -> "AuthSession":
        """Detached copy handed to observers"""
        return replace(self)
