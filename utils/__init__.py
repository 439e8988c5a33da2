"""Shared utilities package"""

from .debug_console import (
    DebugCapturingConsole,
    configure_logging,
    create_debug_console,
)

__all__ = [
    "DebugCapturingConsole",
    "configure_logging",
    "create_debug_console",
]
