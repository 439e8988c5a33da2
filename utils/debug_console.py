"""Debug logging setup and Rich console capture.

When debug mode is enabled, all log records go to a debug log file and
everything printed to the Rich console is mirrored into the same file as
plain text, so a session can be replayed from the log alone.
"""

import io
import logging
import os
import re
from typing import Optional
from rich.console import Console as RichConsole

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')


class DebugCapturingConsole(RichConsole):
    """
    Rich Console that also writes a plain-text copy of its output to a logger.
    """

    def __init__(self, debug_logger: Optional[logging.Logger] = None, *args, **kwargs):
        """
        Initialize the debug capturing console.

        Args:
            debug_logger: Logger instance to write captured output to
            *args, **kwargs: Arguments passed to Rich Console
        """
        super().__init__(*args, **kwargs)
        self.debug_logger = debug_logger
        self._log_prefix = "[CONSOLE] "

    def print(self, *objects, **kwargs):
        super().print(*objects, **kwargs)

        if self.debug_logger and self.debug_logger.isEnabledFor(logging.DEBUG):
            plain_text = self._render_to_plain_text(*objects, **kwargs)
            if plain_text.strip():
                self.debug_logger.debug(f"{self._log_prefix}{plain_text}")

    def _render_to_plain_text(self, *objects, **kwargs) -> str:
        """Render objects to plain text without Rich markup or ANSI codes"""
        string_buffer = io.StringIO()
        temp_console = RichConsole(
            file=string_buffer,
            force_terminal=False,
            width=self.width,
            legacy_windows=False
        )
        temp_console.print(*objects, **kwargs)
        return _ANSI_ESCAPE.sub('', string_buffer.getvalue()).rstrip()


def configure_logging(level: str = "warning", debug: bool = False, log_file: Optional[str] = None) -> Optional[str]:
    """
    Configure root logging for the CLI.

    Args:
        level: Log level name used when debug is off
        debug: Send DEBUG records to log_file instead of the terminal
        log_file: Debug log path (append mode)

    Returns:
        Absolute path of the debug log file, or None when debug is off
    """
    root_logger = logging.getLogger()

    # Clear existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    if not debug:
        root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)
        return None

    log_path = os.path.abspath(log_file or "onboarding_debug.log")
    root_logger.setLevel(logging.DEBUG)
    file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    logging.getLogger(__name__).info(f"Debug logging enabled - appending to {log_path}")
    return log_path


def create_debug_console(debug_enabled: bool = False,
                         debug_logger: Optional[logging.Logger] = None,
                         stderr: bool = False) -> RichConsole:
    """
    Create appropriate console instance based on debug mode.

    Args:
        debug_enabled: Mirror console output into debug_logger
        debug_logger: Logger receiving the plain-text copy
        stderr: Write to stderr instead of stdout

    Returns:
        DebugCapturingConsole if debug enabled, regular Console otherwise
    """
    if debug_enabled and debug_logger:
        return DebugCapturingConsole(debug_logger=debug_logger, stderr=stderr)
    return RichConsole(stderr=stderr)
