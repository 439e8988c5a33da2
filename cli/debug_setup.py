"""Debug console setup for CLI"""

import logging
from rich.console import Console

from settings import DEBUG_LOG_FILE, LOG_LEVEL
from utils.debug_console import configure_logging, create_debug_console


def setup_debug_console(debug: bool, stderr: bool = False) -> Console:
    """
    Configure logging and return the console for this session

    Args:
        debug: Whether debug mode is enabled
        stderr: Send console output to stderr (stdout is reserved for --emit-json)

    Returns:
        Console instance (either regular or debug-capturing)
    """
    log_path = configure_logging(LOG_LEVEL, debug=debug, log_file=DEBUG_LOG_FILE)
    if not debug:
        return create_debug_console(stderr=stderr)

    debug_logger = logging.getLogger("cli.console")
    console = create_debug_console(debug_enabled=True, debug_logger=debug_logger, stderr=stderr)
    debug_logger.debug("[CLI] ===== ONBOARDING SESSION STARTED =====")
    console.print(f"[yellow]Debug mode enabled - verbose logging will be written to {log_path}[/yellow]")
    return console
