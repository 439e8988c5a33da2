"""Configuration loader for the cloud storage onboarding flow

Loads configuration from multiple sources with the following priority:
1. Environment variables (highest priority)
2. .env file
3. Hardcoded defaults (lowest priority)
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv

# Set up logger for config loader
logger = logging.getLogger(__name__)


class ConfigLoader:
    """Handles loading configuration from various sources"""

    def __init__(self, env_path: Optional[str] = None):
        """Initialize the config loader

        Args:
            env_path: Optional path to .env file.
                     Defaults to '.env' in the current directory.
        """
        self.env_path = Path(env_path) if env_path else Path(".env")
        self._load_env_file()

    def _load_env_file(self):
        """Load environment variables from .env file if it exists"""
        if self.env_path.exists():
            load_dotenv(dotenv_path=self.env_path)
            logger.debug(f"Loaded environment variables from {self.env_path}")
        else:
            logger.debug(f".env file not found at {self.env_path}, using environment variables and defaults only")

    def get(self, env_var: str, default: Any) -> Any:
        """Get a configuration value with priority: env > default

        Args:
            env_var: Environment variable name to check
            default: Default value if not found in environment

        Returns:
            The configuration value from environment or default
        """
        env_value = os.getenv(env_var)
        if env_value is not None:
            # bool must be checked before int (bool is an int subclass)
            if isinstance(default, bool):
                return env_value.lower() in ('true', '1', 'yes')
            elif isinstance(default, int):
                try:
                    return int(env_value)
                except ValueError:
                    logger.warning(f"Failed to parse {env_var}={env_value} as int, using default: {default}")
                    return default
            elif isinstance(default, float):
                try:
                    return float(env_value)
                except ValueError:
                    logger.warning(f"Failed to parse {env_var}={env_value} as float, using default: {default}")
                    return default
            return env_value

        return default

    def get_choice(self, env_var: str, default: str, choices: tuple) -> str:
        """Get a string value restricted to a fixed set of choices

        Unrecognized values are logged and replaced by the default.

        Args:
            env_var: Environment variable name to check
            default: Default value (must be one of choices)
            choices: Accepted values

        Returns:
            The configured value, lower-cased
        """
        value = str(self.get(env_var, default)).strip().lower()
        if value not in choices:
            logger.warning(f"Unsupported {env_var}={value}, expected one of {list(choices)}; using default: {default}")
            return default
        return value

    def get_client_ids(self, env_vars: Dict[str, str]) -> Dict[str, str]:
        """Collect provider client IDs from the environment

        Args:
            env_vars: Mapping of provider id -> environment variable name

        Returns:
            Mapping of provider id -> client ID (empty string when unset)
        """
        return {provider_id: self.get(env_var, "") for provider_id, env_var in env_vars.items()}


# Create a global instance
_config_loader = None

def get_config_loader() -> ConfigLoader:
    """Get or create the global ConfigLoader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader
