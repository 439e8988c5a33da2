"""CLI package for the cloud storage onboarding flow

This package provides the terminal presentation layer: it renders the
provider catalog and session state, and forwards select, connect and
skip intents to the authentication orchestrator.
"""

from cli.cli_app import OnboardingCLI
from cli.main import main

__all__ = [
    "OnboardingCLI",
    "main",
]
