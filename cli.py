"""CLI entry point - wrapper around the cli package

Allows running the onboarding wizard with `python cli.py`.
"""

import sys

from cli.main import main

if __name__ == "__main__":
    sys.exit(main())
