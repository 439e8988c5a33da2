"""CLI entry point and argument parsing"""

import sys
import argparse
from rich.console import Console
import settings
from cli.cli_app import OnboardingCLI


console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Connect a cloud storage provider for encrypted backups and sync")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--purpose",
        choices=["backup", "primary", "hybrid"],
        default=settings.DEFAULT_PURPOSE,
        help="What the cloud storage will be used for (default: from config)"
    )
    parser.add_argument(
        "--mode",
        choices=["simulated", "oauth"],
        default=settings.AUTH_MODE,
        help="Authentication backend: simulated exchange or real OAuth redirect (default: from config)"
    )
    parser.add_argument(
        "--provider",
        type=str,
        default=None,
        help="Connect this provider id without prompting (e.g. google-drive)"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=settings.SUCCESS_DISPLAY_DELAY,
        help="Seconds to show the success confirmation before handing off the credential"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.ADAPTER_TIMEOUT,
        help="Maximum seconds for one authentication attempt"
    )
    parser.add_argument(
        "--emit-json",
        action="store_true",
        help="Print the issued credential as JSON on stdout (UI goes to stderr)"
    )
    return parser


def main(argv=None):
    """Entry point for the CLI"""
    args = build_parser().parse_args(argv)
    exit_code = 1
    cli = None

    try:
        cli = OnboardingCLI(
            purpose=args.purpose,
            mode=args.mode,
            display_delay=args.delay,
            adapter_timeout=args.timeout,
            debug=args.debug,
            emit_json=args.emit_json,
        )

        if args.provider:
            credential = cli.run_once(args.provider)
        else:
            credential = cli.run()

        exit_code = 0 if credential is not None or cli.skipped else 1

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        console.print("Goodbye!")
        exit_code = 130
    except Exception as e:
        console.print(f"\n[red]Fatal error:[/red] {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
    finally:
        if cli is not None:
            cli.close()

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
