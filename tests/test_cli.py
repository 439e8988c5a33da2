from rich.console import Console

from cli.main import build_parser
from cli.menu import build_provider_table, display_header
from cli.status_display import describe_status, format_time_until, show_credential_summary
from cloud_auth import AuthSession, AuthStatus, Credential
from providers import find_provider, list_providers


def render(renderable):
    console = Console(record=True, width=200)
    console.print(renderable)
    return console.export_text()


def test_provider_table_marks_unavailable():
    text = render(build_provider_table(list_providers(), "google-drive"))

    assert "✓" in text
    assert text.count("Coming Soon") == 2
    assert "Available" in text


def test_header_uses_purpose_copy():
    console = Console(record=True, width=200)
    display_header("hybrid", console)

    assert "Connect Cloud Storage for Hybrid Mode" in console.export_text()


def test_describe_status():
    provider = find_provider("google-drive")

    label, detail = describe_status(AuthSession("google-drive", AuthStatus.AUTHENTICATING), provider)
    assert "CONNECTING" in label
    assert detail == "Connecting to Google Drive..."

    label, detail = describe_status(AuthSession("google-drive", AuthStatus.ERROR, "Token exchange failed"), provider)
    assert detail == "Token exchange failed"

    assert describe_status(AuthSession(), None)[1] == "No provider selected"


def test_format_time_until():
    assert format_time_until(3_900_000, at_ms=0) == "1h 5m"
    assert format_time_until(120_000, at_ms=0) == "2m"
    assert format_time_until(1_000, at_ms=5_000) == "expired"


def test_credential_summary_hides_tokens():
    console = Console(record=True, width=200)
    credential = Credential("google-drive", "access_secret", "refresh_secret", expires_at=0, user_id="user_1")

    show_credential_summary(credential, console)
    text = console.export_text()

    assert "user_1" in text
    assert "secret" not in text


def test_parser_defaults_and_overrides():
    parser = build_parser()

    args = parser.parse_args(["--provider", "google-drive", "--purpose", "primary", "--mode", "simulated", "--emit-json"])

    assert args.provider == "google-drive"
    assert args.purpose == "primary"
    assert args.emit_json is True
    assert parser.parse_args([]).debug is False
