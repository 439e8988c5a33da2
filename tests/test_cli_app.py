"""
End-to-end runs of the onboarding CLI against the simulated adapter.

The registry is swapped for simulated adapters with no delay so each run
settles immediately and deterministically.
"""

import asyncio
import io
import json
import logging

import pytest
from rich.console import Console
from rich.prompt import Prompt

import cli.cli_app
import cli.debug_setup
from cli.cli_app import OnboardingCLI
from cli.main import main
from providers import AdapterRegistry, SimulatedAuthAdapter


def simulated_registry(failure_rate=0.0):
    return AdapterRegistry({
        provider_id: SimulatedAuthAdapter(provider_id, delay=0, failure_rate=failure_rate)
        for provider_id in ("google-drive", "dropbox", "onedrive")
    })


@pytest.fixture(autouse=True)
def isolated_run(monkeypatch, tmp_path):
    """Keep wide console output, a temp debug log and the root logger intact"""
    monkeypatch.setenv("COLUMNS", "200")
    monkeypatch.setattr(cli.debug_setup, "DEBUG_LOG_FILE", str(tmp_path / "debug.log"))

    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
    asyncio.set_event_loop(None)


@pytest.fixture
def use_registry(monkeypatch):
    def install(failure_rate=0.0):
        monkeypatch.setattr(
            cli.cli_app, "build_default_registry",
            lambda mode, catalog: simulated_registry(failure_rate),
        )
    return install


def run_main(argv):
    return main(["--mode", "simulated", "--delay", "0"] + argv)


def test_emit_json_keeps_stdout_clean(use_registry, capsys):
    use_registry()

    exit_code = run_main(["--provider", "google-drive", "--emit-json"])

    captured = capsys.readouterr()
    assert exit_code == 0
    payload = json.loads(captured.out)
    assert payload["provider"] == "google-drive"
    assert set(payload) == {"provider", "accessToken", "refreshToken", "expiresAt", "userId"}
    assert "Successfully Connected" in captured.err


def test_emit_json_with_debug_keeps_stdout_clean(use_registry, capsys, tmp_path):
    use_registry()

    exit_code = run_main(["--provider", "google-drive", "--emit-json", "--debug"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert json.loads(captured.out)["provider"] == "google-drive"
    assert "Debug mode enabled" in captured.err
    assert (tmp_path / "debug.log").exists()


def test_log_level_applies_without_debug(use_registry, monkeypatch):
    use_registry()
    monkeypatch.setattr(cli.debug_setup, "LOG_LEVEL", "info")

    run_main(["--provider", "google-drive", "--emit-json"])

    assert logging.getLogger().level == logging.INFO


def test_failed_attempt_exits_with_error(use_registry, capsys):
    use_registry(failure_rate=1.0)

    exit_code = run_main(["--provider", "google-drive", "--emit-json"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert "User cancelled authentication" in captured.err


@pytest.mark.parametrize("provider_id, message", [
    ("dropbox", "Selected provider is not available yet"),
    ("icloud", "Unknown provider: icloud"),
])
def test_unusable_provider_exits_with_error(use_registry, capsys, provider_id, message):
    use_registry()

    exit_code = run_main(["--provider", provider_id, "--emit-json"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert message in captured.err


def test_interactive_skip_exits_cleanly(use_registry, monkeypatch):
    use_registry()
    monkeypatch.setattr(Prompt, "ask", lambda *args, **kwargs: "s")

    assert run_main([]) == 0


def test_interrupt_exit_code(use_registry, monkeypatch):
    use_registry()

    def interrupt(self, provider_id):
        raise KeyboardInterrupt

    monkeypatch.setattr(OnboardingCLI, "run_once", interrupt)

    assert run_main(["--provider", "google-drive"]) == 130


def make_cli(**kwargs):
    console = Console(file=io.StringIO(), width=200)
    kwargs.setdefault("registry", simulated_registry())
    return OnboardingCLI(display_delay=0, console=console, **kwargs), console


def test_authenticate_without_selection_records_error():
    app, _ = make_cli()
    try:
        assert app.authenticate() is None
        assert app.last_error == "No provider selected"
    finally:
        app.close()


def test_run_once_returns_credential():
    app, console = make_cli()
    try:
        credential = app.run_once("google-drive")
    finally:
        app.close()

    assert credential is app.credential
    assert credential.provider == "google-drive"
    assert "Active" in console.file.getvalue()


def test_run_once_failure_keeps_reason():
    app, console = make_cli(registry=simulated_registry(failure_rate=1.0))
    try:
        assert app.run_once("google-drive") is None
    finally:
        app.close()

    assert app.last_error == "User cancelled authentication"
    assert "Authentication Failed" in console.file.getvalue()


def test_oauth_mode_warns_about_missing_client_ids(monkeypatch):
    monkeypatch.setattr(cli.cli_app, "CLIENT_IDS", {"google-drive": "your-google-client-id"})
    console = Console(file=io.StringIO(), width=200)

    app = OnboardingCLI(mode="oauth", console=console)
    app.close()

    output = console.file.getvalue()
    assert "Google Drive has no valid OAuth client ID configured (set GOOGLE_CLIENT_ID)" in output
    assert "Dropbox" not in output
