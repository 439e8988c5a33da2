"""
Shared fixtures for the authentication flow tests.

ScriptedAdapter stands in for a provider exchange: each authenticate()
call consumes the next scripted outcome (ingredients to return or an
exception to raise), optionally waiting on a gate so tests can observe
the authenticating state mid-flight.
"""

import asyncio
from typing import List, Optional, Union

import pytest

from cloud_auth import AuthOrchestrator, CredentialIngredients
from providers import AdapterRegistry, ProviderAuthAdapter
from providers.catalog import DEFAULT_CATALOG

Outcome = Union[CredentialIngredients, BaseException]


class ScriptedAdapter(ProviderAuthAdapter):
    def __init__(self, provider_id: str, outcomes: Optional[List[Outcome]] = None, gate: Optional[asyncio.Event] = None):
        super().__init__(provider_id)
        self.outcomes = list(outcomes or [])
        self.gate = gate
        self.calls = 0
        self.started = asyncio.Event()

    async def authenticate(self) -> CredentialIngredients:
        self.calls += 1
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        outcome = self.outcomes.pop(0) if self.outcomes else CredentialIngredients()
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class RecordingSleep:
    """Fake sleep that records requested delays and yields once"""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        await asyncio.sleep(0)


class Recorder:
    """Collects orchestrator callbacks"""

    def __init__(self):
        self.completed = []
        self.skips = 0
        self.statuses = []

    def on_auth_complete(self, provider_id, credential):
        self.completed.append((provider_id, credential))

    def on_skip(self):
        self.skips += 1

    def on_status_change(self, session):
        self.statuses.append(session.status.value)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def fake_sleep():
    return RecordingSleep()


@pytest.fixture
def google_adapter():
    return ScriptedAdapter("google-drive")


@pytest.fixture
def registry(google_adapter):
    reg = AdapterRegistry()
    reg.register(google_adapter)
    for provider in DEFAULT_CATALOG:
        if provider.id not in reg:
            reg.register(ScriptedAdapter(provider.id))
    return reg


@pytest.fixture
def make_orchestrator(registry, recorder, fake_sleep):
    def factory(**kwargs):
        options = dict(
            catalog=DEFAULT_CATALOG,
            on_auth_complete=recorder.on_auth_complete,
            on_skip=recorder.on_skip,
            on_status_change=recorder.on_status_change,
            display_delay=1.0,
            adapter_timeout=5.0,
            sleep=fake_sleep,
        )
        options.update(kwargs)
        reg = options.pop("registry", registry)
        return AuthOrchestrator(reg, **options)

    return factory


@pytest.fixture
def orchestrator(make_orchestrator):
    return make_orchestrator()
