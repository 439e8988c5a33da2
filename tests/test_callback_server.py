import pytest
from aiohttp.test_utils import TestClient, TestServer

from cloud_oauth.callback_server import OAuthCallbackServer

PATH = "/auth/callback"


@pytest.fixture
def server():
    return OAuthCallbackServer("expected-state", path=PATH)


@pytest.mark.asyncio
async def test_code_settles_result(server):
    async with TestClient(TestServer(server.app)) as client:
        response = await client.get(PATH, params={"code": "abc", "state": "expected-state"})
        body = await response.text()

    assert response.status == 200
    assert "Successfully Connected!" in body
    result = await server.wait_for_callback(timeout=1)
    assert result.ok
    assert result.code == "abc"


@pytest.mark.asyncio
async def test_state_mismatch_is_ignored(server):
    async with TestClient(TestServer(server.app)) as client:
        response = await client.get(PATH, params={"code": "abc", "state": "forged"})

    assert response.status == 400
    assert server.result is None
    assert await server.wait_for_callback(timeout=0.01) is None


@pytest.mark.asyncio
async def test_provider_error_is_reported(server):
    async with TestClient(TestServer(server.app)) as client:
        response = await client.get(PATH, params={
            "error": "access_denied",
            "error_description": "<b>no</b>",
            "state": "expected-state",
        })
        body = await response.text()

    assert response.status == 400
    assert "&lt;b&gt;no&lt;/b&gt;" in body
    result = await server.wait_for_callback(timeout=1)
    assert not result.ok
    assert result.error == "access_denied"


@pytest.mark.asyncio
async def test_missing_code(server):
    async with TestClient(TestServer(server.app)) as client:
        response = await client.get(PATH, params={"state": "expected-state"})

    assert response.status == 400
    assert server.result is None


@pytest.mark.asyncio
async def test_first_callback_wins(server):
    async with TestClient(TestServer(server.app)) as client:
        await client.get(PATH, params={"code": "first", "state": "expected-state"})
        await client.get(PATH, params={"code": "second", "state": "expected-state"})

    result = await server.wait_for_callback(timeout=1)
    assert result.code == "first"
