import httpx
import pytest

from cloud_auth import ExchangeFailed
from cloud_oauth.token_exchange import exchange_code_for_tokens

TOKEN_URL = "https://oauth2.example.com/token"


def client_for(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_exchange_posts_form_and_parses_tokens():
    seen = {}

    def handler(request):
        seen["body"] = request.content.decode()
        return httpx.Response(200, json={
            "access_token": "at-1",
            "refresh_token": "rt-1",
            "expires_in": 1800,
            "account_id": "dbid:42",
        })

    async with client_for(handler) as client:
        tokens = await exchange_code_for_tokens(
            TOKEN_URL, "client-1234567", "code-1", "verifier-1", "http://localhost:8765/auth/callback",
            client=client,
        )

    assert "grant_type=authorization_code" in seen["body"]
    assert "code_verifier=verifier-1" in seen["body"]
    assert (tokens.access_token, tokens.refresh_token, tokens.expires_in, tokens.account_id) == (
        "at-1", "rt-1", 1800, "dbid:42",
    )


@pytest.mark.asyncio
async def test_missing_expiry_uses_default_lifetime():
    async with client_for(lambda request: httpx.Response(200, json={"access_token": "at"})) as client:
        tokens = await exchange_code_for_tokens(TOKEN_URL, "cid", "code", "v", "http://cb", client=client)

    assert tokens.expires_in == 3600
    assert tokens.refresh_token is None


@pytest.mark.asyncio
async def test_rejected_code():
    async with client_for(lambda request: httpx.Response(400, text="invalid_grant")) as client:
        with pytest.raises(ExchangeFailed) as exc_info:
            await exchange_code_for_tokens(TOKEN_URL, "cid", "code", "v", "http://cb", client=client)

    assert exc_info.value.detail == "Token exchange failed: 400 - invalid_grant"


@pytest.mark.asyncio
async def test_unreachable_endpoint():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with client_for(handler) as client:
        with pytest.raises(ExchangeFailed):
            await exchange_code_for_tokens(TOKEN_URL, "cid", "code", "v", "http://cb", client=client)


@pytest.mark.asyncio
async def test_malformed_body():
    async with client_for(lambda request: httpx.Response(200, json={"token": "nope"})) as client:
        with pytest.raises(ExchangeFailed):
            await exchange_code_for_tokens(TOKEN_URL, "cid", "code", "v", "http://cb", client=client)
