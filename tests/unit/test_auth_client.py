import json
import uuid

import httpx
import pytest

from shared.exceptions import TransportError, UnauthorizedError
from websites.domain.identity import AuthEvent
from websites.infrastructure.auth_client import AuthApiClient

USER_ID = str(uuid.uuid4())
USER = {"id": USER_ID, "email": "owner@example.org", "aud": "authenticated"}


def _session(token="access-1"):
    return {"access_token": token, "token_type": "bearer", "expires_in": 3600, "refresh_token": "r", "user": USER}


def _client(handler):
    return AuthApiClient(
        base_url="https://auth.example.test/auth/v1/",
        api_key="anon-key",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_sign_in_starts_session_and_notifies():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/auth/v1/token"
        assert request.url.params["grant_type"] == "password"
        assert request.headers["apikey"] == "anon-key"
        assert json.loads(request.content) == {"email": "owner@example.org", "password": "pw-123456"}
        return httpx.Response(200, json=_session())

    client = _client(handler)
    client.on_auth_change(lambda event, user: seen.append((event, user)))
    user = await client.sign_in("owner@example.org", "pw-123456")

    assert str(user.user_id) == USER_ID
    assert client.access_token == "access-1"
    assert seen == [(AuthEvent.SIGNED_IN, user)]


@pytest.mark.asyncio
async def test_bad_credentials_raise_unauthorized():
    client = _client(lambda request: httpx.Response(400, json={"error": "invalid_grant"}))
    with pytest.raises(UnauthorizedError) as exc:
        await client.sign_in("owner@example.org", "wrong")
    assert exc.value.code == "invalid_credentials"
    assert client.access_token is None


@pytest.mark.asyncio
async def test_network_failure_is_transport_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(TransportError):
        await _client(handler).sign_in("owner@example.org", "pw")


@pytest.mark.asyncio
async def test_server_error_is_transport_error():
    with pytest.raises(TransportError):
        await _client(lambda request: httpx.Response(502)).sign_up("owner@example.org", "pw")


@pytest.mark.asyncio
async def test_sign_up_without_autoconfirm_returns_user_only():
    client = _client(lambda request: httpx.Response(200, json=USER))
    user = await client.sign_up("owner@example.org", "pw-123456")
    assert user.email == "owner@example.org"
    assert client.access_token is None


@pytest.mark.asyncio
async def test_get_current_user_uses_bearer_token():
    def handler(request):
        if request.url.path.endswith("/token"):
            return httpx.Response(200, json=_session("tok"))
        assert request.headers["Authorization"] == "Bearer tok"
        return httpx.Response(200, json=USER)

    client = _client(handler)
    assert await client.get_current_user() is None
    await client.sign_in("owner@example.org", "pw")
    user = await client.get_current_user()
    assert str(user.user_id) == USER_ID


@pytest.mark.asyncio
async def test_revoked_token_signs_out():
    seen = []

    def handler(request):
        if request.url.path.endswith("/token"):
            return httpx.Response(200, json=_session())
        return httpx.Response(401, json={"msg": "invalid JWT"})

    client = _client(handler)
    await client.sign_in("owner@example.org", "pw")
    client.on_auth_change(lambda event, user: seen.append(event))
    assert await client.get_current_user() is None
    assert client.access_token is None
    assert seen == [AuthEvent.SIGNED_OUT]


@pytest.mark.asyncio
async def test_sign_out_clears_session_and_unsubscribe_stops_events():
    seen = []

    def handler(request):
        if request.url.path.endswith("/token"):
            return httpx.Response(200, json=_session())
        assert request.url.path.endswith("/logout")
        return httpx.Response(204)

    client = _client(handler)
    unsubscribe = client.on_auth_change(lambda event, user: seen.append(event))
    await client.sign_in("owner@example.org", "pw")
    unsubscribe()
    await client.sign_out()

    assert client.access_token is None
    assert seen == [AuthEvent.SIGNED_IN]


@pytest.mark.asyncio
async def test_non_json_success_body_is_transport_error():
    def handler(request):
        if request.url.path.endswith("/token"):
            return httpx.Response(200, json=_session())
        return httpx.Response(200, text="<html>gateway</html>")

    client = _client(handler)
    await client.sign_in("owner@example.org", "pw")
    with pytest.raises(TransportError):
        await client.get_current_user()
