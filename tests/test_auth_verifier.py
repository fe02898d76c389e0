"""Unit tests for the Supabase password-grant verifier."""

import json

import httpx
import pytest

from app.actions import authenticate
from app.auth import SupabasePasswordVerifier
from app.errors import CallbackRouteError, CredentialsSignin, InvalidProvider

TOKEN_URL = "https://example.supabase.co/auth/v1/token"
CREDENTIALS = {"email": "user@nextmail.com", "password": "123456"}


def _verifier(handler) -> SupabasePasswordVerifier:
    return SupabasePasswordVerifier(
        token_url=TOKEN_URL,
        api_key="anon-key",
        timeout=1,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_successful_grant_sets_session():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["grant_type"] = request.url.params["grant_type"]
        seen["apikey"] = request.headers["apikey"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"access_token": "tok", "expires_in": 3600})

    verifier = _verifier(handler)
    await verifier.sign_in("credentials", CREDENTIALS)

    assert verifier.session == {"access_token": "tok", "expires_in": 3600}
    assert seen == {"grant_type": "password", "apikey": "anon-key", "body": CREDENTIALS}


@pytest.mark.parametrize("code_key", ["error_code", "error"])
@pytest.mark.asyncio
async def test_rejected_credentials_raise_credentials_signin(code_key):
    code = "invalid_credentials" if code_key == "error_code" else "invalid_grant"

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={code_key: code, "msg": "Invalid login credentials"})

    verifier = _verifier(handler)
    with pytest.raises(CredentialsSignin):
        await verifier.sign_in("credentials", CREDENTIALS)
    assert verifier.session is None


@pytest.mark.parametrize(
    "credentials",
    [{}, {"email": "not-an-email", "password": "123456"}, {"email": "a@b.co", "password": "123"}],
)
@pytest.mark.asyncio
async def test_malformed_credentials_never_reach_provider(credentials):
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("provider should not be called")

    with pytest.raises(CredentialsSignin):
        await _verifier(handler).sign_in("credentials", credentials)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="upstream error"),
        httpx.Response(400, json={"error_code": "email_not_confirmed"}),
        httpx.Response(200, json={"user": {}}),
        httpx.Response(200, json=["x"]),
        httpx.Response(200, text="<html>"),
    ],
)
@pytest.mark.asyncio
async def test_unexpected_responses_raise_callback_error(response):
    with pytest.raises(CallbackRouteError):
        await _verifier(lambda request: response).sign_in("credentials", CREDENTIALS)


@pytest.mark.asyncio
async def test_unknown_strategy():
    with pytest.raises(InvalidProvider):
        await _verifier(lambda request: httpx.Response(200)).sign_in("github", CREDENTIALS)


@pytest.mark.asyncio
async def test_transport_errors_propagate():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(httpx.ConnectError):
        await _verifier(handler).sign_in("credentials", CREDENTIALS)


@pytest.mark.asyncio
async def test_garbled_success_body_reports_generic_failure():
    verifier = _verifier(lambda request: httpx.Response(200, text="<html>"))

    assert await authenticate(verifier, None, CREDENTIALS) == "Something went wrong."
    assert verifier.session is None
