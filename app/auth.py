import logging
from typing import Any, Dict, Mapping, Optional, Protocol

import httpx
from pydantic import ValidationError

from .config import settings
from .errors import CallbackRouteError, CredentialsSignin, InvalidProvider
from .schemas import SignInCredentials

logger = logging.getLogger(__name__)

CREDENTIALS_STRATEGY = "credentials"
# GoTrue reports a wrong email/password pair with one of these codes
CREDENTIAL_ERROR_CODES = {"invalid_credentials", "invalid_grant"}


class CredentialVerifier(Protocol):
    async def sign_in(self, strategy: str, credentials: Mapping[str, Any]) -> None: ...


def _error_code(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    return body.get("error_code") or body.get("error")


class SupabasePasswordVerifier:
    """Signs users in with the Supabase password grant.

    A successful sign-in leaves the token payload on ``session``; rejections
    raise the typed failures from ``app.errors``. Transport errors are not
    auth failures and propagate as-is.
    """

    def __init__(
        self,
        token_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._token_url = token_url or settings.auth_token_url
        self._api_key = api_key or settings.SUPABASE_ANON_KEY
        self._timeout = timeout if timeout is not None else settings.AUTH_TIMEOUT_SECONDS
        self._transport = transport
        self.session: Optional[Dict[str, Any]] = None

    async def sign_in(self, strategy: str, credentials: Mapping[str, Any]) -> None:
        if strategy != CREDENTIALS_STRATEGY:
            raise InvalidProvider(f"Unsupported sign-in strategy '{strategy}'")

        try:
            parsed = SignInCredentials.model_validate(
                {"email": credentials.get("email"), "password": credentials.get("password")}
            )
        except ValidationError:
            logger.info("Rejected malformed credential bundle")
            raise CredentialsSignin("Credentials failed validation") from None

        logger.debug("Requesting Supabase password grant from %s", self._token_url)
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            r = await client.post(
                self._token_url,
                params={"grant_type": "password"},
                headers={"apikey": self._api_key},
                json={"email": parsed.email, "password": parsed.password},
            )

        if r.status_code in (400, 401) and _error_code(r) in CREDENTIAL_ERROR_CODES:
            raise CredentialsSignin("Email or password did not match")
        if r.is_error:
            logger.error("Supabase password grant failed with status %s", r.status_code)
            raise CallbackRouteError(f"Password grant returned {r.status_code}")

        try:
            data = r.json()
        except ValueError:
            data = None
        if not isinstance(data, dict) or not data.get("access_token"):
            logger.error("Supabase password grant returned no access token")
            raise CallbackRouteError("Password grant returned no access token")

        self.session = data
        logger.debug("Supabase session established (expires_in=%s)", data.get("expires_in"))


__all__ = ["CREDENTIALS_STRATEGY", "CredentialVerifier", "SupabasePasswordVerifier"]
