"""REST identity backend (identity-toolkit style endpoints)."""

from __future__ import annotations

import logging
from urllib.parse import urlencode

import httpx

from signin_router.backend.base import IdentityBackend
from signin_router.errors import (
    BackendInvalidEmailError,
    BackendResolutionError,
    CredentialExchangeError,
)
from signin_router.models.identity import AuthUser, Credential

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://identitytoolkit.googleapis.com/v1"
DEFAULT_CONTINUE_URI = "http://localhost"


def _error_message(resp: httpx.Response) -> str:
    """Pull the error code string out of an error response body."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    error = (body or {}).get("error") or {}
    return error.get("message") or f"HTTP {resp.status_code}"


class HttpIdentityBackend(IdentityBackend):
    """Talks to a hosted identity service over HTTPS."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        continue_uri: str = DEFAULT_CONTINUE_URI,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._continue_uri = continue_uri
        self._timeout = timeout
        self._client = client
        self.id_token: str | None = None

    async def resolve_providers(self, email: str) -> list[str]:
        try:
            resp = await self._post(
                "accounts:createAuthUri",
                {"identifier": email, "continueUri": self._continue_uri},
            )
        except httpx.HTTPError as exc:
            raise BackendResolutionError(f"Provider lookup failed: {exc}") from exc

        if resp.status_code != 200:
            message = _error_message(resp)
            if message.startswith("INVALID_EMAIL") or message.startswith("INVALID_IDENTIFIER"):
                raise BackendInvalidEmailError(f"Invalid email: {email!r}")
            raise BackendResolutionError(f"Provider lookup failed: {message}")

        data = resp.json() or {}
        return list(data.get("allProviders") or data.get("signinMethods") or [])

    async def exchange_credential(self, credential: Credential) -> AuthUser:
        token = credential.consume()
        post_body = urlencode({"id_token": token, "providerId": credential.provider_id})
        payload: dict = {
            "postBody": post_body,
            "requestUri": self._continue_uri,
            "returnIdpCredential": True,
            "returnSecureToken": True,
        }
        try:
            resp = await self._post("accounts:signInWithIdp", payload)
        except httpx.HTTPError as exc:
            raise CredentialExchangeError(
                f"Credential exchange failed: {exc}", provider_id=credential.provider_id
            ) from exc

        if resp.status_code != 200:
            raise CredentialExchangeError(
                f"Credential exchange failed: {_error_message(resp)}",
                provider_id=credential.provider_id,
            )

        data = resp.json() or {}
        if data.get("needConfirmation"):
            raise CredentialExchangeError(
                f"An account already exists for {data.get('email')} with a different credential",
                provider_id=credential.provider_id,
            )
        if not data.get("localId"):
            raise CredentialExchangeError(
                "Backend did not return a user id", provider_id=credential.provider_id
            )

        self.id_token = data.get("idToken")
        return AuthUser(
            uid=data["localId"],
            email=data.get("email"),
            display_name=data.get("displayName"),
            provider_id=data.get("providerId") or credential.provider_id,
            is_new_user=bool(data.get("isNewUser", False)),
        )

    async def sign_out(self) -> None:
        self.id_token = None

    async def _post(self, endpoint: str, payload: dict) -> httpx.Response:
        url = f"{self._base_url}/{endpoint}"
        params = {"key": self._api_key}
        logger.debug("POST %s", url)
        if self._client is not None:
            return await self._client.post(url, params=params, json=payload)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.post(url, params=params, json=payload)
