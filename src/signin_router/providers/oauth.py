"""Federated (OAuth-style) provider.

The interactive part of a federated sign-in (browser redirect, consent page)
belongs to the host app. It is injected as an async ``token_source`` that
returns an identity token for the given provider and email hint.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from signin_router.errors import ProviderSignInError
from signin_router.models.identity import Credential
from signin_router.providers.base import AuthProvider, ProviderSignInResult, ResultCallback

logger = logging.getLogger(__name__)

TokenSource = Callable[[str, str], Awaitable[str]]


class OAuthProvider(AuthProvider):
    """Delegates sign-in to an external identity service."""

    def __init__(
        self,
        provider_id: str,
        token_source: TokenSource,
        *,
        display_name: str | None = None,
        scopes: list[str] | None = None,
        result_observer: ResultCallback | None = None,
    ) -> None:
        self._provider_id = provider_id
        self._token_source = token_source
        self._display_name = display_name or provider_id
        self.scopes = list(scopes or [])
        self._result_observer = result_observer
        self._session_token: str | None = None

    @property
    def provider_id(self) -> str:
        return self._provider_id

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def signed_in(self) -> bool:
        return self._session_token is not None

    def sign_out(self) -> None:
        if self._session_token is not None:
            logger.debug("Clearing cached %s session", self._provider_id)
        self._session_token = None

    async def begin_sign_in(self, email: str) -> ProviderSignInResult:
        try:
            token = await self._token_source(self._provider_id, email)
        except Exception as exc:
            error = ProviderSignInError(
                f"Sign-in with {self._display_name} failed: {exc}",
                provider_id=self._provider_id,
            )
            error.__cause__ = exc
            return ProviderSignInResult(error=error, result_callback=self._result_observer)

        if not token:
            return ProviderSignInResult(
                error=ProviderSignInError(
                    f"Sign-in with {self._display_name} was cancelled",
                    provider_id=self._provider_id,
                ),
                result_callback=self._result_observer,
            )

        self._session_token = token
        return ProviderSignInResult(
            credential=Credential(provider_id=self._provider_id, token=token, email=email),
            result_callback=self._result_observer,
        )
