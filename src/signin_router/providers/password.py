"""The email/password method as a configured provider.

Password accounts are routed to the password sign-in and sign-up steps, never
through a delegated provider flow, so ``begin_sign_in`` always fails.
"""

from __future__ import annotations

from signin_router.errors import ProviderSignInError
from signin_router.models.identity import PASSWORD_PROVIDER_ID
from signin_router.providers.base import AuthProvider, ProviderSignInResult


class PasswordProvider(AuthProvider):
    def __init__(self, display_name: str = "Email") -> None:
        self._display_name = display_name

    @property
    def provider_id(self) -> str:
        return PASSWORD_PROVIDER_ID

    @property
    def display_name(self) -> str:
        return self._display_name

    def sign_out(self) -> None:
        pass

    async def begin_sign_in(self, email: str) -> ProviderSignInResult:
        return ProviderSignInResult(
            error=ProviderSignInError(
                "Password sign-in is handled by the password steps",
                provider_id=PASSWORD_PROVIDER_ID,
            )
        )
