"""Tests for the federated and password providers."""

from __future__ import annotations

import pytest

from signin_router.errors import ProviderSignInError
from signin_router.providers.oauth import OAuthProvider
from signin_router.providers.password import PasswordProvider


class TestOAuthProvider:
    @pytest.mark.asyncio
    async def test_token_becomes_credential(self) -> None:
        calls: list[tuple[str, str]] = []

        async def source(provider_id: str, email: str) -> str:
            calls.append((provider_id, email))
            return "idp-token"

        provider = OAuthProvider("github.com", source, display_name="GitHub")
        result = await provider.begin_sign_in("dev@x.com")

        assert calls == [("github.com", "dev@x.com")]
        assert result.error is None
        assert result.credential.provider_id == "github.com"
        assert result.credential.token == "idp-token"
        assert result.credential.email == "dev@x.com"
        assert provider.signed_in

    @pytest.mark.asyncio
    async def test_empty_token_is_cancellation(self) -> None:
        async def source(provider_id: str, email: str) -> str:
            return ""

        result = await OAuthProvider("github.com", source).begin_sign_in("dev@x.com")

        assert result.credential is None
        assert isinstance(result.error, ProviderSignInError)
        assert "cancelled" in str(result.error)

    @pytest.mark.asyncio
    async def test_token_source_failure(self) -> None:
        async def source(provider_id: str, email: str) -> str:
            raise ConnectionError("consent page unreachable")

        provider = OAuthProvider("github.com", source)
        result = await provider.begin_sign_in("dev@x.com")

        assert isinstance(result.error, ProviderSignInError)
        assert result.error.provider_id == "github.com"
        assert isinstance(result.error.__cause__, ConnectionError)
        assert not provider.signed_in

    @pytest.mark.asyncio
    async def test_observer_attached_to_every_result(self) -> None:
        def observer(user, error) -> None:
            pass

        async def source(provider_id: str, email: str) -> str:
            return "tok"

        provider = OAuthProvider("github.com", source, result_observer=observer)
        result = await provider.begin_sign_in("dev@x.com")
        assert result.result_callback is observer

    @pytest.mark.asyncio
    async def test_sign_out_clears_session(self) -> None:
        async def source(provider_id: str, email: str) -> str:
            return "tok"

        provider = OAuthProvider("github.com", source)
        await provider.begin_sign_in("dev@x.com")
        provider.sign_out()
        assert not provider.signed_in

    def test_display_name_defaults_to_id(self) -> None:
        async def source(provider_id: str, email: str) -> str:
            return "tok"

        assert OAuthProvider("github.com", source).display_name == "github.com"


class TestPasswordProvider:
    @pytest.mark.asyncio
    async def test_begin_sign_in_always_fails(self) -> None:
        result = await PasswordProvider().begin_sign_in("a@x.com")
        assert isinstance(result.error, ProviderSignInError)
        assert result.error.provider_id == "password"

    def test_identity(self) -> None:
        provider = PasswordProvider(display_name="Email and password")
        assert provider.provider_id == "password"
        assert provider.display_name == "Email and password"
