"""Tests for the wizard host."""

from __future__ import annotations

import logging

import pytest

from signin_router.backend.base import IdentityBackend
from signin_router.models.identity import AuthUser, Credential
from signin_router.models.outcome import Outcome
from signin_router.providers.oauth import OAuthProvider
from signin_router.providers.password import PasswordProvider
from signin_router.wizard.host import AuthWizard


class NullBackend(IdentityBackend):
    def __init__(self) -> None:
        self.signed_out = False

    async def resolve_providers(self, email: str) -> list[str]:
        return []

    async def exchange_credential(self, credential: Credential) -> AuthUser:
        raise AssertionError("not used")

    async def sign_out(self) -> None:
        self.signed_out = True


async def _token(provider_id: str, email: str) -> str:
    return "tok"


def _wizard(results: list, backend: IdentityBackend | None = None) -> AuthWizard:
    return AuthWizard(
        backend or NullBackend(),
        [OAuthProvider("google.com", _token), PasswordProvider()],
        lambda user, error: results.append((user, error)),
    )


def test_callback_reached_once(caplog: pytest.LogCaptureFixture) -> None:
    results: list = []
    wizard = _wizard(results)
    user = AuthUser(uid="u1", provider_id="google.com")

    assert wizard.invoke_result_callback(Outcome.success(user)) is True
    with caplog.at_level(logging.WARNING):
        assert wizard.invoke_result_callback(Outcome.failure(RuntimeError("late"))) is False

    assert results == [(user, None)]
    assert wizard.finished
    assert wizard.outcome.user is user
    assert "already finished" in caplog.text


def test_get_provider() -> None:
    wizard = _wizard([])
    assert wizard.get_provider("password").display_name == "Email"
    assert wizard.get_provider("google.com").provider_id == "google.com"
    assert wizard.get_provider("github.com") is None


def test_providers_keep_configuration_order() -> None:
    wizard = _wizard([])
    assert [p.provider_id for p in wizard.providers] == ["google.com", "password"]


@pytest.mark.asyncio
async def test_sign_out_clears_providers_and_backend() -> None:
    backend = NullBackend()
    wizard = _wizard([], backend)
    google = wizard.get_provider("google.com")
    await google.begin_sign_in("a@x.com")
    assert google.signed_in

    await wizard.sign_out()

    assert not google.signed_in
    assert backend.signed_out


def test_non_final_outcome_keeps_wizard_open() -> None:
    results: list = []
    wizard = _wizard(results)
    error = RuntimeError("exchange rejected")
    user = AuthUser(uid="u1", provider_id="google.com")

    assert wizard.invoke_result_callback(Outcome.failure(error), final=False) is True
    assert not wizard.finished
    assert wizard.invoke_result_callback(Outcome.success(user)) is True

    assert results == [(None, error), (user, None)]
    assert wizard.outcome.user is user
