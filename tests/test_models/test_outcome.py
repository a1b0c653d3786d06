"""Tests for outcomes, routing decisions, credentials and the error taxonomy."""

import pytest

from signin_router.errors import (
    BackendInvalidEmailError,
    BackendResolutionError,
    CredentialExchangeError,
    InvalidEmailError,
    ProviderSignInError,
    Recovery,
    SignInError,
    UnsupportedProvidersError,
)
from signin_router.models import AuthUser, Credential, DecisionKind, Outcome, RoutingDecision
from signin_router.providers.password import PasswordProvider


class TestOutcome:
    def test_success(self) -> None:
        user = AuthUser(uid="u1", provider_id="google.com")
        outcome = Outcome.success(user)
        assert outcome.ok
        assert outcome.error is None

    def test_failure(self) -> None:
        outcome = Outcome.failure(ProviderSignInError("cancelled"))
        assert not outcome.ok
        assert outcome.user is None

    def test_needs_exactly_one(self) -> None:
        with pytest.raises(ValueError):
            Outcome()
        with pytest.raises(ValueError):
            Outcome(user=AuthUser(uid="u", provider_id="p"), error=RuntimeError("x"))


class TestRoutingDecision:
    def test_use_provider_requires_provider(self) -> None:
        with pytest.raises(ValueError):
            RoutingDecision(DecisionKind.USE_PROVIDER)

    def test_other_kinds_reject_provider(self) -> None:
        with pytest.raises(ValueError):
            RoutingDecision(DecisionKind.UNSUPPORTED, provider=PasswordProvider())

    def test_constructors(self) -> None:
        provider = PasswordProvider()
        decision = RoutingDecision.use_provider(provider, ("password",))
        assert decision.provider is provider
        assert decision.resolved_ids == ("password",)
        assert RoutingDecision.password_new_user().resolved_ids == ()
        assert RoutingDecision.invalid_email().kind == DecisionKind.INVALID_EMAIL
        assert RoutingDecision.unsupported(("x",)).kind == "unsupported"


class TestCredential:
    def test_consume_once(self) -> None:
        credential = Credential(provider_id="google.com", token="tok")
        assert not credential.consumed
        assert credential.consume() == "tok"
        assert credential.consumed
        with pytest.raises(CredentialExchangeError, match="already been exchanged"):
            credential.consume()


class TestErrors:
    @pytest.mark.parametrize(
        "error",
        [
            InvalidEmailError("bad"),
            BackendInvalidEmailError("bad"),
            UnsupportedProvidersError("nope", ["x.com"]),
        ],
    )
    def test_local_errors(self, error: SignInError) -> None:
        assert error.recovery == Recovery.LOCAL
        assert error.is_local
        assert error.dismisses_wizard is False

    @pytest.mark.parametrize(
        "error",
        [BackendResolutionError("down"), ProviderSignInError("cancelled")],
    )
    def test_host_errors_dismiss(self, error: SignInError) -> None:
        assert not error.is_local
        assert error.dismisses_wizard is True

    def test_exchange_error_keeps_wizard_open(self) -> None:
        error = CredentialExchangeError("rejected", provider_id="google.com")
        assert error.recovery == Recovery.HOST
        assert error.dismisses_wizard is False
        assert error.provider_id == "google.com"

    def test_backend_invalid_email_is_invalid_email(self) -> None:
        assert isinstance(BackendInvalidEmailError("x"), InvalidEmailError)
