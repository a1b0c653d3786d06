"""Error taxonomy for the email-first sign-in flow.

Every error knows where it ends up: either recovered locally on the email step
(an alert, the user retries) or delivered to the wizard host's result callback.
Host-delivered errors additionally say whether the wizard is dismissed first.
"""

from __future__ import annotations

from enum import StrEnum


class Recovery(StrEnum):
    LOCAL = "local"
    HOST = "host"


class SignInError(Exception):
    """Base exception for sign-in flow errors."""

    recovery: Recovery = Recovery.HOST
    dismisses_wizard: bool = True

    def __init__(self, message: str, provider_id: str | None = None) -> None:
        super().__init__(message)
        self.provider_id = provider_id

    @property
    def is_local(self) -> bool:
        return self.recovery == Recovery.LOCAL


class InvalidEmailError(SignInError):
    """The email address is syntactically malformed."""

    recovery = Recovery.LOCAL
    dismisses_wizard = False


class BackendInvalidEmailError(InvalidEmailError):
    """The identity backend rejected the email after the local check passed."""


class UnsupportedProvidersError(SignInError):
    """The account exists but only with providers this app is not configured for."""

    recovery = Recovery.LOCAL
    dismisses_wizard = False

    def __init__(self, message: str, provider_ids: list[str] | None = None) -> None:
        super().__init__(message)
        self.provider_ids = list(provider_ids or [])


class BackendResolutionError(SignInError):
    """Provider lookup for an email failed for a reason other than a bad email."""


class ProviderSignInError(SignInError):
    """The provider's own sign-in step failed or was cancelled."""


class CredentialExchangeError(SignInError):
    """The backend refused to exchange a provider credential for a session.

    Delivered to the host without dismissing the wizard, so the host can keep
    it open and let the user try another method.
    """

    dismisses_wizard = False
