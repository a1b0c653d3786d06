"""The sign-in wizard host.

Owns what every step of the wizard shares: the configured providers, the
identity backend, the host app's optional step overrides, and the result
callback that ends the whole wizard.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from signin_router.backend.base import IdentityBackend
from signin_router.models.identity import AuthUser
from signin_router.models.outcome import Outcome
from signin_router.providers.base import AuthProvider

logger = logging.getLogger(__name__)

WizardResultCallback = Callable[[AuthUser | None, Exception | None], None]
StepFactory = Callable[[str], Any]


class AuthWizard:
    """Shared state and the single exit point of a sign-in wizard."""

    def __init__(
        self,
        backend: IdentityBackend,
        providers: Sequence[AuthProvider],
        result_callback: WizardResultCallback,
        *,
        password_sign_in_step: StepFactory | None = None,
        password_sign_up_step: StepFactory | None = None,
    ) -> None:
        self.backend = backend
        self.providers: tuple[AuthProvider, ...] = tuple(providers)
        self._result_callback = result_callback
        self.password_sign_in_step = password_sign_in_step
        self.password_sign_up_step = password_sign_up_step
        self.outcome: Outcome | None = None

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    def get_provider(self, provider_id: str) -> AuthProvider | None:
        for provider in self.providers:
            if provider.provider_id == provider_id:
                return provider
        return None

    def invoke_result_callback(self, outcome: Outcome, *, final: bool = True) -> bool:
        """Hand an outcome to the host app.

        A ``final`` outcome ends the wizard; nothing reaches the callback after
        it. Non-final outcomes (errors that leave the wizard open for a retry)
        are passed through without finishing the wizard. Returns whether the
        callback was reached.
        """
        if self.outcome is not None:
            logger.warning("Wizard already finished; dropping outcome %r", outcome)
            return False
        if final:
            self.outcome = outcome
        self._result_callback(outcome.user, outcome.error)
        return True

    async def sign_out(self) -> None:
        """Sign out of every configured provider and the backend."""
        for provider in self.providers:
            provider.sign_out()
        await self.backend.sign_out()
