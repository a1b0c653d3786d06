"""Email entry step: the first screen of the sign-in wizard.

Takes the email the user typed, routes it, and turns the routing decision
into navigation intents. Errors are either recovered here (an alert, the
user edits the email and retries) or delivered to the wizard host, never both.
"""

from __future__ import annotations

import logging
from functools import partial

from signin_router import messages
from signin_router.activity import ActivityCounter
from signin_router.errors import InvalidEmailError, SignInError, UnsupportedProvidersError
from signin_router.models.decision import DecisionKind, RoutingDecision
from signin_router.models.outcome import Outcome
from signin_router.navigation import (
    DeliverFinalOutcome,
    DismissWizard,
    Intent,
    PushStep,
    ResultSink,
    ShowProviderConfirmation,
    ShowUnsupportedAlert,
    ShowValidationAlert,
    StepId,
)
from signin_router.orchestrator import RunState, SignInOrchestrator
from signin_router.providers.base import AuthProvider
from signin_router.router import ProviderRouter
from signin_router.wizard.host import AuthWizard

logger = logging.getLogger(__name__)


class EmailEntryStep:
    """Controller for the email step of the wizard."""

    def __init__(
        self,
        wizard: AuthWizard,
        sink: ResultSink,
        activity: ActivityCounter | None = None,
    ) -> None:
        self.wizard = wizard
        self._sink = sink
        self.activity = activity or ActivityCounter()
        self._router = ProviderRouter(wizard.backend)
        self.orchestrator = SignInOrchestrator(wizard.backend, self.activity)
        self.email_text = ""
        self.state = RunState.IDLE
        self.last_decision: RoutingDecision | None = None
        self.last_error: SignInError | None = None
        self._alive = True

    # ----- Input -----

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def can_submit(self) -> bool:
        """The advance action is enabled only for non-empty input while idle."""
        return self._alive and bool(self.email_text) and not self.activity.busy

    def email_changed(self, text: str) -> None:
        self.email_text = text or ""

    async def submit(self, text: str | None = None) -> RoutingDecision | None:
        """Return-key path: route ``text`` (or the current field value)."""
        if text is not None:
            self.email_changed(text)
        return await self._on_next(self.email_text)

    async def next(self) -> RoutingDecision | None:
        """Explicit advance action."""
        return await self._on_next(self.email_text)

    def close(self) -> None:
        """The screen went away. Work still in flight finishes silently."""
        self._alive = False

    # ----- Routing -----

    async def _on_next(self, email: str) -> RoutingDecision | None:
        if not self._alive:
            return None
        if self.activity.busy:
            logger.debug("Ignoring submit while a request is in flight")
            return None

        self.state = RunState.AWAITING_RESOLUTION
        try:
            with self.activity.track():
                decision = await self._router.route(email, self.wizard.providers)
        except Exception as exc:
            self.state = RunState.TERMINAL
            if not self._alive:
                logger.debug("Dropping late resolution failure for %s: %s", email, exc)
                return None
            logger.warning("Provider lookup for %s failed: %s", email, exc)
            await self._deliver(Outcome.failure(exc), dismiss=True)
            return None

        self.state = RunState.IDLE
        if not self._alive:
            logger.debug("Dropping late routing decision for %s", email)
            return None

        self.last_decision = decision
        await self._dispatch(decision, email)
        return decision

    async def _dispatch(self, decision: RoutingDecision, email: str) -> None:
        kind = decision.kind
        if kind == DecisionKind.INVALID_EMAIL:
            await self._recover(InvalidEmailError(f"Invalid email: {email!r}"))
        elif kind == DecisionKind.USE_PROVIDER:
            provider = decision.provider
            await self._emit(
                ShowProviderConfirmation(
                    provider=provider,
                    email=email,
                    on_proceed=partial(self.sign_in_with_provider, provider, email),
                    on_cancel=self.cancel,
                )
            )
        elif kind == DecisionKind.PASSWORD_EXISTING_USER:
            override = None
            if self.wizard.password_sign_in_step is not None:
                override = self.wizard.password_sign_in_step(email)
            await self._emit(PushStep(StepId.PASSWORD_SIGN_IN, email, override))
        elif kind == DecisionKind.PASSWORD_NEW_USER:
            override = None
            if self.wizard.password_sign_up_step is not None:
                override = self.wizard.password_sign_up_step(email)
            await self._emit(PushStep(StepId.PASSWORD_SIGN_UP, email, override))
        elif kind == DecisionKind.UNSUPPORTED:
            await self._recover(
                UnsupportedProvidersError(
                    f"No configured provider for {email}", list(decision.resolved_ids)
                )
            )

    # ----- Provider confirmation -----

    async def sign_in_with_provider(self, provider: AuthProvider, email: str) -> Outcome | None:
        """Proceed action of the provider confirmation."""
        if not self._alive:
            return None
        if self.activity.busy:
            logger.debug("Ignoring proceed while a request is in flight")
            return None

        outcome = await self.orchestrator.sign_in(provider, email)
        self.state = RunState.TERMINAL
        if not self._alive:
            logger.debug("Dropping late sign-in outcome for %s", email)
            return None

        if outcome.ok:
            await self._deliver(outcome, dismiss=True)
        else:
            dismiss = getattr(outcome.error, "dismisses_wizard", True)
            await self._deliver(outcome, dismiss=dismiss)
        return outcome

    async def cancel(self) -> None:
        """Cancel action of the provider confirmation: end the wizard, no outcome."""
        await self.wizard.sign_out()
        if self._alive:
            await self._emit(DismissWizard())

    # ----- Helpers -----

    async def _recover(self, error: SignInError) -> None:
        self.last_error = error
        if isinstance(error, UnsupportedProvidersError):
            logger.info("Unsupported providers %s", error.provider_ids)
            await self._emit(ShowUnsupportedAlert(messages.CANNOT_AUTHENTICATE))
        else:
            await self._emit(ShowValidationAlert(messages.INVALID_EMAIL))

    async def _deliver(self, outcome: Outcome, *, dismiss: bool) -> None:
        if self.wizard.finished:
            logger.warning("Wizard already finished; not delivering %r", outcome)
            return
        if isinstance(outcome.error, SignInError):
            self.last_error = outcome.error
        if dismiss:
            await self._emit(DismissWizard())
        # A wizard left open after an error stays retryable.
        if self.wizard.invoke_result_callback(outcome, final=dismiss or outcome.ok):
            await self._emit(DeliverFinalOutcome(outcome))

    async def _emit(self, intent: Intent) -> None:
        await self._sink.handle(intent)
