"""Two-phase sign-in: provider credential first, then backend exchange.

A run moves through named states:

    AWAITING_PROVIDER_CREDENTIAL -> AWAITING_EXCHANGE -> TERMINAL

and ends with exactly one Outcome. The provider's optional result callback is
observed twice at most: with the provider error if the provider step fails,
or with the backend's (user, error) once the exchange completes.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass, field
from enum import StrEnum

from signin_router.activity import ActivityCounter
from signin_router.backend.base import IdentityBackend
from signin_router.errors import CredentialExchangeError, ProviderSignInError
from signin_router.models.identity import AuthUser
from signin_router.models.outcome import Outcome
from signin_router.providers.base import AuthProvider, ProviderSignInResult, ResultCallback

logger = logging.getLogger(__name__)


class RunState(StrEnum):
    IDLE = "idle"
    AWAITING_RESOLUTION = "awaiting_resolution"
    AWAITING_PROVIDER_CREDENTIAL = "awaiting_provider_credential"
    AWAITING_EXCHANGE = "awaiting_exchange"
    TERMINAL = "terminal"


@dataclass
class SignInRun:
    """State of one orchestration run."""

    provider_id: str
    email: str
    state: RunState = RunState.IDLE
    history: list[RunState] = field(default_factory=list)
    outcome: Outcome | None = None

    def advance(self, state: RunState) -> None:
        if self.state == RunState.TERMINAL:
            raise RuntimeError("SignInRun already terminated")
        self.state = state
        self.history.append(state)

    def finish(self, outcome: Outcome) -> Outcome:
        self.advance(RunState.TERMINAL)
        self.outcome = outcome
        return outcome


def _observe(
    callback: ResultCallback | None, user: AuthUser | None, error: Exception | None
) -> None:
    if callback is None:
        return
    try:
        callback(user, error)
    except Exception:
        logger.exception("Provider result callback failed")


class SignInOrchestrator:
    """Signs a user in with a chosen provider and the identity backend."""

    def __init__(self, backend: IdentityBackend, activity: ActivityCounter | None = None) -> None:
        self._backend = backend
        self.activity = activity or ActivityCounter()
        self.last_run: SignInRun | None = None

    async def sign_in(self, provider: AuthProvider, email: str) -> Outcome:
        run = SignInRun(provider_id=provider.provider_id, email=email)
        self.last_run = run

        # Always start from a signed-out provider.
        provider.sign_out()

        provider_hold = ExitStack()
        provider_hold.enter_context(self.activity.track())
        with provider_hold:
            run.advance(RunState.AWAITING_PROVIDER_CREDENTIAL)
            result = await self._begin(provider, email)
            callback = result.result_callback

            if result.error is not None:
                error = self._provider_error(result.error, provider)
                provider_hold.close()
                _observe(callback, None, error)
                logger.info("Sign-in with %s failed: %s", provider.provider_id, error)
                return run.finish(Outcome.failure(error))

            # Taken before the provider hold is released so the busy
            # indicator stays up between the two steps.
            exchange_hold = ExitStack()
            exchange_hold.enter_context(self.activity.track())

        with exchange_hold:
            run.advance(RunState.AWAITING_EXCHANGE)
            user: AuthUser | None = None
            exchange_error: CredentialExchangeError | None = None
            try:
                user = await self._backend.exchange_credential(result.credential)
            except CredentialExchangeError as exc:
                exchange_error = exc
            except Exception as exc:
                exchange_error = CredentialExchangeError(
                    f"Credential exchange failed: {exc}", provider_id=provider.provider_id
                )
                exchange_error.__cause__ = exc

        _observe(callback, user, exchange_error)
        if exchange_error is not None:
            logger.info("Credential exchange for %s failed: %s", provider.provider_id, exchange_error)
            return run.finish(Outcome.failure(exchange_error))
        return run.finish(Outcome.success(user))

    @staticmethod
    async def _begin(provider: AuthProvider, email: str) -> ProviderSignInResult:
        try:
            return await provider.begin_sign_in(email)
        except Exception as exc:
            logger.warning("Provider %s raised instead of returning an error", provider.provider_id)
            return ProviderSignInResult(error=exc)

    @staticmethod
    def _provider_error(error: Exception, provider: AuthProvider) -> ProviderSignInError:
        if isinstance(error, ProviderSignInError):
            return error
        wrapped = ProviderSignInError(str(error), provider_id=provider.provider_id)
        wrapped.__cause__ = error
        return wrapped
