"""Navigation intents emitted by the email step, and the sink that receives them.

The email step never touches UI directly. It describes what should happen
(show an alert, push a step, dismiss the wizard) and a ResultSink carries it
out: a console in the CLI, a recorder in tests, a real UI elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from signin_router.models.outcome import Outcome
from signin_router.providers.base import AuthProvider


class StepId(StrEnum):
    PASSWORD_SIGN_IN = "password_sign_in"
    PASSWORD_SIGN_UP = "password_sign_up"


@dataclass(frozen=True, slots=True)
class ShowValidationAlert:
    message: str


@dataclass(frozen=True, slots=True)
class ShowProviderConfirmation:
    """Ask the user to continue with ``provider`` or cancel."""

    provider: AuthProvider
    email: str
    on_proceed: Callable[[], Awaitable[None]]
    on_cancel: Callable[[], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class PushStep:
    """Advance to a password step.

    ``override`` is the host-supplied replacement for the default step, if any.
    """

    step: StepId
    email: str
    override: Any = None


@dataclass(frozen=True, slots=True)
class ShowUnsupportedAlert:
    message: str


@dataclass(frozen=True, slots=True)
class DeliverFinalOutcome:
    outcome: Outcome


@dataclass(frozen=True, slots=True)
class DismissWizard:
    pass


Intent = (
    ShowValidationAlert
    | ShowProviderConfirmation
    | PushStep
    | ShowUnsupportedAlert
    | DeliverFinalOutcome
    | DismissWizard
)


class ResultSink(ABC):
    """Carries out navigation intents."""

    @abstractmethod
    async def handle(self, intent: Intent) -> None:
        """Perform ``intent``."""


class RecordingSink(ResultSink):
    """Keeps every intent in order. Useful headless and in tests."""

    def __init__(self) -> None:
        self.intents: list[Intent] = []

    async def handle(self, intent: Intent) -> None:
        self.intents.append(intent)

    def of_type(self, kind: type) -> list[Intent]:
        return [i for i in self.intents if isinstance(i, kind)]
