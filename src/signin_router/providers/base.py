"""Pluggable auth provider interface.

Each identity method the app offers (a federated OAuth-style service, or the
password method) implements this interface. The router and orchestrator only
ever talk to providers through it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from signin_router.models.identity import AuthUser, Credential

# Called with (user, error) once the provider's flow has a final answer.
ResultCallback = Callable[[AuthUser | None, Exception | None], None]


@dataclass(frozen=True, slots=True)
class ProviderSignInResult:
    """What a provider's sign-in step hands back.

    Exactly one of ``credential`` or ``error`` is set. ``result_callback`` is
    optional in both cases and lets the provider observe how things ended.
    """

    credential: Credential | None = None
    error: Exception | None = None
    result_callback: ResultCallback | None = None

    def __post_init__(self) -> None:
        if (self.credential is None) == (self.error is None):
            raise ValueError("ProviderSignInResult needs exactly one of credential or error")


class AuthProvider(ABC):
    """Abstract interface for an identity method."""

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Identifier matched against the ids the backend reports for an email."""

    @property
    def display_name(self) -> str:
        return self.provider_id

    @abstractmethod
    def sign_out(self) -> None:
        """Drop any session state left over from a previous attempt."""

    @abstractmethod
    async def begin_sign_in(self, email: str) -> ProviderSignInResult:
        """Run the provider's own sign-in step for ``email``.

        Failures are returned in the result rather than raised, so the
        provider can attach its result callback to them.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.provider_id!r})"
