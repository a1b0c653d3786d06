"""Terminal result of a sign-in attempt."""

from __future__ import annotations

from dataclasses import dataclass

from signin_router.models.identity import AuthUser


@dataclass(frozen=True, slots=True)
class Outcome:
    """Exactly one of ``user`` or ``error`` is set."""

    user: AuthUser | None = None
    error: Exception | None = None

    def __post_init__(self) -> None:
        if (self.user is None) == (self.error is None):
            raise ValueError("Outcome needs exactly one of user or error")

    @classmethod
    def success(cls, user: AuthUser) -> Outcome:
        return cls(user=user)

    @classmethod
    def failure(cls, error: Exception) -> Outcome:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.user is not None
