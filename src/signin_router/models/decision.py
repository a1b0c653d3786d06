"""Routing decisions produced for a submitted email."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from signin_router.providers.base import AuthProvider


class DecisionKind(StrEnum):
    USE_PROVIDER = "use_provider"
    PASSWORD_EXISTING_USER = "password_existing_user"
    PASSWORD_NEW_USER = "password_new_user"
    UNSUPPORTED = "unsupported"
    INVALID_EMAIL = "invalid_email"


@dataclass(frozen=True, slots=True)
class RoutingDecision:
    """Which path the user takes next.

    ``provider`` is set only for ``USE_PROVIDER``. ``resolved_ids`` keeps the
    backend's answer the decision was made from (empty for INVALID_EMAIL).
    """

    kind: DecisionKind
    provider: AuthProvider | None = None
    resolved_ids: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if (self.kind == DecisionKind.USE_PROVIDER) != (self.provider is not None):
            raise ValueError("provider must be set exactly when kind is use_provider")

    @classmethod
    def use_provider(
        cls, provider: AuthProvider, resolved_ids: tuple[str, ...] = ()
    ) -> RoutingDecision:
        return cls(DecisionKind.USE_PROVIDER, provider, resolved_ids)

    @classmethod
    def password_existing_user(cls, resolved_ids: tuple[str, ...] = ()) -> RoutingDecision:
        return cls(DecisionKind.PASSWORD_EXISTING_USER, resolved_ids=resolved_ids)

    @classmethod
    def password_new_user(cls) -> RoutingDecision:
        return cls(DecisionKind.PASSWORD_NEW_USER)

    @classmethod
    def unsupported(cls, resolved_ids: tuple[str, ...] = ()) -> RoutingDecision:
        return cls(DecisionKind.UNSUPPORTED, resolved_ids=resolved_ids)

    @classmethod
    def invalid_email(cls) -> RoutingDecision:
        return cls(DecisionKind.INVALID_EMAIL)
