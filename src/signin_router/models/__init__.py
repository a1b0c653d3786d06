"""Data models: credentials, users, routing decisions and outcomes."""

from signin_router.models.decision import DecisionKind, RoutingDecision
from signin_router.models.identity import PASSWORD_PROVIDER_ID, AuthUser, Credential
from signin_router.models.outcome import Outcome

__all__ = [
    "PASSWORD_PROVIDER_ID",
    "AuthUser",
    "Credential",
    "DecisionKind",
    "Outcome",
    "RoutingDecision",
]
