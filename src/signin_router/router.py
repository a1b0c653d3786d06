"""Email-first provider resolution.

Given an email and the app's configured providers, asks the identity backend
which providers the email is linked to and decides where the user goes next:

    invalid syntax              -> INVALID_EMAIL   (backend not contacted)
    backend rejects the email   -> INVALID_EMAIL
    configured federated match  -> USE_PROVIDER
    password linked             -> PASSWORD_EXISTING_USER
    only unconfigured providers -> UNSUPPORTED
    nothing linked              -> PASSWORD_NEW_USER

Any other backend failure propagates to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from signin_router.backend.base import IdentityBackend
from signin_router.errors import BackendInvalidEmailError
from signin_router.models.decision import RoutingDecision
from signin_router.models.identity import PASSWORD_PROVIDER_ID
from signin_router.providers.base import AuthProvider
from signin_router.validation import is_valid_email

logger = logging.getLogger(__name__)


def best_provider(
    resolved_ids: Sequence[str], configured: Sequence[AuthProvider]
) -> AuthProvider | None:
    """Return the configured provider for the earliest resolved id that has one.

    Backend order decides precedence; configuration order only breaks ties
    between configured providers sharing an id.
    """
    for provider_id in resolved_ids:
        for provider in configured:
            if provider.provider_id == provider_id:
                return provider
    return None


class ProviderRouter:
    """Decides the next sign-in step for an email."""

    def __init__(self, backend: IdentityBackend) -> None:
        self._backend = backend

    async def route(
        self, email: str, configured_providers: Sequence[AuthProvider]
    ) -> RoutingDecision:
        if not is_valid_email(email):
            return RoutingDecision.invalid_email()

        try:
            resolved = await self._backend.resolve_providers(email)
        except BackendInvalidEmailError:
            logger.debug("Backend rejected email %s", email)
            return RoutingDecision.invalid_email()

        decision = self.decide(resolved, configured_providers)
        logger.debug("Routed %s (resolved %s) -> %s", email, resolved, decision.kind)
        return decision

    @staticmethod
    def decide(
        resolved_ids: Sequence[str], configured_providers: Sequence[AuthProvider]
    ) -> RoutingDecision:
        """Map the backend's provider ids for an email onto a decision."""
        resolved = tuple(resolved_ids)
        match = best_provider(resolved, configured_providers)
        if match is not None and match.provider_id != PASSWORD_PROVIDER_ID:
            return RoutingDecision.use_provider(match, resolved)
        if PASSWORD_PROVIDER_ID in resolved:
            return RoutingDecision.password_existing_user(resolved)
        if resolved:
            return RoutingDecision.unsupported(resolved)
        return RoutingDecision.password_new_user()
