"""Identity backend interface.

The backend knows which providers are linked to an email and turns provider
credentials into authenticated sessions. A local SQLite backend and a REST
backend implement it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from signin_router.models.identity import AuthUser, Credential


class IdentityBackend(ABC):
    """Abstract interface for the identity service behind the wizard."""

    @abstractmethod
    async def resolve_providers(self, email: str) -> list[str]:
        """Return provider ids linked to ``email``, in the backend's precedence order.

        Empty when no account exists. Raises ``BackendInvalidEmailError`` if the
        backend rejects the email, ``BackendResolutionError`` for anything else.
        """

    @abstractmethod
    async def exchange_credential(self, credential: Credential) -> AuthUser:
        """Exchange a provider credential for a signed-in user.

        Raises ``CredentialExchangeError`` on failure.
        """

    @abstractmethod
    async def sign_out(self) -> None:
        """End the current backend session, if any."""
