"""Local identity backend backed by SQLite storage.

Accounts and their linked providers live in the local database. A federated
credential's token is taken as the provider-side subject id; an unknown
subject with an unused email signs the user up.
"""

from __future__ import annotations

import logging
import uuid

import aiosqlite

from signin_router.backend.base import IdentityBackend
from signin_router.errors import (
    BackendInvalidEmailError,
    BackendResolutionError,
    CredentialExchangeError,
)
from signin_router.models.identity import PASSWORD_PROVIDER_ID, AuthUser, Credential
from signin_router.storage.sqlite import StorageEngine
from signin_router.validation import is_valid_email

logger = logging.getLogger(__name__)


def _display_name_from_email(email: str) -> str:
    local_part = email.split("@")[0]
    return local_part.replace(".", " ").replace("_", " ").title()


class LocalIdentityBackend(IdentityBackend):
    """Resolves providers and exchanges credentials against the local database."""

    def __init__(self, storage: StorageEngine) -> None:
        self._storage = storage
        self.current_user: AuthUser | None = None

    async def resolve_providers(self, email: str) -> list[str]:
        if not is_valid_email(email):
            raise BackendInvalidEmailError(f"Invalid email: {email!r}")
        try:
            return await self._storage.list_linked_providers(email)
        except aiosqlite.Error as exc:
            raise BackendResolutionError(f"Provider lookup failed for {email}") from exc

    async def exchange_credential(self, credential: Credential) -> AuthUser:
        subject = credential.consume()
        provider_id = credential.provider_id
        if provider_id == PASSWORD_PROVIDER_ID:
            raise CredentialExchangeError(
                "Password credentials are not exchanged here", provider_id=provider_id
            )

        try:
            user = await self._exchange(provider_id, subject, credential.email)
        except aiosqlite.Error as exc:
            raise CredentialExchangeError(
                "Credential exchange failed", provider_id=provider_id
            ) from exc

        self.current_user = user
        logger.info("Signed in %s via %s (new=%s)", user.email, provider_id, user.is_new_user)
        return user

    async def _exchange(self, provider_id: str, subject: str, email: str | None) -> AuthUser:
        row = await self._storage.find_account_by_provider(provider_id, subject)
        if row:
            return AuthUser(
                uid=row["id"],
                email=row["email"],
                display_name=row["display_name"],
                provider_id=provider_id,
            )

        if not email:
            raise CredentialExchangeError(
                "Credential carries no email for a new account", provider_id=provider_id
            )
        if await self._storage.get_account_by_email(email):
            raise CredentialExchangeError(
                f"An account already exists for {email} with a different credential",
                provider_id=provider_id,
            )

        account_id = uuid.uuid4().hex
        display_name = _display_name_from_email(email)
        await self._storage.create_account_with_provider(
            account_id=account_id,
            email=email,
            provider_id=provider_id,
            provider_uid=subject,
            display_name=display_name,
        )
        return AuthUser(
            uid=account_id,
            email=email.lower(),
            display_name=display_name,
            provider_id=provider_id,
            is_new_user=True,
        )

    async def sign_out(self) -> None:
        self.current_user = None
