"""Foundation types: provider ids, credentials and signed-in users."""

from __future__ import annotations

from pydantic import BaseModel, PrivateAttr

from signin_router.errors import CredentialExchangeError

PASSWORD_PROVIDER_ID = "password"


class Credential(BaseModel):
    """Opaque token issued by a provider, presented once to the backend."""

    provider_id: str
    token: str
    email: str | None = None
    nonce: str | None = None

    _consumed: bool = PrivateAttr(default=False)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def consume(self) -> str:
        """Mark the credential as used and return its token.

        A credential can only be exchanged once.
        """
        if self._consumed:
            raise CredentialExchangeError(
                "Credential has already been exchanged", provider_id=self.provider_id
            )
        self._consumed = True
        return self.token


class AuthUser(BaseModel):
    """An authenticated user as reported by the identity backend."""

    uid: str
    email: str | None = None
    display_name: str | None = None
    provider_id: str
    is_new_user: bool = False
