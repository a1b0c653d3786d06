"""Identity backends: resolve providers for an email and exchange credentials."""

from signin_router.backend.base import IdentityBackend
from signin_router.backend.http import HttpIdentityBackend
from signin_router.backend.local import LocalIdentityBackend

__all__ = [
    "HttpIdentityBackend",
    "IdentityBackend",
    "LocalIdentityBackend",
]
