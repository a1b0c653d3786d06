"""Auth providers: the identity methods an app can be configured with."""

from signin_router.providers.base import AuthProvider, ProviderSignInResult, ResultCallback
from signin_router.providers.oauth import OAuthProvider, TokenSource
from signin_router.providers.password import PasswordProvider

__all__ = [
    "AuthProvider",
    "OAuthProvider",
    "PasswordProvider",
    "ProviderSignInResult",
    "ResultCallback",
    "TokenSource",
]
