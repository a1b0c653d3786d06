"""Wizard configuration: which providers are offered, in which order, and
which identity backend answers for them.

Loaded from YAML:

    providers:
      - id: google.com
        kind: oauth
        display_name: Google
      - id: password
        kind: password
    backend:
      kind: local
      db_path: .signin/accounts.db
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from signin_router.models.identity import PASSWORD_PROVIDER_ID
from signin_router.providers.base import AuthProvider
from signin_router.providers.oauth import OAuthProvider, TokenSource
from signin_router.providers.password import PasswordProvider

DEFAULT_DB = Path.cwd() / ".signin" / "accounts.db"


class ProviderConfig(BaseModel):
    id: str
    kind: Literal["oauth", "password"] = "oauth"
    display_name: str | None = None
    scopes: list[str] = Field(default_factory=list)


class BackendConfig(BaseModel):
    kind: Literal["local", "http"] = "local"
    db_path: Path = DEFAULT_DB
    base_url: str = "https://identitytoolkit.googleapis.com/v1"
    api_key: str | None = None
    timeout: float = 10.0


class WizardConfig(BaseModel):
    providers: list[ProviderConfig] = Field(default_factory=list)
    backend: BackendConfig = Field(default_factory=BackendConfig)

    @classmethod
    def from_dict(cls, data: dict | None) -> WizardConfig:
        return cls.model_validate(data or {})

    @classmethod
    def from_yaml(cls, path: Path) -> WizardConfig:
        data = yaml.safe_load(path.read_text())
        return cls.from_dict(data)

    @classmethod
    def default(cls) -> WizardConfig:
        return cls(
            providers=[
                ProviderConfig(id="google.com", display_name="Google"),
                ProviderConfig(id="facebook.com", display_name="Facebook"),
                ProviderConfig(id=PASSWORD_PROVIDER_ID, kind="password", display_name="Email"),
            ]
        )

    def provider_ids(self) -> list[str]:
        return [p.id for p in self.providers]


def build_providers(config: WizardConfig, token_source: TokenSource) -> tuple[AuthProvider, ...]:
    """Instantiate the configured providers, keeping configuration order."""
    providers: list[AuthProvider] = []
    for entry in config.providers:
        if entry.kind == "password":
            providers.append(PasswordProvider(display_name=entry.display_name or "Email"))
        else:
            providers.append(
                OAuthProvider(
                    entry.id,
                    token_source,
                    display_name=entry.display_name,
                    scopes=entry.scopes,
                )
            )
    return tuple(providers)
