"""Tests for wizard configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from signin_router.config import DEFAULT_DB, WizardConfig, build_providers
from signin_router.providers.oauth import OAuthProvider
from signin_router.providers.password import PasswordProvider

YAML = """
providers:
  - id: github.com
    display_name: GitHub
    scopes: [read:user, user:email]
  - id: password
    kind: password
  - id: google.com
backend:
  kind: http
  api_key: abc123
  timeout: 5
"""


async def _token(provider_id: str, email: str) -> str:
    return "tok"


def test_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "wizard.yaml"
    path.write_text(YAML)

    cfg = WizardConfig.from_yaml(path)

    assert cfg.provider_ids() == ["github.com", "password", "google.com"]
    assert cfg.providers[0].scopes == ["read:user", "user:email"]
    assert cfg.backend.kind == "http"
    assert cfg.backend.api_key == "abc123"
    assert cfg.backend.timeout == 5.0


def test_empty_yaml_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")
    cfg = WizardConfig.from_yaml(path)
    assert cfg.providers == []
    assert cfg.backend.kind == "local"
    assert cfg.backend.db_path == DEFAULT_DB


def test_unknown_kind_rejected() -> None:
    with pytest.raises(ValidationError):
        WizardConfig.from_dict({"providers": [{"id": "x.com", "kind": "saml"}]})


def test_default_config() -> None:
    cfg = WizardConfig.default()
    assert cfg.provider_ids() == ["google.com", "facebook.com", "password"]


def test_build_providers_keeps_order_and_kinds(tmp_path: Path) -> None:
    path = tmp_path / "wizard.yaml"
    path.write_text(YAML)

    providers = build_providers(WizardConfig.from_yaml(path), _token)

    assert [p.provider_id for p in providers] == ["github.com", "password", "google.com"]
    assert isinstance(providers[0], OAuthProvider)
    assert providers[0].display_name == "GitHub"
    assert providers[0].scopes == ["read:user", "user:email"]
    assert isinstance(providers[1], PasswordProvider)
    assert providers[1].display_name == "Email"
    assert providers[2].display_name == "google.com"
