from __future__ import annotations

from accounts_api.config import Settings


def test_defaults(monkeypatch):
    for name in ("IDENTITY_BASE_URL", "CATALOG_BASE_URL", "PORT", "UPSTREAM_TIMEOUT_SECONDS", "VALIDATE_ACCOUNT_OWNER"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()
    assert settings.identity_base_url == "http://identity-api:3001"
    assert settings.catalog_base_url == "http://catalog-api:3003"
    assert settings.http_port == 3002
    assert settings.upstream_timeout_seconds == 5.0
    assert settings.validate_account_owner is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("IDENTITY_BASE_URL", "http://localhost:4001/")
    monkeypatch.setenv("CATALOG_BASE_URL", "http://localhost:4003")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("UPSTREAM_TIMEOUT_SECONDS", "0.5")
    monkeypatch.setenv("VALIDATE_ACCOUNT_OWNER", "false")

    settings = Settings()
    assert settings.identity_base_url == "http://localhost:4001"
    assert settings.catalog_base_url == "http://localhost:4003"
    assert settings.http_port == 8080
    assert settings.upstream_timeout_seconds == 0.5
    assert settings.validate_account_owner is False
