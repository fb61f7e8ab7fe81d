"""Settings loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from homecare.config import Settings


def test_missing_signing_secret_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_empty_signing_secret_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET_KEY", "")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET_KEY", "configured")
    monkeypatch.delenv("TOKEN_EXPIRE_SECONDS", raising=False)
    settings = Settings(_env_file=None)
    assert settings.token_expire_seconds == 3600
    assert settings.jwt_secret_key == "configured"
