"""Tests for environment-driven settings."""

import pytest

from annogen.config import get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ANNOGEN_HANDLERS", raising=False)
    monkeypatch.delenv("ANNOGEN_LOG_LEVEL", raising=False)

    settings = get_settings()

    assert settings.handlers == ["lua"]
    assert settings.log_level == "WARNING"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANNOGEN_HANDLERS", "lua, mypkg.bindings:handlers,,")
    monkeypatch.setenv("ANNOGEN_LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.handlers == ["lua", "mypkg.bindings:handlers"]
    assert settings.log_level == "DEBUG"
