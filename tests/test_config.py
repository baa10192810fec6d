"""Tests for settings loading (config.py)."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from ezid_cli.config import DEFAULT_BASE, DEFAULT_URL, Settings, load_settings
from ezid_cli.core.models import ArkBase
from ezid_cli.exceptions import ConfigError


class TestDefaults:
    def test_defaults(self) -> None:
        settings = load_settings()
        assert settings.url == DEFAULT_URL
        assert settings.base == DEFAULT_BASE
        assert settings.ark_base == ArkBase(naan="99999", shoulder="fk4")
        assert settings.username is None
        assert settings.password is None


class TestEnvironment:
    def test_env_overrides_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EZID_BASE", "ark:/13030/c8")
        monkeypatch.setenv("EZID_URL", "https://ezid.example.org/")
        settings = load_settings()
        assert settings.ark_base == ArkBase(naan="13030", shoulder="c8")
        assert settings.url == "https://ezid.example.org"

    def test_dotenv_file_read(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("EZID_USERNAME=apitest\n", encoding="utf-8")
        assert load_settings().username == "apitest"

    def test_session_file_from_env(self, tmp_path: Path) -> None:
        assert load_settings().session_file == tmp_path / "session.json"


class TestOverrides:
    def test_explicit_override_beats_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EZID_BASE", "ark:/13030/c8")
        assert load_settings(base="ark:/12345/x9").base == "ark:/12345/x9"

    def test_none_overrides_ignored(self) -> None:
        assert load_settings(base=None, url=None).base == DEFAULT_BASE

    def test_invalid_base_rejected_at_load(self) -> None:
        with pytest.raises(ConfigError, match="Invalid base"):
            load_settings(base="not/a/base")

    def test_invalid_value_mapped_to_config_error(self) -> None:
        with pytest.raises(ConfigError):
            load_settings(timeout=-1)


class TestImmutability:
    def test_settings_are_frozen(self) -> None:
        settings = Settings()
        with pytest.raises(ValidationError):
            settings.base = "ark:/12345/x9"  # type: ignore[misc]

    def test_password_hidden_from_repr(self) -> None:
        assert "hunter2" not in repr(Settings(password="hunter2"))
