"""Tests for library settings and loading helpers."""

import logging

import pytest

from pydantic import ValidationError

from kvconfig.config.loader import load_config, load_settings
from kvconfig.config.settings import Settings
from kvconfig.exceptions import ConfigurationError


class TestSettings:
    """Settings defaults and validation."""

    def test_defaults(self):
        settings = Settings()
        assert settings.legacy_comment_boundary is False
        assert settings.max_line_length == 1023
        assert settings.encoding == "utf-8"
        assert settings.log_level == "INFO"
        assert settings.debug is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("KVCONFIG_LEGACY_COMMENT_BOUNDARY", "true")
        monkeypatch.setenv("KVCONFIG_MAX_LINE_LENGTH", "80")
        monkeypatch.setenv("KVCONFIG_LOG_LEVEL", "debug")

        settings = Settings()
        assert settings.legacy_comment_boundary is True
        assert settings.max_line_length == 80
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    def test_invalid_line_length(self):
        with pytest.raises(ValidationError):
            Settings(max_line_length=0)

    def test_unknown_encoding(self):
        with pytest.raises(ValidationError):
            Settings(encoding="no-such-codec")

    def test_get_log_level(self):
        assert Settings(log_level="warning").get_log_level() == logging.WARNING
        assert Settings(log_level="ERROR", debug=True).get_log_level() == logging.DEBUG


class TestLoadSettings:
    """Environment loading wrapper."""

    def test_load(self, monkeypatch):
        monkeypatch.setenv("KVCONFIG_ENCODING", "latin-1")
        assert load_settings().encoding == "latin-1"

    def test_invalid_environment_raises_configuration_error(self, monkeypatch):
        monkeypatch.setenv("KVCONFIG_LOG_LEVEL", "LOUD")
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings()
        assert isinstance(exc_info.value.__cause__, ValidationError)


class TestLoadConfig:
    """Store construction helper."""

    def test_without_file(self):
        config, result = load_config()
        assert result.ok
        assert len(config) == 0

    def test_with_file(self, sample_file):
        config, result = load_config(sample_file)
        assert result.ok
        assert config.get("PORT", int) == 8080

    def test_uses_environment_settings(self, monkeypatch, write_file):
        monkeypatch.setenv("KVCONFIG_LEGACY_COMMENT_BOUNDARY", "1")
        config, _ = load_config(write_file("VAL = 10# c\n"))
        assert config.get("VAL") == "1"

    def test_explicit_settings(self, write_file, legacy_settings):
        config, _ = load_config(write_file("VAL = 10# c\n"), settings=legacy_settings)
        assert config.settings is legacy_settings
        assert config.get("VAL") == "1"

    def test_missing_file(self, tmp_path):
        config, result = load_config(tmp_path / "missing.cfg")
        assert not result.ok
        assert len(config) == 0
