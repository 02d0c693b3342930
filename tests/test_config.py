"""Tests for settings, construction options and logging setup."""

import logging

import pytest
import structlog
from pydantic import ValidationError

from hamachi import ConstructionOptions, TypeMismatch, config
from hamachi.log import configure_logging


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        settings = config.Settings(_env_file=None)
        assert settings.include_unknown_fields is True
        assert settings.check_types is True
        assert settings.freeze is False
        assert settings.log_level == "WARNING"
        assert settings.log_format == "console"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("HAMACHI_CHECK_TYPES", "false")
        monkeypatch.setenv("HAMACHI_FREEZE", "true")
        settings = config.Settings(_env_file=None)
        assert settings.check_types is False
        assert settings.freeze is True

    def test_rejects_unknown_log_format(self, monkeypatch):
        monkeypatch.setenv("HAMACHI_LOG_FORMAT", "xml")
        with pytest.raises(ValidationError):
            config.Settings(_env_file=None)

    def test_construction_defaults(self):
        assert config.Settings(_env_file=None).construction_defaults() == {
            "include_unknown_fields": True,
            "check_types": True,
            "freeze": False,
        }


class TestConstructionOptions:
    """Tests for resolving options against settings."""

    @pytest.fixture
    def lenient_settings(self, monkeypatch):
        monkeypatch.setattr(
            config, "settings", config.Settings(_env_file=None, check_types=False)
        )

    def test_defaults_follow_settings(self, lenient_settings, model):
        assert ConstructionOptions.resolve().check_types is False
        assert model({"name": "Anna", "age": 9000}).age == 9000

    def test_explicit_option_wins(self, lenient_settings, model):
        with pytest.raises(TypeMismatch):
            model({"name": "Anna", "age": 9000}, check_types=True)

    def test_resolve_returns_options_unchanged(self):
        options = ConstructionOptions(freeze=True)
        assert ConstructionOptions.resolve(options) is options

    def test_resolve_merges_overrides(self):
        options = ConstructionOptions.resolve({"freeze": True}, check_types=False)
        assert options == ConstructionOptions(freeze=True, check_types=False)

    def test_options_are_immutable(self):
        with pytest.raises(ValidationError):
            ConstructionOptions().freeze = True


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.fixture(autouse=True)
    def restore_logging(self):
        logger = logging.getLogger("hamachi")
        level = logger.level
        yield
        logger.setLevel(level)
        structlog.reset_defaults()

    def test_sets_library_level(self):
        configure_logging("debug", "json")
        assert logging.getLogger("hamachi").level == logging.DEBUG

    def test_defaults_to_settings(self):
        configure_logging()
        assert logging.getLogger("hamachi").level == logging.WARNING

    def test_rejects_unknown_level(self):
        with pytest.raises(ValueError, match="unknown log level: LOUD"):
            configure_logging("loud")
