"""
Базовые тесты для проверки работоспособности
"""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from pnp_model import ModelSettings, PnpModelError
from pnp_model.exceptions.errors import create_duplicate_error
from pnp_model.observability.logging import (
    ModelLoggerConfig,
    get_logger,
    truncate_long_values,
)


def test_imports():
    """Тест базовых импортов"""
    try:
        from pnp_model import (
            Configuration,
            Package,
            Pipeline,
            PackageRecord,
            load_configuration,
            setup_logging,
        )

        assert Configuration is not None
        assert Package is not None
        assert Pipeline is not None
        assert PackageRecord is not None
        assert load_configuration is not None
        assert setup_logging is not None

    except ImportError as e:
        pytest.fail(f"Ошибка импорта: {e}")


class TestModelSettings:
    """Тесты настроек"""

    def test_defaults(self):
        settings = ModelSettings()

        assert settings.log_level == "INFO"
        assert settings.log_format == "json"
        assert settings.report_stale_references is True

    def test_log_level_is_normalized(self):
        assert ModelSettings(log_level="debug").log_level == "DEBUG"

    def test_invalid_values(self):
        with pytest.raises(ValidationError):
            ModelSettings(log_level="verbose")
        with pytest.raises(ValidationError):
            ModelSettings(log_format="xml")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PNP_LOG_LEVEL", "warning")
        monkeypatch.setenv("PNP_LOG_FORMAT", "Console")
        monkeypatch.setenv("PNP_REPORT_STALE_REFERENCES", "false")

        settings = ModelSettings.from_env()

        assert settings.log_level == "WARNING"
        assert settings.log_format == "console"
        assert settings.report_stale_references is False


class TestErrors:
    """Тесты исключений"""

    def test_details_in_message(self):
        error = create_duplicate_error("Package", "PKG1")

        assert isinstance(error, PnpModelError)
        assert "PKG1" in error.message
        assert str(error).endswith("(object_type=Package, object_id=PKG1)")

    def test_plain_message(self):
        assert str(PnpModelError("plain")) == "plain"


class TestLogging:
    """Тесты вспомогательных функций логирования"""

    def test_truncate_long_values(self):
        event = truncate_long_values(None, "info", {"event": "x" * 2100, "n": 1})

        assert event["event"].endswith("... [TRUNCATED]")
        assert len(event["event"]) == 2000 + len("... [TRUNCATED]")
        assert event["n"] == 1

    def test_setup_logging_configures_structlog(self):
        """setup_logging настраивает structlog и длину обрезания"""
        import io

        import structlog

        from pnp_model.observability import logging as model_logging

        try:
            model_logging.setup_logging(
                model_logging.ModelLoggerConfig(
                    level="debug",
                    format="text",
                    output=io.StringIO(),
                    max_string_length=10,
                )
            )

            assert structlog.is_configured()
            event = truncate_long_values(None, "info", {"event": "y" * 20})
            assert event["event"] == "y" * 10 + "... [TRUNCATED]"
        finally:
            structlog.reset_defaults()
            model_logging._max_string_length = 2000

    def test_logger_config_from_settings(self):
        settings = ModelSettings(log_level="debug", log_format="Console")

        config = ModelLoggerConfig.from_settings(settings, include_caller=True)

        assert config.level == "DEBUG"
        assert config.format == "console"
        assert config.include_caller is True

    def test_setup_logging_uses_settings(self):
        """Уровень и формат берутся из ModelSettings"""
        import logging

        import structlog

        from pnp_model.observability import logging as model_logging

        try:
            with patch.object(model_logging.logging, "basicConfig") as basic_config:
                model_logging.setup_logging(
                    settings=ModelSettings(log_level="warning", log_format="text")
                )

            assert basic_config.call_args.kwargs["level"] == logging.WARNING
            processors = structlog.get_config()["processors"]
            assert isinstance(processors[-1], structlog.processors.LogfmtRenderer)
        finally:
            structlog.reset_defaults()

    def test_setup_logging_reads_env_by_default(self, monkeypatch):
        import logging

        import structlog

        from pnp_model.observability import logging as model_logging

        monkeypatch.setenv("PNP_LOG_LEVEL", "error")
        monkeypatch.setenv("PNP_LOG_FORMAT", "json")

        try:
            with patch.object(model_logging.logging, "basicConfig") as basic_config:
                model_logging.setup_logging()

            assert basic_config.call_args.kwargs["level"] == logging.ERROR
            processors = structlog.get_config()["processors"]
            assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        finally:
            structlog.reset_defaults()

    def test_get_logger_binds_context(self):
        logger = get_logger("pnp_model.test", package_id="PKG1")

        assert logger is not None
