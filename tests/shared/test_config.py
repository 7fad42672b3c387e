# tests/shared/test_config.py
import structlog

from colorizer.core.domain.models import DEFAULT_COLOR_RULE_NAME, ODD_ROW_BACKGROUND, Color
from colorizer.shared.config import AppEnv, LogFormat, Settings
from colorizer.shared.logging_config import build_processors

class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        settings = Settings(_env_file=None)

        assert settings.APP_ENV == AppEnv.DEVELOPMENT
        assert settings.LOG_FORMAT == LogFormat.JSON
        assert settings.COLORS_EXTENSION == ".colors"
        assert settings.DEFAULT_COLOR_RULE_NAME == DEFAULT_COLOR_RULE_NAME
        assert settings.COLOR_ODD_ROW_BACKGROUND == ODD_ROW_BACKGROUND

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SETTINGS_DIRECTORY", str(tmp_path))
        monkeypatch.setenv("LOG_FORMAT", "console")
        monkeypatch.setenv("COLOR_ODD_ROW_BACKGROUND", '{"r": 240, "g": 240, "b": 240}')

        settings = Settings(_env_file=None)

        assert settings.SETTINGS_DIRECTORY == str(tmp_path)
        assert settings.LOG_FORMAT == LogFormat.CONSOLE
        assert settings.COLOR_ODD_ROW_BACKGROUND == Color.rgb(240, 240, 240)

class TestLoggingConfig:
    def test_json_renderer(self):
        processors = build_processors(LogFormat.JSON)
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer(self):
        processors = build_processors(LogFormat.CONSOLE)
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_configure_logging(self):
        from colorizer.shared.logging_config import configure_logging

        try:
            configure_logging(LogFormat.CONSOLE, "debug")
            assert structlog.is_configured()
        finally:
            structlog.reset_defaults()

class TestObservability:
    def test_setup_observability(self):
        from opentelemetry.sdk.trace import TracerProvider
        from colorizer.shared.observability import get_tracer, setup_observability

        provider = setup_observability()

        assert isinstance(provider, TracerProvider)
        with get_tracer(__name__).start_as_current_span("colorizer.test") as span:
            span.set_attribute("colorizer.settings_name", "test")
