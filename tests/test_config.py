"""
Unit tests for settings and logging setup.
"""

import structlog
from structlog.testing import capture_logs

from rulebook import Validator
from rulebook.config import Settings, get_settings
from rulebook.log import configure_logging


class TestSettings:
    """Tests for Settings"""

    def test_defaults(self):
        settings = Settings()

        assert settings.DEBUG is False
        assert settings.LOG_LEVEL == "info"
        assert settings.LOG_VIOLATIONS is False

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("RULEBOOK_LOG_VIOLATIONS", "true")
        monkeypatch.setenv("RULEBOOK_LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.LOG_VIOLATIONS is True
        assert settings.LOG_LEVEL == "debug"

    def test_dotenv_in_working_directory_is_ignored(self, tmp_path, monkeypatch):
        monkeypatch.delenv("RULEBOOK_DEBUG", raising=False)
        (tmp_path / ".env").write_text("RULEBOOK_DEBUG=true\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert Settings().DEBUG is False


class TestLogging:
    """Engine log events"""

    def test_validation_complete_event(self):
        validator = Validator(name="numbers").add_rule("value", lambda t: True, "always")

        with capture_logs() as logs:
            validator.validate(object())

        complete = [e for e in logs if e["event"] == "validation_complete"]
        assert len(complete) == 1
        assert complete[0]["validator"] == "numbers"
        assert complete[0]["is_valid"] is False
        assert complete[0]["total_errors"] == 1
        assert complete[0]["rule_count"] == 1

    def test_violation_events_when_enabled(self, monkeypatch):
        monkeypatch.setenv("RULEBOOK_LOG_VIOLATIONS", "true")
        get_settings.cache_clear()
        try:
            validator = Validator().add_rule("value", lambda t: True, "always")
            with capture_logs() as logs:
                validator.validate(object())
        finally:
            get_settings.cache_clear()

        violations = [e for e in logs if e["event"] == "violation"]
        assert [(e["property"], e["message"]) for e in violations] == [("value", "always")]

    def test_debug_mode_renders_to_console(self):
        configure_logging(Settings(DEBUG=True))
        try:
            assert structlog.is_configured()
            assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)
        finally:
            structlog.reset_defaults()

    def test_default_mode_renders_json(self):
        configure_logging(Settings(DEBUG=False))
        try:
            assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)
        finally:
            structlog.reset_defaults()

    def test_log_level_filters_lower_events(self):
        configure_logging(Settings(LOG_LEVEL="warning"))
        try:
            log = structlog.get_logger("rulebook.tests")
            with capture_logs() as logs:
                log.info("dropped")
                log.warning("kept")
        finally:
            structlog.reset_defaults()

        assert [e["event"] for e in logs] == ["kept"]

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(Settings(LOG_LEVEL="chatty"))
        try:
            log = structlog.get_logger("rulebook.tests")
            with capture_logs() as logs:
                log.debug("dropped")
                log.info("kept")
        finally:
            structlog.reset_defaults()

        assert [e["event"] for e in logs] == ["kept"]
