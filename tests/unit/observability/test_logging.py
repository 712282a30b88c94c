"""Unit tests for observability logging."""

from __future__ import annotations

import json
import logging

import pytest
import structlog
from structlog.testing import capture_logs

from schema_cursors.config import InvalidSettingValueError, LoggingSettings
from schema_cursors.observability.logging import (
    Logger,
    LoggerNamespaceProcessor,
    configure_logging,
    get_logger,
)


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


class TestGetLogger:
    def test_satisfies_protocol(self) -> None:
        logger = get_logger(__name__)
        for method in ("debug", "info", "warning", "error"):
            assert callable(getattr(logger, method))

    def test_initial_values_are_bound(self) -> None:
        logger: Logger = get_logger(__name__, link="list")
        with capture_logs() as logs:
            logger.info("cursor.page_loaded", page=2)
        assert logs == [{"event": "cursor.page_loaded", "page": 2, "link": "list", "log_level": "info"}]


class TestLoggerNamespaceProcessor:
    def test_known_module_is_renamed(self) -> None:
        processor = LoggerNamespaceProcessor()
        event = processor(None, "info", {"logger": "schema_cursors.cursors.endpoint", "event": "x"})
        assert event["logger"] == "schema:endpoint:cursor"

    def test_unknown_module_is_left_alone(self) -> None:
        processor = LoggerNamespaceProcessor()
        event = processor(None, "info", {"logger": "app.views", "event": "x"})
        assert event["logger"] == "app.views"

    def test_missing_logger_name(self) -> None:
        assert LoggerNamespaceProcessor()(None, "info", {"event": "x"}) == {"event": "x"}


class TestConfigureLogging:
    def test_emits_json_lines(self, reset_structlog, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(LoggingSettings(level="debug"))
        get_logger("schema_cursors.cursors.value").info("cursor.page_selected", page=1)
        line = capsys.readouterr().err.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "cursor.page_selected"
        assert record["page"] == 1
        assert record["level"] == "info"
        assert record["logger"] == "schema:value:cursor"
        assert "timestamp" in record

    def test_level_filters(self, reset_structlog, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(LoggingSettings(level="WARNING"))
        get_logger("quiet").info("hidden")
        assert capsys.readouterr().err == ""

    def test_without_namespaces(self, reset_structlog, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(LoggingSettings(namespaced=False))
        get_logger("schema_cursors.cursors.value").warning("x")
        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["logger"] == "schema_cursors.cursors.value"

    def test_console_format(self, reset_structlog, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(LoggingSettings(format="console"))
        get_logger("schema_cursors.cursors.endpoint").warning("cursor.fetch_failed", page=3)
        line = capsys.readouterr().err.strip().splitlines()[-1]
        assert "cursor.fetch_failed" in line
        assert "page=3" in line
        with pytest.raises(json.JSONDecodeError):
            json.loads(line)


class TestLoggingSettings:
    def test_defaults(self) -> None:
        settings = LoggingSettings()
        assert (settings.level, settings.format, settings.namespaced) == ("INFO", "json", True)

    @pytest.mark.parametrize("kwargs", [{"level": "LOUD"}, {"format": "xml"}])
    def test_rejects_unknown_values(self, kwargs) -> None:
        with pytest.raises(InvalidSettingValueError):
            LoggingSettings(**kwargs)
