"""
Unit Tests for Logging Configuration.

Tests the centralized logging setup, source helper and path resolution.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from todo_app.backend.core.config_schema import LoggingSchema


@pytest.fixture(autouse=True)
def _restore_root_handlers():
    """setup_logging replaces root handlers; put pytest's back afterwards."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


class TestValidSources:
    """Tests for VALID_SOURCES constant."""

    def test_valid_sources_contains_expected_values(self):
        from todo_app.backend.core.logging import VALID_SOURCES

        assert VALID_SOURCES == {"web", "cli", "api", "events", "internal", "unknown"}

    def test_valid_sources_is_frozenset(self):
        from todo_app.backend.core.logging import VALID_SOURCES

        assert isinstance(VALID_SOURCES, frozenset)


class TestLoggingConfigLoading:
    """Tests for reading logging.yaml through the app config."""

    def test_reads_validated_section(self):
        from todo_app.backend.core.logging import _get_logging_config

        config = _get_logging_config()

        assert isinstance(config, LoggingSchema)
        assert config.format in ("json", "console")


class TestSetupLogging:
    """Tests for setup_logging function."""

    @pytest.fixture
    def mock_logging_config(self):
        """Create a logging configuration."""
        return LoggingSchema(
            level="INFO",
            format="json",
            handlers={
                "console": {"enabled": True},
                "file": {
                    "enabled": True,
                    "path": "logs/system.jsonl",
                    "max_bytes": 10485760,
                    "backup_count": 5,
                },
            },
        )

    def test_setup_logging_configures_root_logger(self, mock_logging_config):
        """Should configure the root logger with correct level."""
        from todo_app.backend.core.logging import setup_logging

        with patch("todo_app.backend.core.logging._get_logging_config", return_value=mock_logging_config):
            setup_logging(level="DEBUG", format_type="json", enable_file_logging=False)

        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_with_file_logging_disabled(self, mock_logging_config):
        """Should work without file logging."""
        from todo_app.backend.core.logging import setup_logging

        with patch("todo_app.backend.core.logging._get_logging_config", return_value=mock_logging_config):
            setup_logging(level="INFO", format_type="console", enable_file_logging=False)

        handler_types = [type(h).__name__ for h in logging.getLogger().handlers]
        assert handler_types == ["StreamHandler"]

    def test_setup_logging_with_file_logging_enabled(self, tmp_path, mock_logging_config):
        """Should create a single RotatingFileHandler for the JSONL file."""
        from todo_app.backend.core.logging import setup_logging

        log_file = tmp_path / "logs" / "system.jsonl"

        with (
            patch("todo_app.backend.core.logging._get_logging_config", return_value=mock_logging_config),
            patch("todo_app.backend.core.logging._resolve_log_path", return_value=log_file),
        ):
            setup_logging(level="INFO", format_type="json", enable_console=False)

        handler_types = [type(h).__name__ for h in logging.getLogger().handlers]
        assert handler_types == ["RotatingFileHandler"]
        assert log_file.parent.is_dir()

    def test_setup_logging_uses_config_defaults(self, mock_logging_config):
        """Should use values from logging.yaml when not overridden."""
        from todo_app.backend.core.logging import setup_logging

        with patch("todo_app.backend.core.logging._get_logging_config", return_value=mock_logging_config):
            setup_logging(enable_file_logging=False)

        assert logging.getLogger().level == logging.INFO

    def test_quiets_noisy_libraries(self, mock_logging_config):
        from todo_app.backend.core.logging import setup_logging

        with patch("todo_app.backend.core.logging._get_logging_config", return_value=mock_logging_config):
            setup_logging(level="DEBUG", enable_file_logging=False)

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("aiosqlite").level == logging.WARNING


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_structlog_logger(self):
        from todo_app.backend.core.logging import get_logger

        logger = get_logger("test.module")
        assert hasattr(logger, "bind")
        assert hasattr(logger, "info")


class TestLogWithSource:
    """Tests for log_with_source helper function."""

    def test_log_with_source_adds_source_field(self):
        """Should add source field to log call."""
        from todo_app.backend.core.logging import log_with_source

        logger = MagicMock()
        log_with_source(logger, "events", "info", "Event forwarded", event_type="todos.todo.created")

        logger.info.assert_called_once_with(
            "Event forwarded",
            source="events",
            event_type="todos.todo.created",
        )

    def test_log_with_source_level_is_case_insensitive(self):
        from todo_app.backend.core.logging import log_with_source

        logger = MagicMock()
        log_with_source(logger, "cli", "WARNING", "Careful")

        logger.warning.assert_called_once_with("Careful", source="cli")

    def test_log_with_source_raises_on_invalid_level(self):
        """Should raise AttributeError for invalid log levels (no fallback)."""
        from todo_app.backend.core.logging import get_logger, log_with_source

        with pytest.raises(AttributeError):
            log_with_source(get_logger("test"), "web", "nonexistent_level", "Test")


class TestResolveLogPath:
    """Tests for _resolve_log_path function."""

    def test_resolve_log_path_relative_to_project_root(self, tmp_path):
        from todo_app.backend.core.logging import _resolve_log_path

        with patch("todo_app.backend.core.logging.find_project_root", return_value=tmp_path):
            assert _resolve_log_path("logs/system.jsonl") == tmp_path / "logs" / "system.jsonl"
