"""
Tests for structured logging and error records.
"""

import io
import json
import logging

import pytest

from servicekernel.core.entities.service_entity import ServiceToken
from servicekernel.shared.exceptions.error_context import ErrorContextManager
from servicekernel.shared.exceptions.kernel_errors import (
    CircularDependencyError,
    GroupedShutdownError,
    ServiceBootError,
    ServiceShutdownError,
    token_name,
)
from servicekernel.shared.logging.log_formatter import LogFormatter
from servicekernel.shared.logging.logger_interface import LogLevel
from servicekernel.shared.logging.structured_logger import (
    ROOT_LOGGER_NAME,
    StructuredLogger,
    configure_logging,
    get_logger,
)


def read_records(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


class TestStructuredLogger:
    """Test suite for the structured logger."""

    def test_json_record(self):
        """Test that a record is one JSON object with context."""
        stream = io.StringIO()
        logger = StructuredLogger("sk-test.json", output=stream)
        logger.add_context(run="1")

        logger.info("Booting", provider="db")

        [record] = read_records(stream)
        assert record["level"] == "INFO"
        assert record["logger"] == "sk-test.json"
        assert record["message"] == "Booting"
        assert record["context"] == {"run": "1", "provider": "db"}

    def test_level_filtering(self):
        """Test that records below the level are dropped."""
        stream = io.StringIO()
        logger = StructuredLogger("sk-test.level", level=LogLevel.WARNING, output=stream)

        logger.info("hidden")
        logger.error("shown")

        assert [r["message"] for r in read_records(stream)] == ["shown"]
        assert logger.get_level() is LogLevel.WARNING

    def test_text_format(self):
        """Test the single line text format."""
        stream = io.StringIO()
        logger = StructuredLogger("sk-test.text", output=stream, fmt="text")

        logger.warning("Slow boot", provider="db")

        line = stream.getvalue().strip()
        assert "WARNING Slow boot (provider=db)" in line

    def test_exception_record(self):
        """Test that kernel errors contribute code and context."""
        stream = io.StringIO()
        logger = StructuredLogger("sk-test.exception", output=stream)

        logger.exception("Boot failed", exc_info=ServiceBootError("db", RuntimeError("down")))

        [record] = read_records(stream)
        assert record["exception"]["type"] == "ServiceBootError"
        assert record["exception"]["code"] == "BOOT_FAILED"
        assert record["exception"]["context"] == {"provider": "db"}

    def test_reconfiguring_replaces_handler(self):
        """Test that configuring a logger twice keeps a single handler."""
        first, second = io.StringIO(), io.StringIO()
        configure_logging(output=first)
        configure_logging(output=second)

        get_logger("container").info("hello")

        assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1
        assert first.getvalue() == ""
        assert read_records(second)[0]["logger"] == f"{ROOT_LOGGER_NAME}.container"

    def test_component_logger_inherits_level_and_format(self):
        """Test that component loggers follow the root configuration."""
        stream = io.StringIO()
        configure_logging(level=LogLevel.ERROR, output=stream, fmt="text")
        logger = get_logger("service_manager")

        logger.info("hidden")
        logger.error("Boot failed", provider="db")

        assert logger.fmt == "text"
        assert logger.get_level() is LogLevel.ERROR
        assert stream.getvalue().strip().endswith("ERROR Boot failed (provider=db)")

    def test_parse_level(self):
        """Test case-insensitive level parsing."""
        assert LogLevel.parse("debug") is LogLevel.DEBUG
        with pytest.raises(ValueError, match="Unknown log level"):
            LogLevel.parse("loud")


class TestLogFormatter:
    """Test suite for log formatting helpers."""

    @pytest.mark.parametrize("seconds, expected", [
        (0.0123, "12.3ms"),
        (2.5, "2.50s"),
        (90, "1.50m"),
        (7200, "2.00h"),
    ])
    def test_format_duration(self, seconds, expected):
        """Test duration formatting across units."""
        assert LogFormatter.format_duration(seconds) == expected


class TestErrorRecords:
    """Test suite for error dictionaries and error contexts."""

    def test_token_name(self):
        """Test display names for each token form."""
        class Database:
            pass

        assert token_name("db") == "db"
        assert token_name(ServiceToken("logger")) == "logger"
        assert token_name(Database).endswith("Database")

    def test_to_dict(self):
        """Test the structured record of a kernel error."""
        error = ServiceBootError("db", RuntimeError("down"))
        assert error.to_dict() == {
            "type": "ServiceBootError",
            "message": "Failed to boot service provider 'db': down",
            "code": "BOOT_FAILED",
            "context": {"provider": "db"},
            "cause": {"type": "RuntimeError", "message": "down"}
        }

    def test_context_tokens_are_json_safe(self):
        """Test that tokens in the context are rendered by name."""
        token = ServiceToken("logger")
        error = CircularDependencyError([token, "db", token])
        record = error.to_dict()
        assert record["context"]["path"] == ["logger", "db", "logger"]
        json.dumps(record)

    def test_grouped_shutdown_record(self):
        """Test that grouped failures are listed individually."""
        failures = [
            ServiceShutdownError("cache", OSError("busy")),
            ServiceShutdownError("db", RuntimeError("down"))
        ]
        record = GroupedShutdownError(failures).to_dict()

        assert record["code"] == "GROUPED_SHUTDOWN_FAILED"
        assert record["context"] == {"providers": ["cache", "db"]}
        assert [f["context"]["provider"] for f in record["failures"]] == ["cache", "db"]

    def test_error_context(self):
        """Test that an error context records code, cause and caller data."""
        error = ServiceBootError("db", RuntimeError("down"))
        context = ErrorContextManager.create_context(error, phase="boot", provider="db")

        assert context.error_type == "ServiceBootError"
        assert context.error_code == "BOOT_FAILED"
        assert context.context_data == {
            "phase": "boot",
            "provider": "db",
            "cause_type": "RuntimeError",
            "cause_message": "down"
        }
        text = ErrorContextManager.format_context(context)
        assert "Code: BOOT_FAILED" in text
