"""
Unit Tests for Utilities

Tests for the exception hierarchy and logging setup.
"""
import logging

from fertility.utils import ContentLookupError, FertilityEngineError, IntakeError
from fertility.utils.logging import StructuredFormatter, get_logger, setup_logging


class TestExceptions:
    """Tests for the package exception hierarchy."""

    def test_base_to_dict(self):
        error = FertilityEngineError("boom", code="X", details={"a": 1})
        assert error.to_dict() == {"error": "X", "message": "boom", "details": {"a": 1}}

    def test_intake_error(self):
        error = IntakeError("no age", field="age", details={"value": None})
        assert isinstance(error, FertilityEngineError)
        assert error.to_dict()["details"] == {"field": "age", "value": None}

    def test_content_error(self):
        error = ContentLookupError("unknown", key="FOO")
        assert error.code == "CONTENT_ERROR"
        assert error.details["key"] == "FOO"


class TestLogging:
    """Tests for logger configuration."""

    def test_formatter_without_color(self):
        record = logging.LogRecord("fertility.test", logging.WARNING, __file__, 1, "hello", None, None)
        line = StructuredFormatter(use_color=False).format(record)
        assert "WARNING" in line
        assert "[fertility.test] hello" in line
        assert "\033[" not in line

    def test_setup_is_idempotent(self, tmp_path):
        log_file = tmp_path / "fertility.log"
        setup_logging("DEBUG", str(log_file))
        setup_logging("DEBUG", str(log_file))
        package_logger = logging.getLogger("fertility")
        assert len(package_logger.handlers) == 2
        assert package_logger.level == logging.DEBUG

        get_logger("fertility.test").debug("written to file")
        for handler in package_logger.handlers:
            handler.flush()
        assert "written to file" in log_file.read_text()

        setup_logging("INFO")
        assert len(package_logger.handlers) == 1
