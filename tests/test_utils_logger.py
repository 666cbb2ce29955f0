# tests/test_utils_logger.py
"""Unit tests for the logger utility."""

import logging
import pytest
from pathlib import Path

from neuralkit.utils.exceptions import FileOperationError
from neuralkit.utils.logger import (
    get_logger,
    configure_logging,
    set_log_level,
    PerformanceLoggerAdapter,
    NeuralKitFormatter,
    NeuralKitLogger,
)


def _reset():
    logging.getLogger("neuralkit").handlers.clear()
    logging.getLogger("neuralkit").filters.clear()
    logging.getLogger("neuralkit").setLevel(logging.NOTSET)
    NeuralKitLogger._configured = False
    NeuralKitLogger._loggers = {}


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before and after each test."""
    _reset()
    yield
    _reset()


class TestLogger:
    """Test cases for the logger utility."""

    def test_get_logger(self):
        """Test that foreign module names are placed below the package logger."""
        logger = get_logger("tests.test_utils_logger")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "neuralkit.test_utils_logger"

    def test_get_logger_package_name(self):
        """Test that package module names are kept."""
        logger = get_logger("neuralkit.analysis.roc")
        assert logger.name == "neuralkit.analysis.roc"
        assert get_logger("neuralkit.analysis.roc") is logger

    def test_get_logger_main(self):
        assert get_logger("__main__").name == "neuralkit.main"

    def test_get_logger_with_performance(self):
        """Test that get_logger with with_performance=True returns a PerformanceLoggerAdapter."""
        perf_logger = get_logger(__name__, with_performance=True)
        assert isinstance(perf_logger, PerformanceLoggerAdapter)

    def test_configure_logging_level(self):
        """Test that configure_logging sets the logging level."""
        configure_logging(level="DEBUG")
        assert logging.getLogger("neuralkit").level == logging.DEBUG

    def test_configure_logging_once(self):
        """Test that only the first configuration takes effect."""
        configure_logging(level="DEBUG")
        configure_logging(level="ERROR")
        assert logging.getLogger("neuralkit").level == logging.DEBUG

    def test_configure_logging_file(self, tmp_path: Path):
        """Test that configure_logging sets up a file handler."""
        log_file = tmp_path / "logs" / "test.log"
        configure_logging(log_file=log_file)

        logger = get_logger(__name__)
        logger.warning("This is a test.")

        assert log_file.exists()
        with open(log_file, "r") as f:
            content = f.read()
            assert "This is a test." in content

    def test_configure_logging_file_failure(self, tmp_path: Path):
        """Test that an unusable log path raises FileOperationError."""
        blocked = tmp_path / "blocked"
        blocked.write_text("not a directory")

        with pytest.raises(FileOperationError) as exc_info:
            configure_logging(log_file=blocked / "test.log")

        assert exc_info.value.error_code == "LOG_FILE_SETUP_FAILED"

    def test_set_log_level(self):
        """Test that set_log_level changes the logging level."""
        configure_logging(level="INFO")
        assert logging.getLogger("neuralkit").level == logging.INFO

        set_log_level("WARNING")
        assert logging.getLogger("neuralkit").level == logging.WARNING

    def test_log_format(self, caplog):
        """Test that the log format is correct."""
        configure_logging(level="INFO")
        logger = get_logger("test_utils_logger")
        logger.info("Test message")

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelname == "INFO"
        assert record.name == "neuralkit.test_utils_logger"
        assert record.getMessage() == "Test message"

    def test_formatter_appends_context_and_duration(self):
        """Test the formatted line of a record with context and duration."""
        record = logging.LogRecord("neuralkit.analysis", logging.INFO, __file__, 1, "ROC done", None, None)
        record.context = {"auc": 0.9}
        record.duration = 0.25

        line = NeuralKitFormatter().format(record)

        assert "INFO" in line
        assert "ROC done" in line
        assert 'Context: {"auc": 0.9}' in line
        assert "Duration: 0.250s" in line
        assert "Context" not in NeuralKitFormatter(include_context=False).format(record)

    def test_performance_logger_adapter(self, caplog):
        """Test the PerformanceLoggerAdapter."""
        configure_logging(level="DEBUG")
        perf_logger = get_logger(__name__, with_performance=True)

        with caplog.at_level(logging.DEBUG):
            perf_logger.start_timer("my_timer")
            duration = perf_logger.stop_timer("my_timer")

        assert len(caplog.records) == 2
        start_record, stop_record = caplog.records
        assert "Timer 'my_timer' started" in start_record.getMessage()
        assert "Timer 'my_timer' completed" in stop_record.getMessage()
        assert stop_record.duration == duration

    def test_log_with_context(self, caplog):
        configure_logging(level="INFO")
        perf_logger = get_logger(__name__, with_performance=True)

        perf_logger.log_with_context(logging.INFO, "ROC analysis finished", auc=0.91)

        assert caplog.records[0].context == {"auc": 0.91}

    def test_stop_unknown_timer(self):
        perf_logger = get_logger(__name__, with_performance=True)

        with pytest.raises(ValueError):
            perf_logger.stop_timer("never_started")

    def test_context_filter(self, caplog):
        """Test that fixed context is attached to package records."""
        configure_logging(level="INFO")
        NeuralKitLogger.add_context_filter(run="nightly")

        get_logger("neuralkit").info("Report written")

        assert caplog.records[0].context == {"run": "nightly"}


if __name__ == "__main__":
    pytest.main([__file__])
