# neuralkit/utils/logger.py
"""Logging utilities for neuralkit package.

All package loggers hang below the ``neuralkit`` root logger, which is
configured once with a console handler and an optional rotating log file.
Records may carry a ``context`` dict and a ``duration`` which the
formatter appends to the message.
"""

import logging
import logging.handlers
import sys
import json
import time
from pathlib import Path
from typing import Optional, Dict, Any, Union
from datetime import datetime
import threading

from .exceptions import FileOperationError

ROOT_LOGGER_NAME = "neuralkit"


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper())
    return level


class NeuralKitFormatter(logging.Formatter):
    """Formatter producing ``[time] LEVEL | logger | message`` lines.

    Context and duration attached to a record are appended as
    ``| Context: {...}`` and ``| Duration: 0.123s``.
    """

    def __init__(self, include_context: bool = True) -> None:
        """Initialize formatter.

        Args:
            include_context: Whether to append record context
        """
        self.include_context = include_context
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        line = f"[{timestamp}] {record.levelname:8s} | {record.name:24s} | {record.getMessage()}"

        if self.include_context and getattr(record, 'context', None):
            line += f" | Context: {json.dumps(record.context, default=str)}"

        if hasattr(record, 'duration'):
            line += f" | Duration: {record.duration:.3f}s"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


class PerformanceLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter with named timers and structured context.

    Example:
        >>> perf_logger = get_logger(__name__, with_performance=True)
        >>> perf_logger.start_timer("roc_analysis")
        >>> duration = perf_logger.stop_timer("roc_analysis")
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(logger, extra or {})
        self._timers: Dict[str, float] = {}

    def process(self, msg: Any, kwargs: Any) -> Any:
        # Keep per-call extra fields instead of replacing them
        extra = dict(self.extra)
        extra.update(kwargs.get('extra', {}))
        kwargs['extra'] = extra
        return msg, kwargs

    def start_timer(self, name: str) -> None:
        """Start a named timer.

        Args:
            name: Timer name for later reference
        """
        self._timers[name] = time.perf_counter()
        self.debug(f"Timer '{name}' started", extra={'context': {'timer_action': 'start', 'timer_name': name}})

    def stop_timer(self, name: str) -> float:
        """Stop a named timer and return its duration in seconds.

        Raises:
            ValueError: If timer was not started
        """
        if name not in self._timers:
            raise ValueError(f"Timer '{name}' was not started")

        duration = time.perf_counter() - self._timers.pop(name)

        self.info(f"Timer '{name}' completed", extra={
            'context': {'timer_action': 'stop', 'timer_name': name},
            'duration': duration
        })

        return duration

    def log_with_context(self, level: int, message: str, **context: Any) -> None:
        """Log message with additional context fields."""
        self.log(level, message, extra={'context': context})


class NeuralKitLogger:
    """Package-wide logger registry and configuration."""

    _loggers: Dict[str, logging.Logger] = {}
    _configured: bool = False
    _lock = threading.Lock()

    @classmethod
    def configure(
        cls,
        level: Union[str, int] = logging.INFO,
        log_file: Optional[Union[str, Path]] = None,
        max_file_size: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        format_style: str = "detailed",
        include_console: bool = True
    ) -> None:
        """Configure package-wide logging settings.

        Only the first call has an effect; later calls are ignored until
        the registry is reset.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional log file path
            max_file_size: Maximum log file size before rotation
            backup_count: Number of rotated files to keep
            format_style: 'simple' or 'detailed' (detailed adds context)
            include_console: Whether to log to stdout

        Raises:
            FileOperationError: If the log file handler cannot be created
        """
        with cls._lock:
            if cls._configured:
                return

            level = _resolve_level(level)

            root_logger = logging.getLogger(ROOT_LOGGER_NAME)
            root_logger.setLevel(level)
            root_logger.handlers.clear()

            formatter = NeuralKitFormatter(include_context=format_style == "detailed")

            if include_console:
                console_handler = logging.StreamHandler(sys.stdout)
                console_handler.setLevel(level)
                console_handler.setFormatter(formatter)
                root_logger.addHandler(console_handler)

            if log_file:
                try:
                    log_path = Path(log_file)
                    log_path.parent.mkdir(parents=True, exist_ok=True)

                    file_handler = logging.handlers.RotatingFileHandler(
                        log_path,
                        maxBytes=max_file_size,
                        backupCount=backup_count,
                        encoding='utf-8'
                    )
                    file_handler.setLevel(level)
                    file_handler.setFormatter(formatter)
                    root_logger.addHandler(file_handler)

                except OSError as e:
                    raise FileOperationError(
                        f"Failed to create log file handler: {log_file}",
                        error_code="LOG_FILE_SETUP_FAILED",
                        context={'log_file': str(log_file), 'error': str(e)}
                    ) from e

            cls._configured = True

    @classmethod
    def get_logger(
        cls,
        name: str,
        with_performance: bool = False
    ) -> Union[logging.Logger, PerformanceLoggerAdapter]:
        """Get a logger below the package root logger.

        Args:
            name: Logger name (typically __name__)
            with_performance: Whether to wrap it in a PerformanceLoggerAdapter
        """
        if not cls._configured:
            cls.configure()

        if not name.startswith(ROOT_LOGGER_NAME):
            suffix = 'main' if name == '__main__' else name.split(".")[-1]
            name = f'{ROOT_LOGGER_NAME}.{suffix}'

        logger = cls._loggers.get(name)
        if logger is None:
            logger = logging.getLogger(name)
            cls._loggers[name] = logger

        if with_performance:
            return PerformanceLoggerAdapter(logger)

        return logger

    @classmethod
    def set_level(cls, level: Union[str, int]) -> None:
        """Change logging level of the root logger and its handlers."""
        level = _resolve_level(level)

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            handler.setLevel(level)

    @classmethod
    def add_context_filter(cls, **context: Any) -> None:
        """Attach fixed context fields to every package log record."""

        class ContextFilter(logging.Filter):
            def filter(self, record: logging.LogRecord) -> bool:
                record.context = {**getattr(record, 'context', {}), **context}
                return True

        logging.getLogger(ROOT_LOGGER_NAME).addFilter(ContextFilter())


# Convenience functions
def get_logger(name: str, with_performance: bool = False) -> Union[logging.Logger, PerformanceLoggerAdapter]:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__)
        with_performance: Whether to return performance-enhanced logger

    Returns:
        Logger instance, optionally with performance tracking

    Example:
        >>> from neuralkit.utils.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("ROC analysis started")
    """
    return NeuralKitLogger.get_logger(name, with_performance)


def configure_logging(
    level: Union[str, int] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    **kwargs: Any
) -> None:
    """Configure package-wide logging settings.

    Example:
        >>> from neuralkit.utils.logger import configure_logging
        >>> configure_logging(level="DEBUG", log_file="logs/neuralkit.log")
    """
    NeuralKitLogger.configure(level=level, log_file=log_file, **kwargs)


def set_log_level(level: Union[str, int]) -> None:
    """Change logging level for all package loggers."""
    NeuralKitLogger.set_level(level)
