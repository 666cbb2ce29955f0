"""neuralkit - Utility Components.

Shared utilities used throughout the package.

Key Components:
- Logger: Structured logging with configurable formats
- Timer: Performance timing and tracking utilities
- Exceptions: Exception hierarchy with typed analysis error kinds

Example:
    >>> from neuralkit.utils import get_logger, timed_operation
    >>> logger = get_logger(__name__)
    >>> with timed_operation('roc_analysis'):
    ...     pass
"""

from .logger import (
    get_logger,
    configure_logging,
    set_log_level
)
from .timer import (
    timer,
    timed_operation,
    get_performance_stats,
    get_performance_summary,
    reset_performance_stats
)
from .exceptions import (
    NeuralKitError,
    ConfigurationError,
    DataValidationError,
    ModelEvaluationError,
    FileOperationError,
    PerformanceError,
    ErrorKind,
    AnalysisError,
    InvalidArgumentError,
    PreconditionFailedError,
    DimensionMismatchError,
    InvalidStateError,
    handle_and_reraise,
    validate_parameter,
    create_error_context
)

__all__ = [
    # Logging utilities
    'get_logger',
    'configure_logging',
    'set_log_level',

    # Timing utilities
    'timer',
    'timed_operation',
    'get_performance_stats',
    'get_performance_summary',
    'reset_performance_stats',

    # Exception handling
    'NeuralKitError',
    'ConfigurationError',
    'DataValidationError',
    'ModelEvaluationError',
    'FileOperationError',
    'PerformanceError',
    'ErrorKind',
    'AnalysisError',
    'InvalidArgumentError',
    'PreconditionFailedError',
    'DimensionMismatchError',
    'InvalidStateError',
    'handle_and_reraise',
    'validate_parameter',
    'create_error_context'
]
