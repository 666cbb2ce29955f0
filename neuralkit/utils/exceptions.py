# neuralkit/utils/exceptions.py
"""Custom exception hierarchy for neuralkit package.

This module defines the exception hierarchy used across the testing
analysis engine. Analysis failures are typed by an ``ErrorKind`` and carry
the failing operation and the offending quantity as structured fields, so
callers can branch on them instead of parsing messages.
"""

from enum import Enum
from typing import Any, Optional, Dict, List


class NeuralKitError(Exception):
    """Base exception for all neuralkit package errors.

    Provides common error code and context handling for every
    package-specific exception.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        """Initialize NeuralKitError.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation of error."""
        base_msg = self.message
        if self.error_code:
            base_msg = f"[{self.error_code}] {base_msg}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg = f"{base_msg} (Context: {context_str})"
        return base_msg


class ConfigurationError(NeuralKitError):
    """Raised when configuration is invalid or incomplete.

    This exception is raised for issues with:
    - Invalid parameter values
    - Unknown configuration keys
    - Unparseable configuration files
    """
    pass


class DataValidationError(NeuralKitError):
    """Raised when input data fails validation checks.

    This exception is raised for issues with:
    - Invalid data shapes
    - Missing input or target columns
    - Inconsistent instance splits
    """
    pass


class ModelEvaluationError(NeuralKitError):
    """Raised when a network collaborator fails to produce outputs."""
    pass


class FileOperationError(NeuralKitError):
    """Raised when file I/O operations fail.

    This exception is raised for issues with:
    - File reading/writing
    - Directory creation
    - Serialization/deserialization
    """
    pass


class PerformanceError(NeuralKitError):
    """Raised when performance constraints are violated."""
    pass


class ErrorKind(Enum):
    """Kinds of analysis failures."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    PRECONDITION_FAILED = "PRECONDITION_FAILED"
    DIMENSION_MISMATCH = "DIMENSION_MISMATCH"
    INVALID_STATE = "INVALID_STATE"


class AnalysisError(NeuralKitError):
    """Base exception for testing analysis failures.

    Every analysis error names the operation that failed and the quantity
    that violated its contract.

    Attributes:
        kind: Error kind for programmatic branching
        operation: Name of the failing operation (e.g. ``"roc_curve"``)
        quantity: Name of the offending quantity (e.g. ``"total_positives"``)
        value: Offending value, when one is available

    Example:
        >>> try:
        ...     roc_curve([0, 0], [0.1, 0.2])
        ... except AnalysisError as e:
        ...     if e.kind is ErrorKind.INVALID_ARGUMENT:
        ...         print(e.operation, e.quantity)
        roc_curve total_positives
    """

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT

    def __init__(
        self,
        message: str,
        operation: str,
        quantity: Optional[str] = None,
        value: Any = None,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        """Initialize AnalysisError.

        Args:
            message: Human-readable error message
            operation: Name of the failing operation
            quantity: Name of the offending quantity
            value: Offending value
            context: Optional additional context
        """
        full_context = {"operation": operation}
        if quantity is not None:
            full_context["quantity"] = quantity
        if value is not None:
            full_context["value"] = value
        if context:
            full_context.update(context)

        super().__init__(message, error_code=self.kind.value, context=full_context)
        self.operation = operation
        self.quantity = quantity
        self.value = value


class InvalidArgumentError(AnalysisError):
    """Raised when an analysis receives data it cannot work with.

    Examples are a sample with no positive or no negative instances for a
    rate-based curve, or an empty vector for descriptive statistics.
    """

    kind = ErrorKind.INVALID_ARGUMENT


class PreconditionFailedError(AnalysisError):
    """Raised when the engine is not ready to run an analysis.

    Examples are a missing network or data set reference, or a data split
    without instances.
    """

    kind = ErrorKind.PRECONDITION_FAILED


class DimensionMismatchError(AnalysisError, DataValidationError):
    """Raised when matrix shapes or collaborator dimensions disagree."""

    kind = ErrorKind.DIMENSION_MISMATCH


class InvalidStateError(AnalysisError):
    """Raised when an opt-in invariant check fails on a computed result."""

    kind = ErrorKind.INVALID_STATE


# Utility functions for error handling
def handle_and_reraise(
    exception: Exception,
    error_class: type,
    message: str,
    error_code: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None
) -> None:
    """Handle an exception and re-raise as a neuralkit exception.

    Converts external exceptions into the package hierarchy while
    preserving the original traceback.

    Args:
        exception: Original exception that was caught
        error_class: NeuralKitError subclass to raise
        message: Custom error message
        error_code: Optional error code
        context: Optional error context

    Raises:
        error_class: The specified neuralkit exception
    """
    if context is None:
        context = {}

    context["original_error"] = str(exception)
    context["original_error_type"] = type(exception).__name__

    raise error_class(message, error_code, context) from exception


def validate_parameter(
    param_name: str,
    param_value: Any,
    valid_values: Optional[List[Any]] = None,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
    required: bool = False
) -> None:
    """Validate a parameter value and raise ConfigurationError if invalid.

    Args:
        param_name: Name of the parameter being validated
        param_value: Value to validate
        valid_values: List of valid values (if applicable)
        min_value: Minimum allowed value (for numeric parameters)
        max_value: Maximum allowed value (for numeric parameters)
        required: Whether the parameter is required (cannot be None)

    Raises:
        ConfigurationError: If validation fails
    """
    if required and param_value is None:
        raise ConfigurationError(
            f"Parameter '{param_name}' is required but was not provided",
            error_code="PARAM_REQUIRED",
            context={"parameter": param_name}
        )

    if param_value is None:
        return

    if valid_values is not None and param_value not in valid_values:
        raise ConfigurationError(
            f"Parameter '{param_name}' must be one of {valid_values}, got {param_value}",
            error_code="PARAM_INVALID_VALUE",
            context={"parameter": param_name, "value": param_value, "valid_values": valid_values}
        )

    if min_value is not None and param_value < min_value:
        raise ConfigurationError(
            f"Parameter '{param_name}' must be >= {min_value}, got {param_value}",
            error_code="PARAM_TOO_SMALL",
            context={"parameter": param_name, "value": param_value, "min_value": min_value}
        )

    if max_value is not None and param_value > max_value:
        raise ConfigurationError(
            f"Parameter '{param_name}' must be <= {max_value}, got {param_value}",
            error_code="PARAM_TOO_LARGE",
            context={"parameter": param_name, "value": param_value, "max_value": max_value}
        )


def create_error_context(**kwargs: Any) -> Dict[str, Any]:
    """Create an error context dictionary with standardized keys.

    Args:
        **kwargs: Key-value pairs to include in context

    Returns:
        Dictionary with error context information
    """
    context = {}
    for key, value in kwargs.items():
        # Complex objects are stored as strings
        if hasattr(value, '__dict__') or hasattr(value, '__slots__'):
            context[key] = str(value)
        else:
            context[key] = value

    return context
