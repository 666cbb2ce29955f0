# neuralkit/analysis/validation.py
"""Input coercion and shape checks shared by the analyzers."""

from typing import Any

import numpy as np

from ..utils.exceptions import DimensionMismatchError, InvalidArgumentError


def as_sample_matrix(values: Any, operation: str, quantity: str) -> np.ndarray:
    """Coerce array-like data to a 2-D float matrix.

    A 1-D vector becomes a single column.

    Raises:
        DimensionMismatchError: If the data has more than two dimensions
    """
    matrix = np.asarray(values, dtype=float)
    if matrix.ndim == 0:
        matrix = matrix.reshape(1, 1)
    elif matrix.ndim == 1:
        matrix = matrix.reshape(-1, 1)
    elif matrix.ndim > 2:
        raise DimensionMismatchError(
            f"{operation}: {quantity} must be a matrix, got {matrix.ndim} dimensions",
            operation=operation,
            quantity=f"{quantity}_dimensions",
            value=matrix.ndim
        )
    return matrix


def as_vector(values: Any, operation: str, quantity: str) -> np.ndarray:
    """Coerce array-like data to a 1-D float vector.

    Raises:
        DimensionMismatchError: If the data is not one-dimensional
    """
    vector = np.asarray(values, dtype=float)
    if vector.ndim == 2 and 1 in vector.shape:
        vector = vector.ravel()
    if vector.ndim != 1:
        raise DimensionMismatchError(
            f"{operation}: {quantity} must be a vector, got shape {vector.shape}",
            operation=operation,
            quantity=f"{quantity}_shape",
            value=vector.shape
        )
    return vector


def targets_outputs(targets: Any, outputs: Any, operation: str, same_columns: bool = True):
    """Coerce a (targets, outputs) pair and check that their shapes agree.

    Raises:
        DimensionMismatchError: If row counts (or column counts) differ
        InvalidArgumentError: If there are no instances
    """
    targets = as_sample_matrix(targets, operation, "targets")
    outputs = as_sample_matrix(outputs, operation, "outputs")

    if targets.shape[0] != outputs.shape[0]:
        raise DimensionMismatchError(
            f"{operation}: targets have {targets.shape[0]} rows but outputs have {outputs.shape[0]}",
            operation=operation,
            quantity="rows_number",
            value=(targets.shape[0], outputs.shape[0])
        )

    if same_columns and targets.shape[1] != outputs.shape[1]:
        raise DimensionMismatchError(
            f"{operation}: targets have {targets.shape[1]} columns but outputs have {outputs.shape[1]}",
            operation=operation,
            quantity="columns_number",
            value=(targets.shape[1], outputs.shape[1])
        )

    if targets.shape[0] == 0:
        raise InvalidArgumentError(
            f"{operation}: no instances to analyse",
            operation=operation,
            quantity="instances_number",
            value=0
        )

    return targets, outputs


def check_positive_count(operation: str, quantity: str, value: int, minimum: int = 1) -> None:
    """Raise InvalidArgumentError unless ``value >= minimum``."""
    if value < minimum:
        raise InvalidArgumentError(
            f"{operation}: {quantity} must be at least {minimum}, got {value}",
            operation=operation,
            quantity=quantity,
            value=value
        )
