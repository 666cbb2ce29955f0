# neuralkit/analysis/errors.py
"""Error and regression analysis between targets and outputs.

This module provides:
- Per-output linear regression of targets on outputs
- Absolute, relative and percentage error data with descriptives,
  centered histograms and worst-instance lookup
- Error autocorrelation and input/error cross-correlation
- Sum, mean, root mean and normalized squared errors
- Cross-entropy and class-weighted squared errors for classifiers
- Logloss of binary classifiers

Relative errors divide absolute errors by the width of the output range.
Networks that unscale their outputs supply that range; otherwise the
observed target range of each column is used.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from joblib import Parallel, delayed

from .statistics import (
    Descriptives,
    Histogram,
    descriptives,
    histogram_centered,
    maximal_indices,
    autocorrelations,
    cross_correlations,
    linear_regression
)
from .validation import targets_outputs, as_sample_matrix, check_positive_count
from ..utils.exceptions import InvalidArgumentError, DimensionMismatchError

CROSS_ENTROPY_EPSILON = 1.0e-6
ERROR_COLUMNS = ["absolute", "relative", "percentage"]
DESCRIPTIVES_COLUMNS = ["minimum", "maximum", "mean", "standard_deviation"]


@dataclass
class LinearRegressionAnalysis:
    """Regression line of one output variable with the data behind it."""

    targets: np.ndarray
    outputs: np.ndarray
    intercept: float
    slope: float
    correlation: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'intercept': self.intercept,
            'slope': self.slope,
            'correlation': self.correlation,
            'targets': self.targets.tolist(),
            'outputs': self.outputs.tolist(),
        }


def _map_columns(function: Callable[[int], Any], columns_number: int, n_jobs: int = 1) -> List[Any]:
    if n_jobs == 1 or columns_number <= 1:
        return [function(i) for i in range(columns_number)]
    return list(Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(function)(i) for i in range(columns_number)
    ))


# Regression

def linear_regression_analysis(targets: Any, outputs: Any, n_jobs: int = 1) -> List[LinearRegressionAnalysis]:
    """Regress each target column on the matching output column.

    A perfect model gives intercept 0, slope 1 and correlation 1.
    """
    targets, outputs = targets_outputs(targets, outputs, "linear_regression_analysis")

    def analyse(i: int) -> LinearRegressionAnalysis:
        regression = linear_regression(outputs[:, i], targets[:, i])
        return LinearRegressionAnalysis(
            targets=targets[:, i].copy(),
            outputs=outputs[:, i].copy(),
            intercept=regression.intercept,
            slope=regression.slope,
            correlation=regression.correlation
        )

    return _map_columns(analyse, targets.shape[1], n_jobs)


# Error data

def _output_ranges(
    targets: np.ndarray,
    outputs_minimum: Optional[Sequence[float]],
    outputs_maximum: Optional[Sequence[float]],
    operation: str
) -> np.ndarray:
    columns_number = targets.shape[1]
    minimum = np.min(targets, axis=0) if outputs_minimum is None else np.asarray(outputs_minimum, dtype=float)
    maximum = np.max(targets, axis=0) if outputs_maximum is None else np.asarray(outputs_maximum, dtype=float)
    minimum = np.broadcast_to(minimum, (columns_number,)) if minimum.ndim == 0 else minimum
    maximum = np.broadcast_to(maximum, (columns_number,)) if maximum.ndim == 0 else maximum

    if minimum.shape != (columns_number,) or maximum.shape != (columns_number,):
        raise DimensionMismatchError(
            f"{operation}: output range must have {columns_number} entries",
            operation=operation,
            quantity="outputs_range_size",
            value=(minimum.shape, maximum.shape)
        )

    ranges = np.abs(maximum - minimum)
    zero = np.flatnonzero(ranges == 0.0)
    if len(zero):
        raise InvalidArgumentError(
            f"{operation}: output range of column {int(zero[0])} is zero",
            operation=operation,
            quantity="outputs_range",
            value=0.0,
            context={"column": int(zero[0])}
        )
    return ranges


def error_data(
    targets: Any,
    outputs: Any,
    outputs_minimum: Optional[Sequence[float]] = None,
    outputs_maximum: Optional[Sequence[float]] = None
) -> List[np.ndarray]:
    """Absolute, relative and percentage errors per output variable.

    Returns:
        One ``(instances, 3)`` array per output with columns
        absolute, relative and percentage error

    Raises:
        InvalidArgumentError: If an output range is zero
    """
    targets, outputs = targets_outputs(targets, outputs, "error_data")
    ranges = _output_ranges(targets, outputs_minimum, outputs_maximum, "error_data")

    absolute = np.abs(targets - outputs)
    relative = absolute / ranges

    return [np.column_stack([absolute[:, i], relative[:, i], relative[:, i] * 100.0])
            for i in range(targets.shape[1])]


def percentage_error_data(
    targets: Any,
    outputs: Any,
    outputs_minimum: Optional[Sequence[float]] = None,
    outputs_maximum: Optional[Sequence[float]] = None
) -> List[np.ndarray]:
    """Percentage errors per output variable."""
    return [data[:, 2] for data in error_data(targets, outputs, outputs_minimum, outputs_maximum)]


def absolute_errors_statistics(targets: Any, outputs: Any) -> List[Descriptives]:
    """Descriptives of the absolute error of every output variable."""
    targets, outputs = targets_outputs(targets, outputs, "absolute_errors_statistics")
    absolute = np.abs(targets - outputs)
    return [descriptives(absolute[:, i]) for i in range(absolute.shape[1])]


def percentage_errors_statistics(
    targets: Any,
    outputs: Any,
    outputs_minimum: Optional[Sequence[float]] = None,
    outputs_maximum: Optional[Sequence[float]] = None
) -> List[Descriptives]:
    """Descriptives of the percentage error of every output variable."""
    return [descriptives(column)
            for column in percentage_error_data(targets, outputs, outputs_minimum, outputs_maximum)]


def error_data_statistics(
    targets: Any,
    outputs: Any,
    outputs_minimum: Optional[Sequence[float]] = None,
    outputs_maximum: Optional[Sequence[float]] = None,
    n_jobs: int = 1
) -> List[List[Descriptives]]:
    """Descriptives of absolute, relative and percentage errors per output."""
    data = error_data(targets, outputs, outputs_minimum, outputs_maximum)

    def describe(i: int) -> List[Descriptives]:
        return [descriptives(data[i][:, j]) for j in range(len(ERROR_COLUMNS))]

    return _map_columns(describe, len(data), n_jobs)


def error_data_statistics_matrices(
    targets: Any,
    outputs: Any,
    outputs_minimum: Optional[Sequence[float]] = None,
    outputs_maximum: Optional[Sequence[float]] = None
) -> List[pd.DataFrame]:
    """Absolute and percentage error descriptives as one frame per output.

    Example:
        >>> error_data_statistics_matrices([[0.0], [1.0]], [[0.5], [1.0]])[0]
                    minimum  maximum  mean  standard_deviation
        absolute        0.0      0.5  0.25            0.353553
        percentage      0.0     50.0  25.00           35.355339
    """
    matrices = []
    for statistics in error_data_statistics(targets, outputs, outputs_minimum, outputs_maximum):
        matrices.append(pd.DataFrame(
            [statistics[0].to_vector(), statistics[2].to_vector()],
            index=["absolute", "percentage"],
            columns=DESCRIPTIVES_COLUMNS
        ))
    return matrices


def error_data_histograms(
    targets: Any,
    outputs: Any,
    bins_number: int = 10,
    outputs_minimum: Optional[Sequence[float]] = None,
    outputs_maximum: Optional[Sequence[float]] = None
) -> List[Histogram]:
    """Histograms of the percentage errors, centered on zero."""
    return [histogram_centered(column, 0.0, bins_number)
            for column in percentage_error_data(targets, outputs, outputs_minimum, outputs_maximum)]


def maximal_errors(targets: Any, outputs: Any, instances_number: int) -> List[np.ndarray]:
    """Row positions of the largest absolute errors per output, worst first."""
    targets, outputs = targets_outputs(targets, outputs, "maximal_errors")
    check_positive_count("maximal_errors", "instances_number", instances_number)
    absolute = np.abs(targets - outputs)
    return [maximal_indices(absolute[:, i], instances_number) for i in range(absolute.shape[1])]


def error_autocorrelation(targets: Any, outputs: Any, maximum_lags_number: int) -> List[np.ndarray]:
    """Autocorrelation of ``target - output`` for every target variable."""
    targets, outputs = targets_outputs(targets, outputs, "error_autocorrelation")
    errors = targets - outputs
    return [autocorrelations(errors[:, i], maximum_lags_number) for i in range(errors.shape[1])]


def inputs_errors_cross_correlation(
    inputs: Any,
    targets: Any,
    outputs: Any,
    lags_number: int
) -> List[np.ndarray]:
    """Cross-correlation of input column ``i`` with error column ``i``.

    Raises:
        DimensionMismatchError: If there are fewer input columns than targets
            or row counts differ
    """
    targets, outputs = targets_outputs(targets, outputs, "inputs_errors_cross_correlation")
    inputs = as_sample_matrix(inputs, "inputs_errors_cross_correlation", "inputs")

    if inputs.shape[0] != targets.shape[0]:
        raise DimensionMismatchError(
            f"inputs_errors_cross_correlation: inputs have {inputs.shape[0]} rows, "
            f"targets have {targets.shape[0]}",
            operation="inputs_errors_cross_correlation",
            quantity="rows_number",
            value=(inputs.shape[0], targets.shape[0])
        )
    if inputs.shape[1] < targets.shape[1]:
        raise DimensionMismatchError(
            f"inputs_errors_cross_correlation: {inputs.shape[1]} inputs for {targets.shape[1]} targets",
            operation="inputs_errors_cross_correlation",
            quantity="inputs_number",
            value=inputs.shape[1]
        )

    errors = targets - outputs
    return [cross_correlations(inputs[:, i], errors[:, i], lags_number) for i in range(errors.shape[1])]


# Error measures

def sum_squared_error(targets: Any, outputs: Any) -> float:
    targets, outputs = targets_outputs(targets, outputs, "sum_squared_error")
    return float(np.sum((outputs - targets) ** 2))


def mean_squared_error(targets: Any, outputs: Any) -> float:
    targets, outputs = targets_outputs(targets, outputs, "mean_squared_error")
    return sum_squared_error(targets, outputs) / targets.shape[0]


def root_mean_squared_error(targets: Any, outputs: Any) -> float:
    return float(np.sqrt(mean_squared_error(targets, outputs)))


def normalized_squared_error(targets: Any, outputs: Any) -> float:
    """Sum squared error divided by the squared spread of the targets around their mean.

    Raises:
        InvalidArgumentError: If every target row equals the target mean
    """
    targets, outputs = targets_outputs(targets, outputs, "normalized_squared_error")
    normalization_coefficient = float(np.sum((targets - targets.mean(axis=0)) ** 2))

    if normalization_coefficient == 0.0:
        raise InvalidArgumentError(
            "normalized_squared_error: targets have no spread around their mean",
            operation="normalized_squared_error",
            quantity="normalization_coefficient",
            value=0.0
        )

    return sum_squared_error(targets, outputs) / normalization_coefficient


def cross_entropy_error(targets: Any, outputs: Any) -> float:
    """Mean cross-entropy over instances with outputs of exactly 0 or 1 nudged inwards."""
    targets, outputs = targets_outputs(targets, outputs, "cross_entropy_error")

    outputs = np.where(outputs == 0.0, CROSS_ENTROPY_EPSILON, outputs)
    outputs = np.where(outputs == 1.0, 1.0 - CROSS_ENTROPY_EPSILON, outputs)

    cross_entropy = -np.sum(targets * np.log(outputs) + (1.0 - targets) * np.log(1.0 - outputs))
    return float(cross_entropy / targets.shape[0])


def default_class_weights(target_distribution: Any) -> Tuple[float, float]:
    """Weights ``(positives_weight, negatives_weight)`` from ``[negatives, positives]`` counts.

    Negatives weigh 1 and positives ``negatives // positives``; the
    integer division is intentional.

    Raises:
        InvalidArgumentError: If the distribution has no positives
    """
    distribution = np.asarray(target_distribution, dtype=np.int64).ravel()
    if distribution.shape != (2,):
        raise DimensionMismatchError(
            f"default_class_weights: expected [negatives, positives], got {distribution.tolist()}",
            operation="default_class_weights",
            quantity="target_distribution_size",
            value=len(distribution)
        )

    negatives_number, positives_number = int(distribution[0]), int(distribution[1])
    if positives_number == 0:
        raise InvalidArgumentError(
            "default_class_weights: target distribution has no positives",
            operation="default_class_weights",
            quantity="positives_number",
            value=0
        )

    return float(negatives_number // positives_number), 1.0


def weighted_squared_error(
    targets: Any,
    outputs: Any,
    weights: Optional[Sequence[float]] = None,
    target_distribution: Optional[Any] = None
) -> float:
    """Class-weighted squared error of a binary classifier.

    Positive rows add ``(output * positives_weight - target)**2``, negative
    rows ``(output * negatives_weight - target)**2``. The sum is divided by
    ``negatives * negatives_weight * 0.5``.

    Args:
        targets: Binary targets with exactly one column of 0/1 values
        outputs: Outputs with one column
        weights: ``(positives_weight, negatives_weight)``
        target_distribution: ``[negatives, positives]`` used for default
            weights; counted from ``targets`` when omitted

    Raises:
        InvalidArgumentError: If a target is neither 0 nor 1, or there are no negatives
    """
    targets, outputs = targets_outputs(targets, outputs, "weighted_squared_error")
    if targets.shape[1] != 1:
        raise DimensionMismatchError(
            f"weighted_squared_error: expected one output, got {targets.shape[1]}",
            operation="weighted_squared_error",
            quantity="outputs_number",
            value=targets.shape[1]
        )

    target, output = targets[:, 0], outputs[:, 0]
    positive, negative = target == 1.0, target == 0.0

    if not np.all(positive | negative):
        bad = int(np.flatnonzero(~(positive | negative))[0])
        raise InvalidArgumentError(
            "weighted_squared_error: target is neither a positive nor a negative",
            operation="weighted_squared_error",
            quantity="target",
            value=float(target[bad]),
            context={"row": bad}
        )

    if weights is not None and len(weights) == 2:
        positives_weight, negatives_weight = float(weights[0]), float(weights[1])
    else:
        if target_distribution is None:
            target_distribution = [int(np.count_nonzero(negative)), int(np.count_nonzero(positive))]
        positives_weight, negatives_weight = default_class_weights(target_distribution)

    normalization_coefficient = np.count_nonzero(negative) * negatives_weight * 0.5
    if normalization_coefficient == 0.0:
        raise InvalidArgumentError(
            "weighted_squared_error: no negative instances to normalize by",
            operation="weighted_squared_error",
            quantity="negatives_number",
            value=int(np.count_nonzero(negative))
        )

    squared = np.where(positive,
                       (output * positives_weight - target) ** 2,
                       (output * negatives_weight - target) ** 2)

    return float(np.sum(squared) / normalization_coefficient)


def error_summary(
    targets: Any,
    outputs: Any,
    problem: str = "approximation",
    weights: Optional[Sequence[float]] = None,
    target_distribution: Optional[Any] = None
) -> Dict[str, float]:
    """Error measures of one data split.

    Args:
        targets: Target matrix
        outputs: Output matrix
        problem: ``"approximation"``, ``"binary"`` or ``"multiple"``
        weights: Class weights for the binary weighted squared error
        target_distribution: Class counts for default binary weights

    Returns:
        Sum, mean, root mean and normalized squared errors; classification
        problems add cross-entropy, binary ones the weighted squared error
    """
    if problem not in ("approximation", "binary", "multiple"):
        raise InvalidArgumentError(
            f"error_summary: unknown problem type '{problem}'",
            operation="error_summary",
            quantity="problem",
            value=problem
        )

    summary = {
        'sum_squared_error': sum_squared_error(targets, outputs),
        'mean_squared_error': mean_squared_error(targets, outputs),
        'root_mean_squared_error': root_mean_squared_error(targets, outputs),
        'normalized_squared_error': normalized_squared_error(targets, outputs),
    }

    if problem in ("binary", "multiple"):
        summary['cross_entropy_error'] = cross_entropy_error(targets, outputs)
    if problem == "binary":
        summary['weighted_squared_error'] = weighted_squared_error(
            targets, outputs, weights, target_distribution
        )

    return summary


def logloss(targets: Any, outputs: Any) -> float:
    """Binary logloss of the first column, without clamping.

    An output of 0 for a positive target gives ``inf``; an output of 0 for
    a negative target gives ``nan``. These values are returned as they are.

    Example:
        >>> round(logloss([1, 0], [0.8, 0.2]), 6)
        0.223144
    """
    targets, outputs = targets_outputs(targets, outputs, "logloss", same_columns=False)
    target, output = targets[:, 0], outputs[:, 0]

    with np.errstate(divide="ignore", invalid="ignore"):
        terms = target * np.log(output) + (1.0 - target) * np.log(1.0 - output)
        return float(-np.sum(terms) / len(target))
