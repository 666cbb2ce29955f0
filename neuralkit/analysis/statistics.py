# neuralkit/analysis/statistics.py
"""Statistics primitives used by the testing analyzers.

Descriptive statistics, plain and centered histograms, maximum indices,
lagged auto/cross correlations and simple linear regression.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict

import numpy as np
from scipy import stats

from .validation import as_vector, check_positive_count
from ..utils.exceptions import InvalidArgumentError, DimensionMismatchError


@dataclass
class Descriptives:
    """Minimum, maximum, mean and standard deviation of a vector."""

    minimum: float
    maximum: float
    mean: float
    standard_deviation: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    def to_vector(self) -> np.ndarray:
        return np.array([self.minimum, self.maximum, self.mean, self.standard_deviation])


@dataclass
class Histogram:
    """Bin layout and frequencies of a histogram."""

    centers: np.ndarray
    minimums: np.ndarray
    maximums: np.ndarray
    frequencies: np.ndarray

    @property
    def bins_number(self) -> int:
        return len(self.frequencies)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'centers': self.centers.tolist(),
            'minimums': self.minimums.tolist(),
            'maximums': self.maximums.tolist(),
            'frequencies': self.frequencies.tolist(),
        }


@dataclass
class RegressionResults:
    """Intercept, slope and Pearson correlation of a least-squares line."""

    intercept: float
    slope: float
    correlation: float


def descriptives(vector: Any) -> Descriptives:
    """Compute minimum, maximum, mean and sample standard deviation.

    The standard deviation of a single value is 0.0.

    Raises:
        InvalidArgumentError: If the vector is empty
    """
    vector = as_vector(vector, "descriptives", "vector")
    check_positive_count("descriptives", "vector_size", len(vector))

    standard_deviation = float(np.std(vector, ddof=1)) if len(vector) > 1 else 0.0

    return Descriptives(
        minimum=float(np.min(vector)),
        maximum=float(np.max(vector)),
        mean=float(np.mean(vector)),
        standard_deviation=standard_deviation
    )


def _histogram_from_edges(vector: np.ndarray, edges: np.ndarray) -> Histogram:
    frequencies, edges = np.histogram(vector, bins=edges)
    return Histogram(
        centers=(edges[:-1] + edges[1:]) / 2.0,
        minimums=edges[:-1].copy(),
        maximums=edges[1:].copy(),
        frequencies=frequencies.astype(np.int64)
    )


def histogram(vector: Any, bins_number: int = 10) -> Histogram:
    """Equal-width histogram between the minimum and maximum of a vector.

    Bins are half-open except the last one, which includes the maximum.

    Example:
        >>> histogram([0.0, 0.5, 1.0], bins_number=2).frequencies
        array([1, 2])
    """
    vector = as_vector(vector, "histogram", "vector")
    check_positive_count("histogram", "vector_size", len(vector))
    check_positive_count("histogram", "bins_number", bins_number)

    minimum, maximum = float(np.min(vector)), float(np.max(vector))
    if minimum == maximum:
        minimum, maximum = minimum - 0.5, maximum + 0.5

    return _histogram_from_edges(vector, np.linspace(minimum, maximum, bins_number + 1))


def histogram_centered(vector: Any, center: float = 0.0, bins_number: int = 10) -> Histogram:
    """Histogram with bins laid out symmetrically around ``center``.

    The bins cover ``[center - r, center + r]`` where ``r`` is the largest
    distance from ``center`` to the data. With an even bin count ``center``
    is a bin edge, with an odd count it is the middle of a bin. If all the
    data sits on ``center``, ``r`` is 1.
    """
    vector = as_vector(vector, "histogram_centered", "vector")
    check_positive_count("histogram_centered", "vector_size", len(vector))
    check_positive_count("histogram_centered", "bins_number", bins_number)

    radius = max(abs(center - float(np.min(vector))), abs(center - float(np.max(vector))))
    if radius == 0.0:
        radius = 1.0

    return _histogram_from_edges(vector, np.linspace(center - radius, center + radius, bins_number + 1))


def maximal_index(vector: Any) -> int:
    """Index of the first maximum of a vector."""
    vector = as_vector(vector, "maximal_index", "vector")
    check_positive_count("maximal_index", "vector_size", len(vector))
    return int(np.argmax(vector))


def maximal_indices(vector: Any, number: int) -> np.ndarray:
    """Indices of the ``number`` largest values, largest first.

    Ties keep their original order. ``number`` is capped at the vector size.
    """
    vector = as_vector(vector, "maximal_indices", "vector")
    check_positive_count("maximal_indices", "number", number)
    order = np.argsort(-vector, kind="stable")
    return order[:number].astype(np.int64)


def linear_correlation(x: Any, y: Any) -> float:
    """Pearson correlation of two vectors; 0.0 if either is constant."""
    x = as_vector(x, "linear_correlation", "x")
    y = as_vector(y, "linear_correlation", "y")
    if len(x) != len(y):
        raise DimensionMismatchError(
            f"linear_correlation: vectors have sizes {len(x)} and {len(y)}",
            operation="linear_correlation",
            quantity="vector_size",
            value=(len(x), len(y))
        )
    if len(x) < 2:
        return 0.0

    x_centered = x - x.mean()
    y_centered = y - y.mean()
    denominator = np.sqrt(np.sum(x_centered ** 2) * np.sum(y_centered ** 2))
    if denominator == 0.0:
        return 0.0
    return float(np.sum(x_centered * y_centered) / denominator)


def _check_lags(operation: str, lags_number: int, size: int) -> None:
    check_positive_count(operation, "lags_number", lags_number)
    if lags_number > size - 1:
        raise InvalidArgumentError(
            f"{operation}: lags_number must be below the series length {size}, got {lags_number}",
            operation=operation,
            quantity="lags_number",
            value=lags_number
        )


def autocorrelations(vector: Any, lags_number: int) -> np.ndarray:
    """Correlation of a series with itself shifted by 0..lags_number-1 steps.

    Example:
        >>> autocorrelations([1.0, 2.0, 3.0, 4.0], 2)
        array([1., 1.])
    """
    x = as_vector(vector, "autocorrelations", "vector")
    _check_lags("autocorrelations", lags_number, len(x))

    n = len(x)
    return np.array([linear_correlation(x[:n - lag], x[lag:]) for lag in range(lags_number)])


def cross_correlations(x: Any, y: Any, lags_number: int) -> np.ndarray:
    """Correlation of ``x`` with ``y`` shifted by 0..lags_number-1 steps."""
    x = as_vector(x, "cross_correlations", "x")
    y = as_vector(y, "cross_correlations", "y")
    if len(x) != len(y):
        raise DimensionMismatchError(
            f"cross_correlations: series have lengths {len(x)} and {len(y)}",
            operation="cross_correlations",
            quantity="series_length",
            value=(len(x), len(y))
        )
    _check_lags("cross_correlations", lags_number, len(x))

    n = len(x)
    return np.array([linear_correlation(x[:n - lag], y[lag:]) for lag in range(lags_number)])


def linear_regression(x: Any, y: Any) -> RegressionResults:
    """Ordinary least squares fit of ``y = intercept + slope * x``.

    Raises:
        InvalidArgumentError: If there are fewer than two points or ``x`` is constant
    """
    x = as_vector(x, "linear_regression", "x")
    y = as_vector(y, "linear_regression", "y")
    if len(x) != len(y):
        raise DimensionMismatchError(
            f"linear_regression: vectors have sizes {len(x)} and {len(y)}",
            operation="linear_regression",
            quantity="vector_size",
            value=(len(x), len(y))
        )
    check_positive_count("linear_regression", "points_number", len(x), minimum=2)
    if np.ptp(x) == 0.0:
        raise InvalidArgumentError(
            "linear_regression: x values are all identical",
            operation="linear_regression",
            quantity="x_range",
            value=0.0
        )

    result = stats.linregress(x, y)
    return RegressionResults(
        intercept=float(result.intercept),
        slope=float(result.slope),
        correlation=float(result.rvalue)
    )
