# neuralkit/analysis/gain.py
"""Cumulative gain, lift chart and Kolmogorov-Smirnov analysis.

Instances are ranked by descending output. The gain curves have 21
points at 0%, 5%, ..., 100% of the ranked population; point 0 is
``(0, 0)`` for gains and ``(0, 1)`` for lift.
"""

from dataclasses import dataclass
from typing import Any, Dict

import numpy as np
import pandas as pd

from .confusion import positives_negatives_rate
from .validation import targets_outputs
from ..utils.exceptions import InvalidArgumentError, DimensionMismatchError

GAIN_POINTS = 21
GAIN_STEPS = GAIN_POINTS - 1


@dataclass
class KolmogorovSmirnovResults:
    """Positive and negative gain curves and their maximum separation.

    ``maximum_gain`` is ``(population fraction, gain difference)``.
    """

    positive_cumulative_gain: np.ndarray
    negative_cumulative_gain: np.ndarray
    maximum_gain: np.ndarray

    @property
    def statistic(self) -> float:
        return float(self.maximum_gain[1])

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({
            'population_fraction': self.positive_cumulative_gain[:, 0],
            'positive_gain': self.positive_cumulative_gain[:, 1],
            'negative_gain': self.negative_cumulative_gain[:, 1],
        })

    def to_dict(self) -> Dict[str, Any]:
        return {
            'positive_cumulative_gain': self.positive_cumulative_gain.tolist(),
            'negative_cumulative_gain': self.negative_cumulative_gain.tolist(),
            'maximum_gain': self.maximum_gain.tolist(),
        }


def _gain(targets: Any, outputs: Any, positive: bool, operation: str) -> np.ndarray:
    targets, outputs = targets_outputs(targets, outputs, operation, same_columns=False)
    total_positives, total_negatives = positives_negatives_rate(targets, outputs)

    total = total_positives if positive else total_negatives
    if total == 0:
        quantity = "total_positives" if positive else "total_negatives"
        raise InvalidArgumentError(
            f"{operation}: number of {'positive' if positive else 'negative'} instances is zero",
            operation=operation,
            quantity=quantity,
            value=0
        )

    instances_number = targets.shape[0]
    order = np.argsort(-outputs[:, 0], kind="stable")
    captured = targets[order, 0] == (1.0 if positive else 0.0)
    captured_before = np.concatenate([[0], np.cumsum(captured)])

    steps = np.arange(1, GAIN_POINTS)
    # floor(0.05 * k * n) in exact integer arithmetic
    cutoffs = (steps * instances_number) // GAIN_STEPS

    curve = np.zeros((GAIN_POINTS, 2))
    curve[1:, 0] = 0.05 * steps
    curve[1:, 1] = captured_before[cutoffs] / total
    return curve


def cumulative_gain(targets: Any, outputs: Any) -> np.ndarray:
    """Share of positives captured in the top 0%, 5%, ..., 100% of scores.

    Raises:
        InvalidArgumentError: If there are no positive instances
    """
    return _gain(targets, outputs, True, "cumulative_gain")


def negative_cumulative_gain(targets: Any, outputs: Any) -> np.ndarray:
    """Share of negatives captured in the top 0%, 5%, ..., 100% of scores.

    Raises:
        InvalidArgumentError: If there are no negative instances
    """
    return _gain(targets, outputs, False, "negative_cumulative_gain")


def _check_gain_curve(curve: Any, operation: str, quantity: str) -> np.ndarray:
    curve = np.asarray(curve, dtype=float)
    if curve.ndim != 2 or curve.shape[1] != 2 or curve.shape[0] < 1:
        raise DimensionMismatchError(
            f"{operation}: {quantity} must have shape (points, 2), got {curve.shape}",
            operation=operation,
            quantity=f"{quantity}_shape",
            value=curve.shape
        )
    return curve


def lift_chart(gain: Any) -> np.ndarray:
    """Lift curve ``(fraction, gain / fraction)`` with point 0 at ``(0, 1)``.

    Example:
        >>> lift_chart([[0.0, 0.0], [0.5, 1.0], [1.0, 1.0]])
        array([[0. , 1. ],
               [0.5, 2. ],
               [1. , 1. ]])
    """
    gain = _check_gain_curve(gain, "lift_chart", "cumulative_gain")

    lift = np.empty_like(gain)
    lift[0] = (0.0, 1.0)
    lift[1:, 0] = gain[1:, 0]
    lift[1:, 1] = gain[1:, 1] / gain[1:, 0]
    return lift


def maximum_gain(positive_gain: Any, negative_gain: Any) -> np.ndarray:
    """Largest positive gap between positive and negative gain curves.

    Returns:
        ``[fraction, gap]``, or ``[0, 0]`` if no point has a positive gap
    """
    positive_gain = _check_gain_curve(positive_gain, "maximum_gain", "positive_cumulative_gain")
    negative_gain = _check_gain_curve(negative_gain, "maximum_gain", "negative_cumulative_gain")
    if positive_gain.shape != negative_gain.shape:
        raise DimensionMismatchError(
            f"maximum_gain: gain curves have shapes {positive_gain.shape} and {negative_gain.shape}",
            operation="maximum_gain",
            quantity="points_number",
            value=(positive_gain.shape[0], negative_gain.shape[0])
        )

    best = np.zeros(2)
    for i in range(1, positive_gain.shape[0]):
        difference = positive_gain[i, 1] - negative_gain[i, 1]
        if difference > best[1] and difference > 0.0:
            best[0] = positive_gain[i, 0]
            best[1] = difference

    return best


def kolmogorov_smirnov(targets: Any, outputs: Any) -> KolmogorovSmirnovResults:
    """Kolmogorov-Smirnov analysis from the positive and negative gain curves."""
    positive_gain = cumulative_gain(targets, outputs)
    negative_gain = negative_cumulative_gain(targets, outputs)

    return KolmogorovSmirnovResults(
        positive_cumulative_gain=positive_gain,
        negative_cumulative_gain=negative_gain,
        maximum_gain=maximum_gain(positive_gain, negative_gain)
    )
