# neuralkit/analysis/roc.py
"""ROC curve, area under curve and optimal threshold analysis.

The ROC sweep sorts instances by output and uses sampled outputs as
thresholds. Rows of the curve are ``(true positive rate, false positive
rate, threshold)`` where both rates count the instances scored strictly
below the threshold, so the sweep runs from ``(0, 0)`` towards the fixed
closing point ``(1, 1, 1)``. Datasets with more than ``maximum_points``
instances are sub-sampled with a constant step.

The area under the curve is the Wilcoxon-Mann-Whitney statistic over all
positive/negative pairs.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np
import pandas as pd
from joblib import Parallel, delayed

from .confusion import positives_negatives_rate
from .validation import targets_outputs, check_positive_count
from ..utils.exceptions import InvalidArgumentError, DimensionMismatchError

MAXIMUM_POINTS = 1000
CONFIDENCE_Z = 1.64485
ROC_COLUMNS = ["true_positive_rate", "false_positive_rate", "threshold"]

# Pairwise comparisons evaluated per AUC block
_AUC_BLOCK_ELEMENTS = 4_000_000


@dataclass
class RocAnalysisResults:
    """ROC curve together with its area, confidence limit and best threshold."""

    roc_curve: np.ndarray
    area_under_curve: float
    confidence_limit: float
    optimal_threshold: float

    def roc_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.roc_curve, columns=ROC_COLUMNS)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'roc_curve': self.roc_curve.tolist(),
            'area_under_curve': self.area_under_curve,
            'confidence_limit': self.confidence_limit,
            'optimal_threshold': self.optimal_threshold,
        }


def wilcoxon_parameter(x: float, y: float) -> float:
    """Pairwise rank comparison: 1 if ``x > y``, 0 if ``x < y``, 0.5 on ties."""
    if x > y:
        return 1.0
    if x < y:
        return 0.0
    return 0.5


def sampling_scheme(instances_number: int, maximum_points: int = MAXIMUM_POINTS) -> Tuple[int, int]:
    """Return ``(step, points)`` used to sample the sorted outputs.

    Example:
        >>> sampling_scheme(2500)
        (2, 1250)
        >>> sampling_scheme(20)
        (1, 20)
    """
    check_positive_count("sampling_scheme", "maximum_points", maximum_points)
    if instances_number > maximum_points:
        step = instances_number // maximum_points
        return step, instances_number // step
    return 1, instances_number


def _totals(targets: np.ndarray, outputs: np.ndarray, operation: str) -> Tuple[int, int]:
    total_positives, total_negatives = positives_negatives_rate(targets, outputs)

    if total_positives == 0:
        raise InvalidArgumentError(
            f"{operation}: number of positive instances is zero",
            operation=operation,
            quantity="total_positives",
            value=0
        )
    if total_negatives == 0:
        raise InvalidArgumentError(
            f"{operation}: number of negative instances is zero",
            operation=operation,
            quantity="total_negatives",
            value=0
        )

    return total_positives, total_negatives


def roc_curve(targets: Any, outputs: Any, maximum_points: int = MAXIMUM_POINTS) -> np.ndarray:
    """Build the ROC curve of a binary classifier.

    Args:
        targets: Binary targets (first column is used)
        outputs: Scores (first column is used)
        maximum_points: Sampling cap

    Returns:
        ``(points + 1, 3)`` array of ``(tpr, fpr, threshold)`` rows

    Raises:
        InvalidArgumentError: If there are no positive or no negative instances
    """
    targets, outputs = targets_outputs(targets, outputs, "roc_curve", same_columns=False)
    total_positives, total_negatives = _totals(targets, outputs, "roc_curve")

    step, points = sampling_scheme(targets.shape[0], maximum_points)

    order = np.argsort(outputs[:, 0], kind="stable")
    sorted_outputs = outputs[order, 0]
    sorted_targets = targets[order, 0]

    positives_before = np.concatenate([[0], np.cumsum(sorted_targets == 1.0)])
    negatives_before = np.concatenate([[0], np.cumsum(sorted_targets == 0.0)])

    thresholds = sorted_outputs[np.arange(points) * step]
    # Every position below the first occurrence of a threshold scores lower
    below = np.searchsorted(sorted_outputs, thresholds, side="left")

    curve = np.empty((points + 1, 3))
    curve[:points, 0] = positives_before[below] / total_positives
    curve[:points, 1] = negatives_before[below] / total_negatives
    curve[:points, 2] = thresholds
    curve[points] = (1.0, 1.0, 1.0)

    return curve


def _wilcoxon_block(positive_outputs: np.ndarray, negative_outputs: np.ndarray) -> float:
    difference = positive_outputs[:, None] - negative_outputs[None, :]
    return float(np.count_nonzero(difference > 0.0)) + 0.5 * float(np.count_nonzero(difference == 0.0))


def area_under_curve(targets: Any, outputs: Any, n_jobs: int = 1) -> float:
    """Area under the ROC curve from pairwise Wilcoxon comparisons.

    Args:
        targets: Binary targets (first column is used)
        outputs: Scores (first column is used)
        n_jobs: Worker threads for the pairwise comparison

    Raises:
        InvalidArgumentError: If there are no positive or no negative instances

    Example:
        >>> area_under_curve([1, 1, 0, 0], [0.9, 0.4, 0.3, 0.2])
        1.0
    """
    targets, outputs = targets_outputs(targets, outputs, "area_under_curve", same_columns=False)
    total_positives, total_negatives = _totals(targets, outputs, "area_under_curve")

    positive_outputs = outputs[targets[:, 0] == 1.0, 0]
    negative_outputs = outputs[targets[:, 0] == 0.0, 0]

    block_size = max(1, _AUC_BLOCK_ELEMENTS // max(1, len(negative_outputs)))
    blocks = [positive_outputs[start:start + block_size]
              for start in range(0, len(positive_outputs), block_size)]

    if n_jobs == 1 or len(blocks) <= 1:
        total = sum(_wilcoxon_block(block, negative_outputs) for block in blocks)
    else:
        total = sum(Parallel(n_jobs=n_jobs, prefer="threads")(
            delayed(_wilcoxon_block)(block, negative_outputs) for block in blocks
        ))

    return float(total / (total_positives * total_negatives))


def area_under_curve_confidence_limit(
    targets: Any,
    outputs: Any,
    area_under_curve_value: Optional[float] = None
) -> float:
    """Confidence limit of the area under curve.

    Uses ``Q1 = auc / (2 - auc)`` and ``Q2 = 2 auc^2 / auc`` in
    ``1.64485 * sqrt((auc(1 - auc) + (P - 1)(Q1 - auc^2) + (N - 1)(Q2 - auc^2)) / (P N))``.
    ``Q2`` is evaluated as written, so an area of 0 yields NaN.

    Args:
        targets: Binary targets
        outputs: Scores
        area_under_curve_value: Precomputed area, computed when omitted
    """
    targets, outputs = targets_outputs(targets, outputs, "area_under_curve_confidence_limit",
                                       same_columns=False)
    total_positives, total_negatives = _totals(targets, outputs, "area_under_curve_confidence_limit")

    if area_under_curve_value is None:
        area_under_curve_value = area_under_curve(targets, outputs)

    auc = np.float64(area_under_curve_value)
    positives = np.float64(total_positives)
    negatives = np.float64(total_negatives)

    with np.errstate(divide="ignore", invalid="ignore"):
        q1 = auc / (2.0 - auc)
        q2 = (2.0 * auc * auc) / (1.0 * auc)
        variance = (auc * (1.0 - auc)
                    + (positives - 1.0) * (q1 - auc * auc)
                    + (negatives - 1.0) * (q2 - auc * auc)) / (positives * negatives)
        return float(CONFIDENCE_Z * np.sqrt(variance))


def optimal_threshold(
    targets: Any,
    outputs: Any,
    roc: Optional[np.ndarray] = None,
    maximum_points: int = MAXIMUM_POINTS
) -> float:
    """Threshold whose ROC point lies closest to the ideal corner.

    The distance of sampled point ``i`` is
    ``sqrt(roc[i, 0]**2 + (roc[i, 1] - 1)**2)``; the first minimum wins and
    0.5 is returned when no point beats the initial distance.

    Args:
        targets: Binary targets
        outputs: Scores
        roc: Curve from :func:`roc_curve`, computed when omitted
        maximum_points: Sampling cap, must match the one used for ``roc``
    """
    targets, outputs = targets_outputs(targets, outputs, "optimal_threshold", same_columns=False)
    if roc is None:
        roc = roc_curve(targets, outputs, maximum_points)
    roc = np.asarray(roc, dtype=float)

    step, points = sampling_scheme(targets.shape[0], maximum_points)
    if roc.ndim != 2 or roc.shape[0] < points or roc.shape[1] < 2:
        raise DimensionMismatchError(
            f"optimal_threshold: ROC curve of shape {roc.shape} does not cover {points} sampled points",
            operation="optimal_threshold",
            quantity="roc_points",
            value=roc.shape
        )

    sorted_outputs = np.sort(outputs[:, 0], kind="stable")

    distances = np.sqrt(roc[:points, 0] ** 2 + (roc[:points, 1] - 1.0) ** 2)
    distances = np.where(np.isnan(distances), np.inf, distances)

    best = int(np.argmin(distances))
    if distances[best] < 999999.0:
        return float(sorted_outputs[best * step])
    return 0.5


def roc_analysis(
    targets: Any,
    outputs: Any,
    maximum_points: int = MAXIMUM_POINTS,
    n_jobs: int = 1
) -> RocAnalysisResults:
    """Run the complete ROC analysis of a binary classifier."""
    curve = roc_curve(targets, outputs, maximum_points)
    auc = area_under_curve(targets, outputs, n_jobs=n_jobs)

    return RocAnalysisResults(
        roc_curve=curve,
        area_under_curve=auc,
        confidence_limit=area_under_curve_confidence_limit(targets, outputs, auc),
        optimal_threshold=optimal_threshold(targets, outputs, curve, maximum_points)
    )
