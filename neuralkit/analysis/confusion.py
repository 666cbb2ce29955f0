# neuralkit/analysis/confusion.py
"""Confusion matrices and classification rate partitioning.

Binary confusion matrices use the layout ``[[TP, FN], [FP, TN]]``: row 0
holds the positive targets, column 0 the positive outputs. Rate
partitions map every testing instance index to the cell it falls in.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import numpy as np

from .validation import targets_outputs, as_vector
from ..utils.exceptions import DimensionMismatchError, InvalidStateError


def _check_total(confusion: np.ndarray, instances_number: int, operation: str) -> None:
    total = int(confusion.sum())
    if total != instances_number:
        raise InvalidStateError(
            f"{operation}: confusion matrix holds {total} instances, expected {instances_number}",
            operation=operation,
            quantity="confusion_sum",
            value=total,
            context={"instances_number": instances_number}
        )


def confusion_binary(
    targets: Any,
    outputs: Any,
    threshold: float = 0.5,
    validate: bool = False
) -> np.ndarray:
    """Binary confusion matrix ``[[TP, FN], [FP, TN]]`` of the first column.

    Targets and outputs are compared to the threshold independently. With a
    threshold of exactly 0, every target equal to 0 is counted as a false
    positive and every target equal to 1 as a true positive, whatever the
    output. Rows with a NaN target or output fall in no cell.

    Args:
        targets: Target matrix or vector
        outputs: Output matrix or vector
        threshold: Decision threshold
        validate: Whether to check that the matrix accounts for every instance

    Raises:
        InvalidStateError: If ``validate`` is set and the total is off

    Example:
        >>> confusion_binary([1, 1, 0, 0], [0.9, 0.4, 0.3, 0.7])
        array([[1, 1],
               [1, 1]])
    """
    targets, outputs = targets_outputs(targets, outputs, "confusion_binary", same_columns=False)
    target, output = targets[:, 0], outputs[:, 0]

    true_positives = false_negatives = false_positives = true_negatives = 0

    if threshold == 0.0:
        special = (target == 0.0) | (target == 1.0)
        false_positives += int(np.count_nonzero(target == 0.0))
        true_positives += int(np.count_nonzero(target == 1.0))
        target, output = target[~special], output[~special]

    # NaN compares false both ways and is left out of every cell
    positive_target, negative_target = target >= threshold, target < threshold
    positive_output, negative_output = output >= threshold, output < threshold

    true_positives += int(np.count_nonzero(positive_target & positive_output))
    false_negatives += int(np.count_nonzero(positive_target & negative_output))
    false_positives += int(np.count_nonzero(negative_target & positive_output))
    true_negatives += int(np.count_nonzero(negative_target & negative_output))

    confusion = np.array([[true_positives, false_negatives],
                          [false_positives, true_negatives]], dtype=np.int64)

    if validate:
        _check_total(confusion, targets.shape[0], "confusion_binary")

    return confusion


def confusion_multiclass(targets: Any, outputs: Any, validate: bool = False) -> np.ndarray:
    """Multiclass confusion matrix indexed by ``[target class, output class]``.

    The class of a row is the first column attaining its maximum.

    Raises:
        DimensionMismatchError: If targets and outputs have different widths
        InvalidStateError: If ``validate`` is set and the total is off
    """
    targets, outputs = targets_outputs(targets, outputs, "confusion_multiclass")
    classes_number = targets.shape[1]

    target_classes = np.argmax(targets, axis=1)
    output_classes = np.argmax(outputs, axis=1)

    confusion = np.zeros((classes_number, classes_number), dtype=np.int64)
    np.add.at(confusion, (target_classes, output_classes), 1)

    if validate:
        _check_total(confusion, targets.shape[0], "confusion_multiclass")

    return confusion


def positives_negatives_rate(targets: Any, outputs: Any) -> Tuple[int, int]:
    """Total positive and negative targets at the 0.5 threshold."""
    confusion = confusion_binary(targets, outputs, 0.5)
    return int(confusion[0].sum()), int(confusion[1].sum())


@dataclass
class BinaryClassificationRates:
    """Testing instance indices falling in each binary confusion cell."""

    true_positives: np.ndarray
    false_positives: np.ndarray
    false_negatives: np.ndarray
    true_negatives: np.ndarray

    def counts(self) -> Dict[str, int]:
        return {
            'true_positives': len(self.true_positives),
            'false_positives': len(self.false_positives),
            'false_negatives': len(self.false_negatives),
            'true_negatives': len(self.true_negatives),
        }


def _instance_indices(testing_indices: Any, instances_number: int, operation: str) -> np.ndarray:
    indices = as_vector(testing_indices, operation, "testing_indices").astype(np.int64)
    if len(indices) != instances_number:
        raise DimensionMismatchError(
            f"{operation}: {len(indices)} testing indices for {instances_number} instances",
            operation=operation,
            quantity="testing_indices_number",
            value=len(indices)
        )
    return indices


def binary_classification_rates(
    targets: Any,
    outputs: Any,
    testing_indices: Any,
    threshold: float = 0.5
) -> BinaryClassificationRates:
    """Partition testing instances into TP, FP, FN and TN index arrays.

    Uses the four-way threshold rule of :func:`confusion_binary` without
    the zero-threshold special case. Values in the arrays are taken from
    ``testing_indices``, not row positions.
    """
    targets, outputs = targets_outputs(targets, outputs, "binary_classification_rates", same_columns=False)
    indices = _instance_indices(testing_indices, targets.shape[0], "binary_classification_rates")

    positive_target, negative_target = targets[:, 0] >= threshold, targets[:, 0] < threshold
    positive_output, negative_output = outputs[:, 0] >= threshold, outputs[:, 0] < threshold

    return BinaryClassificationRates(
        true_positives=indices[positive_target & positive_output],
        false_positives=indices[negative_target & positive_output],
        false_negatives=indices[positive_target & negative_output],
        true_negatives=indices[negative_target & negative_output]
    )


def multiple_classification_rates(
    targets: Any,
    outputs: Any,
    testing_indices: Any
) -> List[List[np.ndarray]]:
    """Testing instance indices per ``[target class][output class]`` cell.

    Cell sizes equal the entries of :func:`confusion_multiclass`.
    """
    targets, outputs = targets_outputs(targets, outputs, "multiple_classification_rates")
    indices = _instance_indices(testing_indices, targets.shape[0], "multiple_classification_rates")
    classes_number = targets.shape[1]

    target_classes = np.argmax(targets, axis=1)
    output_classes = np.argmax(outputs, axis=1)

    return [
        [indices[(target_classes == i) & (output_classes == j)] for j in range(classes_number)]
        for i in range(classes_number)
    ]
