# neuralkit/analysis/calibration.py
"""Calibration plot and output histogram of binary classifiers."""

from typing import Any

import numpy as np

from .statistics import Histogram, histogram
from .validation import targets_outputs, as_sample_matrix, check_positive_count

CALIBRATION_BUCKETS = 10
BUCKET_WIDTH = 0.1


def calibration_plot(targets: Any, outputs: Any) -> np.ndarray:
    """Reliability curve over ten probability buckets.

    Bucket ``b`` holds outputs in ``[0.1 * (b - 1), 0.1 * b)``, with the bounds
    computed in floating point, so 0.3 falls in bucket 3. Each non-empty
    bucket contributes ``(mean output, fraction of targets equal to 1)``.
    The curve starts at ``(0, 0)``, ends at ``(1, 1)`` and skips empty
    buckets, so it has between 2 and 12 points. Outputs equal to 1 fall in
    no bucket.

    Example:
        >>> calibration_plot([1, 0], [0.52, 0.58])
        array([[0.  , 0.  ],
               [0.55, 0.5 ],
               [1.  , 1.  ]])
    """
    targets, outputs = targets_outputs(targets, outputs, "calibration_plot", same_columns=False)
    target, output = targets[:, 0], outputs[:, 0]

    points = [(0.0, 0.0)]
    for bucket in range(1, CALIBRATION_BUCKETS + 1):
        lower = BUCKET_WIDTH * (bucket - 1)
        upper = BUCKET_WIDTH * bucket
        members = (output >= lower) & (output < upper)

        count = int(np.count_nonzero(members))
        if count == 0:
            continue

        points.append((
            float(output[members].sum() / count),
            float(np.count_nonzero(target[members] == 1.0) / count)
        ))
    points.append((1.0, 1.0))

    return np.array(points)


def output_histogram(outputs: Any, bins_number: int = 10) -> Histogram:
    """Histogram of the first output column."""
    outputs = as_sample_matrix(outputs, "output_histogram", "outputs")
    check_positive_count("output_histogram", "instances_number", outputs.shape[0])
    return histogram(outputs[:, 0], bins_number)
