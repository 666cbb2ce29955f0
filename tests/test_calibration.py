# tests/test_calibration.py
"""Unit tests for the calibration plot and output histogram."""

import numpy as np
import pytest

from neuralkit.analysis.calibration import calibration_plot, output_histogram
from neuralkit.utils.exceptions import DimensionMismatchError


class TestCalibrationPlot:
    """Test cases for the calibration plot."""

    def test_single_bucket(self):
        """Test that one populated bucket yields one point between the anchors."""
        result = calibration_plot([1, 0], [0.52, 0.58])

        np.testing.assert_allclose(result, [[0.0, 0.0], [0.55, 0.5], [1.0, 1.0]])

    def test_empty_buckets_pruned(self):
        targets = [0, 0, 1, 1, 1]
        outputs = [0.05, 0.15, 0.75, 0.85, 0.95]

        result = calibration_plot(targets, outputs)

        assert result.shape == (7, 2)
        np.testing.assert_allclose(result[1:-1, 0], outputs)
        np.testing.assert_allclose(result[1:-1, 1], targets)

    def test_all_buckets_populated(self):
        outputs = np.arange(10) / 10.0 + 0.05
        targets = (outputs > 0.5).astype(float)

        result = calibration_plot(targets, outputs)

        assert result.shape == (12, 2)

    def test_output_of_one_falls_in_no_bucket(self):
        result = calibration_plot([1, 1], [1.0, 1.0])

        np.testing.assert_array_equal(result, [[0.0, 0.0], [1.0, 1.0]])

    def test_zero_output_in_first_bucket(self):
        result = calibration_plot([0, 1], [0.0, 0.0])

        np.testing.assert_allclose(result[1], [0.0, 0.5])

    def test_boundary_output_stays_in_lower_bucket(self):
        """Test that 0.3 falls below the floating point upper bound of bucket 3."""
        result = calibration_plot([1, 0, 0], [0.3, 0.25, 0.35])

        np.testing.assert_allclose(result, [[0.0, 0.0], [0.275, 0.5], [0.35, 0.0], [1.0, 1.0]])

    def test_row_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            calibration_plot([1, 0, 1], [0.2, 0.4])


class TestOutputHistogram:
    """Test cases for the output histogram."""

    def test_counts_first_column(self):
        outputs = np.column_stack([np.linspace(0.0, 1.0, 20), np.zeros(20)])

        result = output_histogram(outputs, bins_number=4)

        assert result.bins_number == 4
        assert result.frequencies.sum() == 20
        assert result.minimums[0] == 0.0
        assert result.maximums[-1] == 1.0
