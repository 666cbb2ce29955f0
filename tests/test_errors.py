# tests/test_errors.py
"""Unit tests for error analysis, error measures and logloss."""

import math

import numpy as np
import pytest

from neuralkit.analysis.errors import (
    linear_regression_analysis,
    error_data,
    percentage_error_data,
    absolute_errors_statistics,
    percentage_errors_statistics,
    error_data_statistics,
    error_data_statistics_matrices,
    error_data_histograms,
    maximal_errors,
    error_autocorrelation,
    inputs_errors_cross_correlation,
    sum_squared_error,
    mean_squared_error,
    root_mean_squared_error,
    normalized_squared_error,
    cross_entropy_error,
    default_class_weights,
    weighted_squared_error,
    error_summary,
    logloss
)
from neuralkit.utils.exceptions import DimensionMismatchError, InvalidArgumentError


class TestLinearRegressionAnalysis:
    """Test cases for the per-output regression of targets on outputs."""

    def test_targets_regressed_on_outputs(self):
        outputs = np.array([0.0, 1.0, 2.0, 3.0])
        targets = 2.0 * outputs + 1.0

        [analysis] = linear_regression_analysis(targets, outputs)

        assert analysis.slope == pytest.approx(2.0)
        assert analysis.intercept == pytest.approx(1.0)
        assert analysis.correlation == pytest.approx(1.0)
        np.testing.assert_array_equal(analysis.outputs, outputs)

    def test_one_result_per_output(self):
        outputs = np.column_stack([np.arange(5.0), np.arange(5.0) ** 2])
        targets = outputs + 0.1

        results = linear_regression_analysis(targets, outputs, n_jobs=2)

        assert len(results) == 2
        assert all(result.slope == pytest.approx(1.0) for result in results)


class TestErrorData:
    """Test cases for absolute, relative and percentage errors."""

    def test_columns(self):
        targets = [[0.0], [1.0], [2.0]]
        outputs = [[0.5], [1.0], [1.0]]

        [data] = error_data(targets, outputs)

        np.testing.assert_allclose(data[:, 0], [0.5, 0.0, 1.0])
        np.testing.assert_allclose(data[:, 1], [0.25, 0.0, 0.5])
        np.testing.assert_allclose(data[:, 2], [25.0, 0.0, 50.0])

    def test_explicit_output_range(self):
        [data] = error_data([[0.0], [1.0]], [[1.0], [1.0]], outputs_minimum=[0.0], outputs_maximum=[10.0])

        np.testing.assert_allclose(data[:, 1], [0.1, 0.0])

    def test_zero_range_rejected(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            error_data([[1.0], [1.0]], [[0.5], [1.5]])

        assert exc_info.value.operation == "error_data"
        assert exc_info.value.quantity == "outputs_range"

    def test_percentage_data(self):
        [percentages] = percentage_error_data([[0.0], [4.0]], [[1.0], [4.0]])
        np.testing.assert_allclose(percentages, [25.0, 0.0])

    def test_statistics(self):
        targets = [[0.0], [1.0]]
        outputs = [[0.5], [1.0]]

        [absolute] = absolute_errors_statistics(targets, outputs)
        [percentage] = percentage_errors_statistics(targets, outputs)
        [triple] = error_data_statistics(targets, outputs)

        assert absolute.maximum == 0.5
        assert absolute.mean == 0.25
        assert percentage.maximum == pytest.approx(50.0)
        assert len(triple) == 3
        assert triple[1].maximum == pytest.approx(0.5)

    def test_statistics_matrices(self):
        [matrix] = error_data_statistics_matrices([[0.0], [1.0]], [[0.5], [1.0]])

        assert list(matrix.index) == ["absolute", "percentage"]
        assert list(matrix.columns) == ["minimum", "maximum", "mean", "standard_deviation"]
        assert matrix.loc["percentage", "maximum"] == pytest.approx(50.0)

    def test_histograms_centered_on_zero(self):
        targets = np.linspace(0.0, 1.0, 11)
        outputs = targets + np.linspace(-0.1, 0.1, 11)

        [histogram] = error_data_histograms(targets, outputs, bins_number=4)

        assert histogram.bins_number == 4
        assert histogram.minimums[0] == pytest.approx(-histogram.maximums[-1])


class TestMaximalErrors:
    """Test cases for the worst instance lookup."""

    def test_positions_descending(self):
        targets = [0.0, 0.0, 0.0, 0.0]
        outputs = [0.1, 0.9, 0.5, 0.9]

        [positions] = maximal_errors(targets, outputs, 3)

        np.testing.assert_array_equal(positions, [1, 3, 2])

    def test_count_must_be_positive(self):
        with pytest.raises(InvalidArgumentError):
            maximal_errors([0.0], [1.0], 0)


class TestErrorCorrelations:
    """Test cases for error autocorrelation and input cross-correlation."""

    def test_autocorrelation_per_target(self):
        targets = np.zeros((20, 2))
        outputs = np.column_stack([np.sin(np.arange(20.0)), np.cos(np.arange(20.0))])

        result = error_autocorrelation(targets, outputs, 4)

        assert len(result) == 2
        assert all(len(lags) == 4 for lags in result)
        assert result[0][0] == pytest.approx(1.0)

    def test_cross_correlation_needs_inputs_for_each_target(self):
        with pytest.raises(DimensionMismatchError) as exc_info:
            inputs_errors_cross_correlation(np.zeros((10, 1)), np.zeros((10, 2)), np.ones((10, 2)), 2)

        assert exc_info.value.quantity == "inputs_number"

    def test_cross_correlation_of_error_driving_input(self):
        inputs = np.linspace(-1.0, 1.0, 20)
        targets = np.zeros(20)
        outputs = -inputs

        [result] = inputs_errors_cross_correlation(inputs, targets, outputs, 3)

        assert result[0] == pytest.approx(1.0)


class TestErrorMeasures:
    """Test cases for the squared error family."""

    def test_squared_errors(self):
        targets = [1.0, 2.0, 3.0]
        outputs = [1.0, 2.0, 5.0]

        assert sum_squared_error(targets, outputs) == 4.0
        assert mean_squared_error(targets, outputs) == pytest.approx(4.0 / 3.0)
        assert root_mean_squared_error(targets, outputs) == pytest.approx(math.sqrt(4.0 / 3.0))
        assert normalized_squared_error(targets, outputs) == pytest.approx(2.0)

    def test_normalized_error_needs_target_spread(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            normalized_squared_error([1.0, 1.0], [0.0, 2.0])

        assert exc_info.value.quantity == "normalization_coefficient"

    def test_cross_entropy_nudges_saturated_outputs(self):
        result = cross_entropy_error([1.0, 0.0], [1.0, 0.0])

        assert math.isfinite(result)
        assert result == pytest.approx(-math.log(1.0 - 1.0e-6))

    def test_cross_entropy_value(self):
        result = cross_entropy_error([1.0, 0.0], [0.8, 0.2])
        assert result == pytest.approx(-math.log(0.8))


class TestWeightedSquaredError:
    """Test cases for the class-weighted squared error."""

    def test_default_weights_integer_division(self):
        assert default_class_weights([5, 2]) == (2.0, 1.0)

    def test_default_weights_need_positives(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            default_class_weights([4, 0])

        assert exc_info.value.quantity == "positives_number"

    def test_weights_from_targets(self):
        targets = [1.0, 0.0, 0.0, 0.0, 0.0]
        outputs = [0.5, 0.0, 0.0, 0.0, 0.5]

        # positives weight 4: (0.5 * 4 - 1)^2 + 0.5^2 over 4 * 0.5
        assert weighted_squared_error(targets, outputs) == pytest.approx(0.625)

    def test_explicit_weights(self):
        assert weighted_squared_error([1.0, 0.0], [0.5, 0.5], weights=(1.0, 1.0)) == pytest.approx(1.0)

    def test_target_distribution_overrides_counts(self):
        targets = [1.0, 0.0]
        outputs = [1.0, 0.0]

        # weights (3, 1): (1 * 3 - 1)^2 / (1 * 1 * 0.5)
        assert weighted_squared_error(targets, outputs, target_distribution=[3, 1]) == pytest.approx(8.0)

    def test_non_binary_target_rejected(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            weighted_squared_error([1.0, 0.5, 0.0], [0.5, 0.5, 0.5])

        assert exc_info.value.quantity == "target"

    def test_single_output_only(self):
        with pytest.raises(DimensionMismatchError):
            weighted_squared_error(np.eye(2), np.eye(2))


class TestErrorSummary:
    """Test cases for the per-problem error summaries."""

    def test_approximation_keys(self):
        summary = error_summary([1.0, 2.0, 3.0], [1.5, 2.0, 2.5])

        assert list(summary) == [
            "sum_squared_error", "mean_squared_error", "root_mean_squared_error", "normalized_squared_error"
        ]

    def test_binary_keys(self):
        summary = error_summary([1.0, 0.0, 0.0], [0.9, 0.2, 0.1], problem="binary")

        assert "cross_entropy_error" in summary
        assert "weighted_squared_error" in summary

    def test_multiple_keys(self):
        summary = error_summary(np.eye(3), np.full((3, 3), 1.0 / 3.0), problem="multiple")

        assert "cross_entropy_error" in summary
        assert "weighted_squared_error" not in summary

    def test_unknown_problem(self):
        with pytest.raises(InvalidArgumentError):
            error_summary([1.0, 2.0], [1.0, 2.0], problem="ranking")


class TestLogloss:
    """Test cases for the binary logloss."""

    def test_value(self):
        assert logloss([1, 0], [0.8, 0.2]) == pytest.approx(-math.log(0.8))

    def test_certain_miss_is_infinite(self):
        assert logloss([1, 0], [0.0, 0.2]) == math.inf

    def test_zero_output_on_negative_is_nan(self):
        assert math.isnan(logloss([0, 1], [0.0, 0.8]))
