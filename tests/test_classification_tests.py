# tests/test_classification_tests.py
"""Unit tests for the binary classification test vector."""

import math

import numpy as np
import pytest
from sklearn.metrics import matthews_corrcoef

from neuralkit.analysis.classification_tests import (
    BINARY_CLASSIFICATION_TESTS,
    binary_classification_tests
)
from neuralkit.utils.exceptions import DimensionMismatchError


class TestBinaryClassificationTests:
    """Test cases for the fifteen binary classification metrics."""

    def test_reference_matrix(self):
        """Test TP=8, FN=2, FP=1, TN=9."""
        tests = binary_classification_tests([[8, 2], [1, 9]])

        assert tests.classification_accuracy == pytest.approx(0.85)
        assert tests.error_rate == pytest.approx(0.15)
        assert tests.sensitivity == pytest.approx(0.8)
        assert tests.specificity == pytest.approx(0.9)
        assert tests.precision == pytest.approx(8.0 / 9.0)
        assert tests.positive_likelihood == pytest.approx(8.0)
        assert tests.negative_likelihood == pytest.approx(4.5)
        assert tests.f1_score == pytest.approx(16.0 / 19.0)
        assert tests.false_positive_rate == pytest.approx(0.1)
        assert tests.false_discovery_rate == pytest.approx(1.0 / 9.0)
        assert tests.false_negative_rate == pytest.approx(0.2)
        assert tests.negative_predictive_value == pytest.approx(9.0 / 11.0)
        assert tests.matthews_correlation_coefficient == pytest.approx(70.0 / math.sqrt(9 * 10 * 10 * 11))
        assert tests.informedness == pytest.approx(0.7)
        assert tests.markedness == pytest.approx(8.0 / 9.0 + 0.9 - 1.0)

    def test_vector_order_and_length(self):
        tests = binary_classification_tests([[8, 2], [1, 9]])
        vector = tests.to_array()

        assert len(vector) == 15
        assert list(tests.to_dict()) == BINARY_CLASSIFICATION_TESTS
        assert vector[0] == tests.classification_accuracy
        assert vector[12] == tests.matthews_correlation_coefficient

    def test_matthews_matches_sklearn(self):
        targets = np.array([1] * 10 + [0] * 10)
        outputs = np.array([1] * 8 + [0] * 2 + [1] * 1 + [0] * 9)

        tests = binary_classification_tests([[8, 2], [1, 9]])

        assert tests.matthews_correlation_coefficient == pytest.approx(matthews_corrcoef(targets, outputs))

    def test_perfect_classifier_likelihoods(self):
        """Test that likelihoods are 1.0 when accuracy is exactly 1."""
        tests = binary_classification_tests([[5, 0], [0, 5]])

        assert tests.classification_accuracy == 1.0
        assert tests.positive_likelihood == 1.0
        assert tests.negative_likelihood == 1.0

    def test_empty_matrix_is_all_zero_ratios(self):
        tests = binary_classification_tests([[0, 0], [0, 0]])

        assert tests.classification_accuracy == 0.0
        assert tests.error_rate == 0.0
        assert tests.matthews_correlation_coefficient == 0.0
        assert tests.informedness == -1.0
        assert tests.markedness == -1.0

    def test_no_negatives(self):
        """Test markedness and likelihoods without negative targets."""
        tests = binary_classification_tests([[3, 1], [0, 0]])

        assert tests.specificity == 0.0
        assert tests.positive_likelihood == pytest.approx(0.75)
        assert tests.matthews_correlation_coefficient == 0.0
        assert tests.markedness == pytest.approx(1.0 - 1.0)

    def test_all_positive_outputs_negative_likelihood(self):
        """Test the zero denominator of the negative likelihood."""
        tests = binary_classification_tests([[4, 0], [2, 3]])

        assert tests.sensitivity == 1.0
        assert tests.negative_likelihood == 0.0

    def test_large_counts_are_finite(self):
        tests = binary_classification_tests([[10 ** 6, 10 ** 5], [10 ** 5, 10 ** 6]])

        assert all(math.isfinite(value) for value in tests.to_list())

    def test_shape_checked(self):
        with pytest.raises(DimensionMismatchError) as exc_info:
            binary_classification_tests(np.eye(3))

        assert exc_info.value.quantity == "confusion_shape"
