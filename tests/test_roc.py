# tests/test_roc.py
"""Unit tests for ROC curve, area under curve and optimal threshold."""

import math

import numpy as np
import pytest
from sklearn.metrics import roc_auc_score

from neuralkit.analysis import roc
from neuralkit.analysis.roc import (
    wilcoxon_parameter,
    sampling_scheme,
    roc_curve,
    area_under_curve,
    area_under_curve_confidence_limit,
    optimal_threshold,
    roc_analysis
)
from neuralkit.utils.exceptions import ErrorKind, InvalidArgumentError


def nested_scan_curve(targets, outputs, maximum_points=1000):
    """ROC rows counted instance by instance for every sampled threshold."""
    total_positives = np.count_nonzero(targets == 1.0)
    total_negatives = np.count_nonzero(targets == 0.0)
    step, points = sampling_scheme(len(targets), maximum_points)
    sorted_outputs = np.sort(outputs)

    rows = []
    for i in range(points):
        threshold = sorted_outputs[i * step]
        true_positives = false_positives = 0
        for target, output in zip(targets.tolist(), outputs.tolist()):
            if output < threshold:
                if target == 1.0:
                    true_positives += 1
                elif target == 0.0:
                    false_positives += 1
        rows.append((true_positives / total_positives, false_positives / total_negatives, threshold))
    rows.append((1.0, 1.0, 1.0))

    return np.array(rows)


class TestWilcoxon:
    """Test cases for the pairwise rank comparison."""

    @pytest.mark.parametrize("x, y", [(0.3, 0.1), (0.1, 0.3), (0.2, 0.2)])
    def test_symmetry(self, x, y):
        assert wilcoxon_parameter(x, y) + wilcoxon_parameter(y, x) == 1.0

    def test_tie_is_half(self):
        assert wilcoxon_parameter(0.4, 0.4) == 0.5


class TestSamplingScheme:
    """Test cases for the ROC sampling step."""

    def test_small_sets_use_every_instance(self):
        assert sampling_scheme(16) == (1, 16)

    def test_large_sets_are_subsampled(self):
        assert sampling_scheme(2500) == (2, 1250)
        assert sampling_scheme(1001) == (1, 1001)


class TestRocCurve:
    """Test cases for the ROC curve."""

    def test_shape_and_closing_point(self, binary_scores):
        targets, outputs = binary_scores
        curve = roc_curve(targets, outputs)

        assert curve.shape == (17, 3)
        np.testing.assert_array_equal(curve[-1], [1.0, 1.0, 1.0])

    def test_first_point_at_origin(self, binary_scores):
        targets, outputs = binary_scores
        curve = roc_curve(targets, outputs)

        assert curve[0, 0] == 0.0
        assert curve[0, 1] == 0.0
        assert curve[0, 2] == outputs.min()

    def test_rates_count_instances_below_threshold(self):
        targets = [0, 0, 1, 1]
        outputs = [0.1, 0.2, 0.8, 0.9]

        curve = roc_curve(targets, outputs)

        np.testing.assert_allclose(curve[:4, :2], [[0.0, 0.0], [0.0, 0.5], [0.0, 1.0], [0.5, 1.0]])
        np.testing.assert_allclose(curve[:4, 2], [0.1, 0.2, 0.8, 0.9])

    def test_subsampled_curve(self):
        rng = np.random.RandomState(0)
        targets = rng.randint(0, 2, size=2500)
        outputs = rng.rand(2500)

        curve = roc_curve(targets, outputs)

        assert curve.shape == (1251, 3)
        assert np.all((curve[:, :2] >= 0.0) & (curve[:, :2] <= 1.0))

    def test_matches_nested_scan_with_ties(self):
        """Test the sorted sweep against counting every instance per threshold."""
        rng = np.random.RandomState(3)
        targets = rng.randint(0, 2, size=2300).astype(float)
        outputs = np.round(rng.rand(2300), 2)

        np.testing.assert_array_equal(roc_curve(targets, outputs), nested_scan_curve(targets, outputs))

    def test_missing_class_rejected(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            roc_curve([1, 1, 1], [0.2, 0.5, 0.9])

        assert exc_info.value.kind is ErrorKind.INVALID_ARGUMENT
        assert exc_info.value.operation == "roc_curve"
        assert exc_info.value.quantity == "total_negatives"


class TestAreaUnderCurve:
    """Test cases for the area under curve."""

    def test_matches_sklearn(self, binary_scores):
        targets, outputs = binary_scores
        assert area_under_curve(targets, outputs) == pytest.approx(roc_auc_score(targets, outputs))

    def test_matches_sklearn_with_ties(self):
        rng = np.random.RandomState(7)
        targets = rng.randint(0, 2, size=300)
        outputs = np.round(rng.rand(300), 1)

        assert area_under_curve(targets, outputs) == pytest.approx(roc_auc_score(targets, outputs))

    def test_perfect_and_inverted(self):
        assert area_under_curve([1, 1, 0, 0], [0.9, 0.8, 0.2, 0.1]) == 1.0
        assert area_under_curve([1, 1, 0, 0], [0.1, 0.2, 0.8, 0.9]) == 0.0

    def test_invariant_to_monotonic_transform(self, binary_scores):
        targets, outputs = binary_scores
        assert area_under_curve(targets, outputs ** 3) == area_under_curve(targets, outputs)

    def test_parallel_blocks_match_serial(self, monkeypatch):
        rng = np.random.RandomState(11)
        targets = rng.randint(0, 2, size=200)
        outputs = rng.rand(200)

        serial = area_under_curve(targets, outputs)
        monkeypatch.setattr(roc, "_AUC_BLOCK_ELEMENTS", 50)

        assert area_under_curve(targets, outputs, n_jobs=2) == pytest.approx(serial)

    def test_missing_positives_rejected(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            area_under_curve([0, 0], [0.1, 0.2])

        assert exc_info.value.quantity == "total_positives"


class TestConfidenceLimit:
    """Test cases for the area under curve confidence limit."""

    def test_finite_for_perfect_classifier(self):
        limit = area_under_curve_confidence_limit([1, 1, 0, 0], [0.9, 0.8, 0.2, 0.1])

        # auc = 1: Q1 = 1, Q2 = 2, variance = (N - 1) / (P * N)
        assert limit == pytest.approx(1.64485 * math.sqrt(1.0 / 4.0))

    def test_zero_area_is_nan(self):
        assert math.isnan(area_under_curve_confidence_limit([1, 0], [0.1, 0.9]))

    def test_precomputed_area_is_used(self, binary_scores):
        targets, outputs = binary_scores
        auc = area_under_curve(targets, outputs)

        assert area_under_curve_confidence_limit(targets, outputs, auc) == \
            area_under_curve_confidence_limit(targets, outputs)


class TestOptimalThreshold:
    """Test cases for the optimal threshold."""

    def test_separating_threshold(self):
        assert optimal_threshold([0, 0, 1, 1], [0.1, 0.2, 0.8, 0.9]) == 0.8

    def test_accepts_precomputed_curve(self, binary_scores):
        targets, outputs = binary_scores
        curve = roc_curve(targets, outputs)

        assert optimal_threshold(targets, outputs, curve) == optimal_threshold(targets, outputs)

    def test_threshold_is_an_output(self, binary_scores):
        targets, outputs = binary_scores
        assert optimal_threshold(targets, outputs) in set(outputs.tolist())


class TestRocAnalysis:
    """Test cases for the combined ROC analysis."""

    def test_results(self, binary_scores):
        targets, outputs = binary_scores
        results = roc_analysis(targets, outputs)

        assert results.area_under_curve == pytest.approx(roc_auc_score(targets, outputs))
        assert results.roc_curve.shape == (17, 3)
        assert list(results.roc_frame().columns) == ["true_positive_rate", "false_positive_rate", "threshold"]
        assert set(results.to_dict()) == {"roc_curve", "area_under_curve", "confidence_limit", "optimal_threshold"}
