"""neuralkit - Testing analysis.

Pure analyzers over ``(targets, outputs)`` matrices and the
TestingAnalysis engine that feeds them from a network and a data set.
"""

from .statistics import (
    Descriptives,
    Histogram,
    RegressionResults,
    descriptives,
    histogram,
    histogram_centered,
    maximal_index,
    maximal_indices,
    linear_correlation,
    autocorrelations,
    cross_correlations,
    linear_regression
)
from .confusion import (
    BinaryClassificationRates,
    confusion_binary,
    confusion_multiclass,
    positives_negatives_rate,
    binary_classification_rates,
    multiple_classification_rates
)
from .roc import (
    RocAnalysisResults,
    wilcoxon_parameter,
    roc_curve,
    area_under_curve,
    area_under_curve_confidence_limit,
    optimal_threshold,
    roc_analysis
)
from .gain import (
    KolmogorovSmirnovResults,
    cumulative_gain,
    negative_cumulative_gain,
    lift_chart,
    maximum_gain,
    kolmogorov_smirnov
)
from .calibration import calibration_plot, output_histogram
from .errors import (
    LinearRegressionAnalysis,
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
    weighted_squared_error,
    error_summary,
    logloss
)
from .classification_tests import (
    BINARY_CLASSIFICATION_TESTS,
    BinaryClassificationTests,
    binary_classification_tests
)
from .testing_analysis import TestingAnalysis, perform_testing_analysis

__all__ = [
    # Statistics
    'Descriptives',
    'Histogram',
    'RegressionResults',
    'descriptives',
    'histogram',
    'histogram_centered',
    'maximal_index',
    'maximal_indices',
    'linear_correlation',
    'autocorrelations',
    'cross_correlations',
    'linear_regression',

    # Confusion and rates
    'BinaryClassificationRates',
    'confusion_binary',
    'confusion_multiclass',
    'positives_negatives_rate',
    'binary_classification_rates',
    'multiple_classification_rates',

    # ROC
    'RocAnalysisResults',
    'wilcoxon_parameter',
    'roc_curve',
    'area_under_curve',
    'area_under_curve_confidence_limit',
    'optimal_threshold',
    'roc_analysis',

    # Gain
    'KolmogorovSmirnovResults',
    'cumulative_gain',
    'negative_cumulative_gain',
    'lift_chart',
    'maximum_gain',
    'kolmogorov_smirnov',

    # Calibration
    'calibration_plot',
    'output_histogram',

    # Errors
    'LinearRegressionAnalysis',
    'linear_regression_analysis',
    'error_data',
    'percentage_error_data',
    'absolute_errors_statistics',
    'percentage_errors_statistics',
    'error_data_statistics',
    'error_data_statistics_matrices',
    'error_data_histograms',
    'maximal_errors',
    'error_autocorrelation',
    'inputs_errors_cross_correlation',
    'sum_squared_error',
    'mean_squared_error',
    'root_mean_squared_error',
    'normalized_squared_error',
    'cross_entropy_error',
    'weighted_squared_error',
    'error_summary',
    'logloss',

    # Classification tests
    'BINARY_CLASSIFICATION_TESTS',
    'BinaryClassificationTests',
    'binary_classification_tests',

    # Engine
    'TestingAnalysis',
    'perform_testing_analysis'
]
