# neuralkit/__init__.py
"""neuralkit - Testing analysis for trained neural networks.

Measures how well a trained network generalizes on the testing split of
a data set:
- 📈 Linear regression and error statistics for approximation models
- 🎯 Confusion matrices, classification rates and the fifteen binary
  classification tests
- 🔍 ROC curve, area under curve and optimal decision threshold
- 📊 Cumulative gain, lift, Kolmogorov-Smirnov and calibration analysis
- 🔧 Validated configuration with YAML/JSON persistence

Quick Start:
    >>> import neuralkit as nk
    >>> data_set = nk.DataSet.from_arrays(inputs, targets)
    >>> network = nk.CallableNetwork(model_function, inputs_number=3, outputs_number=1)
    >>>
    >>> analysis = nk.TestingAnalysis(network, data_set)
    >>> print(analysis.calculate_confusion())
    >>> print(analysis.perform_roc_analysis().area_under_curve)

One-line report:
    >>> summary = nk.perform_testing_analysis(network, data_set, output_dir="testing_report")
"""

__version__ = "1.0.0"
__author__ = "neuralkit Development Team"
__license__ = "MIT"
__description__ = "Testing analysis of trained neural networks"

from .utils.logger import configure_logging, get_logger

configure_logging(
    level="INFO",
    format_style="detailed",
    include_console=True
)

logger = get_logger(__name__)
logger.debug(f"neuralkit v{__version__} initialized")

# Engine and analyzers
from .analysis.testing_analysis import TestingAnalysis, perform_testing_analysis
from .analysis.roc import RocAnalysisResults, roc_analysis, area_under_curve
from .analysis.gain import KolmogorovSmirnovResults, kolmogorov_smirnov
from .analysis.confusion import confusion_binary, confusion_multiclass
from .analysis.classification_tests import BinaryClassificationTests, binary_classification_tests
from .analysis.errors import error_summary, linear_regression_analysis, logloss

# Collaborators
from .models.protocols import NeuralNetworkProtocol, DataSetProtocol
from .models.adapters import CallableNetwork, EstimatorNetwork
from .data.data_set import DataSet

# Configuration system
from .config.analysis_config import TestingAnalysisConfig, create_analysis_config
from .config.loader import load_config, save_config

# Utilities
from .utils.logger import set_log_level
from .utils.timer import timer, timed_operation, get_performance_summary
from .utils.exceptions import (
    NeuralKitError,
    AnalysisError,
    InvalidArgumentError,
    PreconditionFailedError,
    DimensionMismatchError,
    InvalidStateError,
    ConfigurationError,
    DataValidationError,
    ModelEvaluationError
)

__all__ = [
    # Engine
    'TestingAnalysis',
    'perform_testing_analysis',

    # Analyzers
    'RocAnalysisResults',
    'roc_analysis',
    'area_under_curve',
    'KolmogorovSmirnovResults',
    'kolmogorov_smirnov',
    'confusion_binary',
    'confusion_multiclass',
    'BinaryClassificationTests',
    'binary_classification_tests',
    'error_summary',
    'linear_regression_analysis',
    'logloss',

    # Collaborators
    'NeuralNetworkProtocol',
    'DataSetProtocol',
    'CallableNetwork',
    'EstimatorNetwork',
    'DataSet',

    # Configuration
    'TestingAnalysisConfig',
    'create_analysis_config',
    'load_config',
    'save_config',

    # Utilities
    'get_logger',
    'configure_logging',
    'set_log_level',
    'timer',
    'timed_operation',
    'get_performance_summary',

    # Exceptions
    'NeuralKitError',
    'AnalysisError',
    'InvalidArgumentError',
    'PreconditionFailedError',
    'DimensionMismatchError',
    'InvalidStateError',
    'ConfigurationError',
    'DataValidationError',
    'ModelEvaluationError',

    # Metadata
    '__version__',
]
