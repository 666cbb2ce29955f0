# neuralkit/analysis/testing_analysis.py
"""Testing analysis engine.

This module provides the TestingAnalysis class, which pulls data splits
from a data set, evaluates a neural network on them and routes the
``(targets, outputs)`` pairs through the analyzers:

- Regression and error analysis for approximation models
- Error measures over the training, selection and testing splits
- Confusion matrices and classification rates
- ROC, cumulative gain, lift, Kolmogorov-Smirnov and calibration
  analysis of binary classifiers
- JSON and chart reports

The engine holds references to its collaborators but never owns or
mutates them; every analysis is computed fresh from their current state.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from . import calibration, classification_tests, confusion, errors, gain, plots, roc
from .classification_tests import BinaryClassificationTests
from .confusion import BinaryClassificationRates
from .errors import LinearRegressionAnalysis
from .gain import KolmogorovSmirnovResults
from .roc import RocAnalysisResults
from .statistics import Descriptives, Histogram, RegressionResults
from .validation import as_sample_matrix
from ..config.analysis_config import TestingAnalysisConfig
from ..config.loader import load_config, save_config
from ..models.protocols import (
    validate_network_protocol,
    validate_data_set_protocol,
    get_decision_threshold,
    get_outputs_range
)
from ..utils.exceptions import (
    AnalysisError,
    DimensionMismatchError,
    FileOperationError,
    ModelEvaluationError,
    PreconditionFailedError,
    handle_and_reraise,
    create_error_context
)
from ..utils.logger import get_logger
from ..utils.timer import timer, timed_operation, get_performance_summary

logger = get_logger(__name__, with_performance=True)

SPLITS = ("training", "selection", "testing")
REPORT_FILENAME = "testing_analysis.json"


class TestingAnalysis:
    """Testing analysis of a neural network against a data set.

    Example:
        >>> analysis = TestingAnalysis(network, data_set)
        >>> roc_results = analysis.perform_roc_analysis()
        >>> print(f"AUC: {roc_results.area_under_curve:.4f}")
    """

    def __init__(
        self,
        neural_network: Optional[Any] = None,
        data_set: Optional[Any] = None,
        config: Optional[TestingAnalysisConfig] = None
    ) -> None:
        """Initialize the engine.

        Args:
            neural_network: Object implementing NeuralNetworkProtocol
            data_set: Object implementing DataSetProtocol
            config: Analysis settings, defaults when omitted
        """
        self.config = config or TestingAnalysisConfig()
        self._neural_network = None
        self._data_set = None

        if neural_network is not None:
            self.set_neural_network(neural_network)
        if data_set is not None:
            self.set_data_set(data_set)

        logger.debug("Initialized TestingAnalysis")

    # Collaborators

    @property
    def neural_network(self) -> Optional[Any]:
        return self._neural_network

    @property
    def data_set(self) -> Optional[Any]:
        return self._data_set

    @property
    def display(self) -> bool:
        return self.config.display

    def set_neural_network(self, neural_network: Any) -> None:
        """Set the network to analyse.

        Raises:
            TypeError: If the object does not implement NeuralNetworkProtocol
        """
        validate_network_protocol(neural_network)
        self._neural_network = neural_network

    def set_data_set(self, data_set: Any) -> None:
        """Set the data set providing the splits.

        Raises:
            TypeError: If the object does not implement DataSetProtocol
        """
        validate_data_set_protocol(data_set)
        self._data_set = data_set

    def set_display(self, display: bool) -> None:
        self.config.display = bool(display)

    def _log(self, message: str) -> None:
        if self.config.display:
            logger.info(message)

    # Preconditions

    def check(self) -> None:
        """Check that both collaborators are set.

        Raises:
            PreconditionFailedError: If the network or data set is missing
        """
        if self._neural_network is None:
            raise PreconditionFailedError(
                "Neural network is not set",
                operation="check",
                quantity="neural_network"
            )
        if self._data_set is None:
            raise PreconditionFailedError(
                "Data set is not set",
                operation="check",
                quantity="data_set"
            )

    def validate(self) -> None:
        """Check collaborators, their dimensions and the testing split.

        Raises:
            PreconditionFailedError: If a collaborator is missing or there are
                no testing instances
            DimensionMismatchError: If network and data set disagree on the
                number of inputs or outputs
        """
        self.check()

        inputs_number = self._neural_network.get_inputs_number()
        input_variables_number = self._data_set.get_input_variables_number()
        if inputs_number != input_variables_number:
            raise DimensionMismatchError(
                f"Network has {inputs_number} inputs, data set has {input_variables_number} input variables",
                operation="validate",
                quantity="inputs_number",
                value=(inputs_number, input_variables_number)
            )

        outputs_number = self._neural_network.get_outputs_number()
        target_variables_number = self._data_set.get_target_variables_number()
        if outputs_number != target_variables_number:
            raise DimensionMismatchError(
                f"Network has {outputs_number} outputs, data set has {target_variables_number} target variables",
                operation="validate",
                quantity="outputs_number",
                value=(outputs_number, target_variables_number)
            )

        if len(self._data_set.get_testing_instances_indices()) == 0:
            raise PreconditionFailedError(
                "Data set has no testing instances",
                operation="validate",
                quantity="testing_instances_number",
                value=0
            )

    def _check_binary(self, operation: str) -> None:
        self.validate()
        outputs_number = self._neural_network.get_outputs_number()
        if outputs_number != 1:
            raise DimensionMismatchError(
                f"{operation} requires a single output, network has {outputs_number}",
                operation=operation,
                quantity="outputs_number",
                value=outputs_number
            )

    def _is_binary(self) -> bool:
        return self._neural_network.get_outputs_number() == 1

    # Data access

    def _decision_threshold(self) -> float:
        threshold = get_decision_threshold(self._neural_network)
        return self.config.decision_threshold if threshold is None else threshold

    def _outputs_range(self) -> Tuple[Optional[np.ndarray], Optional[np.ndarray]]:
        outputs_range = get_outputs_range(self._neural_network)
        if outputs_range is None:
            return None, None
        return outputs_range

    def _calculate_outputs(self, inputs: np.ndarray, split: str) -> np.ndarray:
        try:
            outputs = self._neural_network.calculate_outputs(inputs)
        except Exception as e:
            handle_and_reraise(
                e, ModelEvaluationError,
                f"Failed to calculate network outputs on the {split} split",
                error_code="OUTPUT_COMPUTATION_FAILED",
                context=create_error_context(split=split, instances_number=len(inputs))
            )

        outputs = as_sample_matrix(outputs, "calculate_outputs", "outputs")
        if outputs.shape[0] != inputs.shape[0]:
            raise DimensionMismatchError(
                f"Network returned {outputs.shape[0]} rows for {inputs.shape[0]} {split} instances",
                operation="calculate_outputs",
                quantity="rows_number",
                value=(outputs.shape[0], inputs.shape[0])
            )
        return outputs

    def _split_data(self, split: str) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return ``(inputs, targets, outputs)`` of a data split."""
        inputs = np.asarray(getattr(self._data_set, f"get_{split}_input_data")(), dtype=float)
        targets = as_sample_matrix(getattr(self._data_set, f"get_{split}_target_data")(), split, "targets")

        if targets.shape[0] == 0:
            raise PreconditionFailedError(
                f"Data set has no {split} instances",
                operation=f"{split}_data",
                quantity=f"{split}_instances_number",
                value=0
            )

        return inputs, targets, self._calculate_outputs(inputs, split)

    def _testing_targets_outputs(self) -> Tuple[np.ndarray, np.ndarray]:
        _, targets, outputs = self._split_data("testing")
        return targets, outputs

    def _testing_indices(self) -> np.ndarray:
        return np.asarray(self._data_set.get_testing_instances_indices(), dtype=np.int64)

    def infer_problem_type(self) -> str:
        """Classify the analysis as ``"binary"``, ``"multiple"`` or ``"approximation"``.

        One output with 0/1 testing targets is binary; several outputs with
        one-hot testing targets are a multiple classification.
        """
        self.validate()
        targets = as_sample_matrix(self._data_set.get_testing_target_data(), "testing", "targets")
        is_boolean = bool(np.all((targets == 0.0) | (targets == 1.0)))

        if targets.shape[1] == 1:
            return "binary" if is_boolean else "approximation"
        if is_boolean and np.all(targets.sum(axis=1) == 1.0):
            return "multiple"
        return "approximation"

    # Regression and error data

    @timer(name="testing_analysis.linear_regression", log_result=False)
    def linear_regression(self) -> List[RegressionResults]:
        """Intercept, slope and correlation of targets on outputs per output."""
        return [RegressionResults(a.intercept, a.slope, a.correlation)
                for a in self.perform_linear_regression_analysis()]

    @timer(name="testing_analysis.perform_linear_regression_analysis", log_result=False)
    def perform_linear_regression_analysis(self) -> List[LinearRegressionAnalysis]:
        self.validate()
        targets, outputs = self._testing_targets_outputs()
        self._log(f"📈 Linear regression analysis of {targets.shape[1]} outputs")
        return errors.linear_regression_analysis(targets, outputs, n_jobs=self.config.n_jobs)

    def get_linear_regression_correlations(self) -> np.ndarray:
        return np.array([analysis.correlation for analysis in self.perform_linear_regression_analysis()])

    def print_linear_regression_correlations(self) -> str:
        """Log and return the regression correlation of every target variable."""
        names = self._data_set_names()
        lines = [f"{name} correlation: {correlation:.6g}"
                 for name, correlation in zip(names, self.get_linear_regression_correlations())]
        text = "\n".join(lines)
        logger.info(text)
        return text

    def _data_set_names(self) -> List[str]:
        return list(self._data_set.get_target_variables_names())

    @timer(name="testing_analysis.calculate_error_data", log_result=False)
    def calculate_error_data(self) -> List[np.ndarray]:
        """Absolute, relative and percentage errors of the testing split per output."""
        self.validate()
        targets, outputs = self._testing_targets_outputs()
        return errors.error_data(targets, outputs, *self._outputs_range())

    def calculate_percentage_error_data(self) -> List[np.ndarray]:
        self.validate()
        targets, outputs = self._testing_targets_outputs()
        return errors.percentage_error_data(targets, outputs, *self._outputs_range())

    def calculate_absolute_errors_statistics(self) -> List[Descriptives]:
        self.validate()
        targets, outputs = self._testing_targets_outputs()
        return errors.absolute_errors_statistics(targets, outputs)

    def calculate_percentage_errors_statistics(self) -> List[Descriptives]:
        self.validate()
        targets, outputs = self._testing_targets_outputs()
        return errors.percentage_errors_statistics(targets, outputs, *self._outputs_range())

    @timer(name="testing_analysis.calculate_error_data_statistics", log_result=False)
    def calculate_error_data_statistics(self) -> List[List[Descriptives]]:
        self.validate()
        targets, outputs = self._testing_targets_outputs()
        minimum, maximum = self._outputs_range()
        return errors.error_data_statistics(targets, outputs, minimum, maximum, n_jobs=self.config.n_jobs)

    def calculate_error_data_statistics_matrices(self) -> List[pd.DataFrame]:
        self.validate()
        targets, outputs = self._testing_targets_outputs()
        return errors.error_data_statistics_matrices(targets, outputs, *self._outputs_range())

    def print_error_data_statistics(self) -> str:
        """Log and return the error statistics of every target variable."""
        sections = []
        for name, matrix in zip(self._data_set_names(), self.calculate_error_data_statistics_matrices()):
            sections.append(f"{name}\n{matrix.to_string()}")
        text = "\n\n".join(sections)
        logger.info(text)
        return text

    def calculate_error_data_histograms(self, bins_number: Optional[int] = None) -> List[Histogram]:
        """Zero-centered histograms of the percentage errors per output."""
        self.validate()
        if bins_number is None:
            bins_number = self.config.histogram_bins
        targets, outputs = self._testing_targets_outputs()
        minimum, maximum = self._outputs_range()
        return errors.error_data_histograms(targets, outputs, bins_number, minimum, maximum)

    def calculate_maximal_errors(self, instances_number: Optional[int] = None) -> List[np.ndarray]:
        """Testing instance indices with the largest absolute errors per output."""
        self.validate()
        if instances_number is None:
            instances_number = self.config.maximal_errors_number
        targets, outputs = self._testing_targets_outputs()
        positions = errors.maximal_errors(targets, outputs, instances_number)
        indices = self._testing_indices()
        return [indices[p] for p in positions]

    @timer(name="testing_analysis.calculate_error_autocorrelation", log_result=False)
    def calculate_error_autocorrelation(self, maximum_lags_number: Optional[int] = None) -> List[np.ndarray]:
        self.validate()
        if maximum_lags_number is None:
            maximum_lags_number = self.config.maximum_lags_number
        targets, outputs = self._testing_targets_outputs()
        return errors.error_autocorrelation(targets, outputs, maximum_lags_number)

    @timer(name="testing_analysis.calculate_inputs_errors_cross_correlation", log_result=False)
    def calculate_inputs_errors_cross_correlation(self, lags_number: Optional[int] = None) -> List[np.ndarray]:
        self.validate()
        if lags_number is None:
            lags_number = self.config.maximum_lags_number
        inputs, targets, outputs = self._split_data("testing")
        return errors.inputs_errors_cross_correlation(inputs, targets, outputs, lags_number)

    # Error measures

    def _split_errors(self, split: str, problem: str) -> Dict[str, float]:
        if problem == "binary":
            self._check_binary(f"calculate_{split}_errors")
        else:
            self.validate()
        _, targets, outputs = self._split_data(split)

        target_distribution = None
        if problem == "binary":
            target_distribution = self._data_set.calculate_target_distribution()

        return errors.error_summary(targets, outputs, problem, target_distribution=target_distribution)

    def calculate_training_errors(self) -> Dict[str, float]:
        return self._split_errors("training", "approximation")

    def calculate_selection_errors(self) -> Dict[str, float]:
        return self._split_errors("selection", "approximation")

    def calculate_testing_errors(self) -> Dict[str, float]:
        return self._split_errors("testing", "approximation")

    def calculate_binary_classification_training_errors(self) -> Dict[str, float]:
        return self._split_errors("training", "binary")

    def calculate_binary_classification_selection_errors(self) -> Dict[str, float]:
        return self._split_errors("selection", "binary")

    def calculate_binary_classification_testing_errors(self) -> Dict[str, float]:
        return self._split_errors("testing", "binary")

    def calculate_multiple_classification_training_errors(self) -> Dict[str, float]:
        return self._split_errors("training", "multiple")

    def calculate_multiple_classification_selection_errors(self) -> Dict[str, float]:
        return self._split_errors("selection", "multiple")

    def calculate_multiple_classification_testing_errors(self) -> Dict[str, float]:
        return self._split_errors("testing", "multiple")

    def _errors_frame(self, problem: str) -> pd.DataFrame:
        with timed_operation(f"testing_analysis.{problem}_errors", log_result=False) as timing:
            frame = pd.DataFrame({split: self._split_errors(split, problem) for split in SPLITS})
        self._log(f"✅ Calculated {problem} errors in {timing['duration']:.3f}s")
        return frame

    def calculate_errors(self) -> pd.DataFrame:
        """Squared error measures with one column per data split.

        Example:
            >>> analysis.calculate_errors().loc["mean_squared_error", "testing"]
            0.0123
        """
        return self._errors_frame("approximation")

    def calculate_binary_classification_errors(self) -> pd.DataFrame:
        return self._errors_frame("binary")

    def calculate_multiple_classification_errors(self) -> pd.DataFrame:
        return self._errors_frame("multiple")

    # Classification

    @timer(name="testing_analysis.calculate_confusion", log_result=False)
    def calculate_confusion(self) -> np.ndarray:
        """Confusion matrix of the testing split.

        Networks with one output get a binary matrix at their decision
        threshold (or the configured one); others a multiclass matrix.
        """
        self.validate()
        targets, outputs = self._testing_targets_outputs()
        validate_invariants = self.config.validate_invariants

        if self._is_binary():
            return confusion.confusion_binary(targets, outputs, self._decision_threshold(),
                                              validate=validate_invariants)
        return confusion.confusion_multiclass(targets, outputs, validate=validate_invariants)

    def calculate_binary_classification_rates(self) -> BinaryClassificationRates:
        self._check_binary("calculate_binary_classification_rates")
        targets, outputs = self._testing_targets_outputs()
        return confusion.binary_classification_rates(
            targets, outputs, self._testing_indices(), self._decision_threshold()
        )

    def calculate_multiple_classification_rates(self) -> List[List[np.ndarray]]:
        self.validate()
        targets, outputs = self._testing_targets_outputs()
        return confusion.multiple_classification_rates(targets, outputs, self._testing_indices())

    @timer(name="testing_analysis.calculate_binary_classification_tests", log_result=False)
    def calculate_binary_classification_tests(self) -> BinaryClassificationTests:
        self._check_binary("calculate_binary_classification_tests")
        return classification_tests.binary_classification_tests(self.calculate_confusion())

    # Binary classifier curves

    @timer(name="testing_analysis.perform_roc_analysis", log_result=False)
    def perform_roc_analysis(self) -> RocAnalysisResults:
        """ROC curve, area under curve, confidence limit and optimal threshold."""
        self._check_binary("perform_roc_analysis")
        targets, outputs = self._testing_targets_outputs()

        self._log(f"🔍 Starting ROC analysis on {targets.shape[0]} testing instances")
        results = roc.roc_analysis(targets, outputs, self.config.maximum_roc_points, self.config.n_jobs)
        self._log(f"   AUC: {results.area_under_curve:.4f}")
        self._log(f"   Optimal threshold: {results.optimal_threshold:.4f}")
        return results

    def perform_cumulative_gain_analysis(self) -> np.ndarray:
        self._check_binary("perform_cumulative_gain_analysis")
        targets, outputs = self._testing_targets_outputs()
        return gain.cumulative_gain(targets, outputs)

    def perform_negative_cumulative_gain_analysis(self) -> np.ndarray:
        self._check_binary("perform_negative_cumulative_gain_analysis")
        targets, outputs = self._testing_targets_outputs()
        return gain.negative_cumulative_gain(targets, outputs)

    def perform_lift_chart_analysis(self) -> np.ndarray:
        return gain.lift_chart(self.perform_cumulative_gain_analysis())

    @timer(name="testing_analysis.perform_kolmogorov_smirnov_analysis", log_result=False)
    def perform_kolmogorov_smirnov_analysis(self) -> KolmogorovSmirnovResults:
        self._check_binary("perform_kolmogorov_smirnov_analysis")
        targets, outputs = self._testing_targets_outputs()
        results = gain.kolmogorov_smirnov(targets, outputs)
        self._log(f"   KS statistic: {results.statistic:.4f}")
        return results

    def perform_calibration_plot_analysis(self) -> np.ndarray:
        self._check_binary("perform_calibration_plot_analysis")
        targets, outputs = self._testing_targets_outputs()
        return calibration.calibration_plot(targets, outputs)

    def calculate_output_histogram(self, bins_number: Optional[int] = None) -> Histogram:
        self.validate()
        if bins_number is None:
            bins_number = self.config.histogram_bins
        _, outputs = self._testing_targets_outputs()
        return calibration.output_histogram(outputs, bins_number)

    def calculate_logloss(self) -> float:
        self._check_binary("calculate_logloss")
        targets, outputs = self._testing_targets_outputs()
        return errors.logloss(targets, outputs)

    # Reports

    def _section(self, name: str, compute: Any) -> Any:
        try:
            return compute()
        except AnalysisError as e:
            logger.warning(f"Skipping {name} in report: {e}")
            return None

    def summarize(self) -> Dict[str, Any]:
        """Collect the analyses suited to the problem type as plain data.

        Analyses that cannot run on the current data (for example ROC
        analysis without negative testing instances) are logged and left
        out.
        """
        problem = self.infer_problem_type()
        summary: Dict[str, Any] = {
            'problem_type': problem,
            'testing_instances_number': int(len(self._testing_indices())),
            'testing_errors': self._section(
                "testing errors", lambda: self._split_errors("testing", problem)
            ),
            'confusion': None,
        }

        if problem == "approximation":
            regression = self._section("linear regression", self.perform_linear_regression_analysis)
            statistics = self._section("error statistics", self.calculate_error_data_statistics_matrices)
            summary['linear_regression'] = None if regression is None else [
                {'target': name, 'intercept': a.intercept, 'slope': a.slope, 'correlation': a.correlation}
                for name, a in zip(self._data_set_names(), regression)
            ]
            summary['error_statistics'] = None if statistics is None else {
                name: matrix.to_dict(orient="index")
                for name, matrix in zip(self._data_set_names(), statistics)
            }
            return summary

        matrix = self._section("confusion matrix", self.calculate_confusion)
        summary['confusion'] = None if matrix is None else matrix.tolist()

        if problem == "binary":
            roc_results = self._section("ROC analysis", self.perform_roc_analysis)
            ks_results = self._section("Kolmogorov-Smirnov analysis", self.perform_kolmogorov_smirnov_analysis)
            calibration_curve = self._section("calibration plot", self.perform_calibration_plot_analysis)
            tests = self._section("binary classification tests", self.calculate_binary_classification_tests)

            summary['roc_analysis'] = None if roc_results is None else roc_results.to_dict()
            summary['kolmogorov_smirnov'] = None if ks_results is None else ks_results.to_dict()
            summary['calibration_plot'] = None if calibration_curve is None else calibration_curve.tolist()
            summary['binary_classification_tests'] = None if tests is None else tests.to_dict()
            summary['logloss'] = self._section("logloss", self.calculate_logloss)

        return summary

    def _generate_plots(self, summary: Dict[str, Any], output_dir: Path) -> Dict[str, Path]:
        extension = self.config.plot_format
        plot_files: Dict[str, Optional[Path]] = {}

        if summary['confusion'] is not None:
            plot_files['confusion_matrix'] = plots.plot_confusion_matrix(
                np.asarray(summary['confusion']), output_dir / f"confusion_matrix.{extension}"
            )

        if summary['problem_type'] == "binary":
            if summary['roc_analysis'] is not None:
                roc_results = dict(summary['roc_analysis'], roc_curve=np.asarray(summary['roc_analysis']['roc_curve']))
                plot_files['roc_curve'] = plots.plot_roc_curve(
                    RocAnalysisResults(**roc_results), output_dir / f"roc_curve.{extension}"
                )
            if summary['kolmogorov_smirnov'] is not None:
                ks_results = KolmogorovSmirnovResults(
                    **{key: np.asarray(value) for key, value in summary['kolmogorov_smirnov'].items()}
                )
                plot_files['cumulative_gain'] = plots.plot_cumulative_gain(
                    ks_results, output_dir / f"cumulative_gain.{extension}"
                )
                plot_files['lift_chart'] = plots.plot_lift_chart(
                    gain.lift_chart(ks_results.positive_cumulative_gain),
                    output_dir / f"lift_chart.{extension}"
                )
            if summary['calibration_plot'] is not None:
                plot_files['calibration_plot'] = plots.plot_calibration_plot(
                    np.asarray(summary['calibration_plot']), output_dir / f"calibration_plot.{extension}"
                )
            plot_files['output_histogram'] = plots.plot_histogram(
                self.calculate_output_histogram(), output_dir / f"output_histogram.{extension}",
                title='Output Histogram', xlabel='Output'
            )

        if summary['problem_type'] == "approximation":
            histograms = self._section("error histograms", self.calculate_error_data_histograms) or []
            for name, histogram in zip(self._data_set_names(), histograms):
                plot_files[f'error_histogram_{name}'] = plots.plot_histogram(
                    histogram, output_dir / f"error_histogram_{name}.{extension}",
                    title=f'{name} Percentage Error', xlabel='Percentage Error'
                )

        return {key: path for key, path in plot_files.items() if path is not None}

    def generate_report(
        self,
        output_dir: Union[str, Path],
        include_plots: Optional[bool] = None,
        summary: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Path]:
        """Write the testing analysis summary and charts.

        Args:
            output_dir: Directory to save report files
            include_plots: Whether to render charts, the configured value when omitted
            summary: Result of :meth:`summarize`, computed when omitted

        Returns:
            Dictionary of generated file paths

        Raises:
            FileOperationError: If the report cannot be written
        """
        output_dir = Path(output_dir)
        include_plots = self.config.include_plots if include_plots is None else include_plots

        generated_files: Dict[str, Path] = {}

        with timed_operation("testing_analysis.generate_report", log_result=False):
            if summary is None:
                summary = self.summarize()

            try:
                output_dir.mkdir(parents=True, exist_ok=True)

                summary_path = output_dir / REPORT_FILENAME
                with open(summary_path, 'w') as f:
                    json.dump(summary, f, indent=2, default=str)
                generated_files['summary'] = summary_path

            except OSError as e:
                handle_and_reraise(
                    e, FileOperationError,
                    "Failed to write testing analysis report",
                    error_code="REPORT_GENERATION_FAILED",
                    context=create_error_context(output_dir=str(output_dir))
                )

            if include_plots:
                generated_files.update(self._generate_plots(summary, output_dir))

        if self.config.display:
            logger.log_with_context(
                logging.INFO, "Generated testing analysis report",
                output_dir=str(output_dir), files=sorted(generated_files)
            )
            logger.info(get_performance_summary())

        return generated_files

    # Persistence

    def save(self, file_path: Union[str, Path]) -> Path:
        """Save the engine settings to YAML or JSON."""
        return save_config(self.config, file_path)

    def load(self, file_path: Union[str, Path]) -> None:
        """Replace the engine settings with those stored in a file."""
        self.config = load_config(file_path)


def perform_testing_analysis(
    neural_network: Any,
    data_set: Any,
    output_dir: Optional[Union[str, Path]] = None,
    config: Optional[TestingAnalysisConfig] = None
) -> Dict[str, Any]:
    """Convenience function running the analyses suited to a model.

    Args:
        neural_network: Object implementing NeuralNetworkProtocol
        data_set: Object implementing DataSetProtocol
        output_dir: Directory for a report, no files are written when omitted
        config: Analysis settings

    Returns:
        Summary dictionary, with a ``files`` entry when a report was written

    Example:
        >>> summary = perform_testing_analysis(network, data_set)
        >>> summary["binary_classification_tests"]["classification_accuracy"]
        0.92
    """
    analysis = TestingAnalysis(neural_network, data_set, config)
    summary = analysis.summarize()

    if output_dir is not None:
        files = analysis.generate_report(output_dir, summary=summary)
        summary['files'] = {key: str(path) for key, path in files.items()}

    return summary
