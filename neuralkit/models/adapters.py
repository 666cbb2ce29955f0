# neuralkit/models/adapters.py
"""Adapters exposing prediction functions as neuralkit networks.

The testing analysis engine only needs ``calculate_outputs`` and the
input/output counts. These adapters give that interface to plain
callables and to fitted scikit-learn estimators.
"""

from typing import Any, Callable, Optional, Sequence, Tuple

import numpy as np

from ..utils.logger import get_logger
from ..utils.exceptions import ConfigurationError, validate_parameter

logger = get_logger(__name__)


def _as_output_matrix(outputs: Any) -> np.ndarray:
    outputs = np.asarray(outputs, dtype=float)
    if outputs.ndim == 1:
        outputs = outputs.reshape(-1, 1)
    return outputs


class CallableNetwork:
    """Network backed by a function mapping an input matrix to outputs.

    Example:
        >>> network = CallableNetwork(
        ...     lambda X: 1.0 / (1.0 + np.exp(-X.sum(axis=1))),
        ...     inputs_number=3, outputs_number=1, decision_threshold=0.5
        ... )
        >>> network.calculate_outputs(np.zeros((2, 3)))
        array([[0.5],
               [0.5]])
    """

    def __init__(
        self,
        function: Callable[[np.ndarray], Any],
        inputs_number: int,
        outputs_number: int,
        decision_threshold: Optional[float] = None,
        outputs_range: Optional[Tuple[Sequence[float], Sequence[float]]] = None
    ) -> None:
        """Initialize callable network.

        Args:
            function: Forward computation
            inputs_number: Number of input variables
            outputs_number: Number of output variables
            decision_threshold: Threshold of a probabilistic output stage
            outputs_range: ``(minimums, maximums)`` of the outputs
        """
        validate_parameter("inputs_number", inputs_number, min_value=1, required=True)
        validate_parameter("outputs_number", outputs_number, min_value=1, required=True)
        validate_parameter("decision_threshold", decision_threshold, min_value=0.0, max_value=1.0)

        self.function = function
        self.inputs_number = inputs_number
        self.outputs_number = outputs_number
        self.decision_threshold = decision_threshold
        self.outputs_range = outputs_range

    def calculate_outputs(self, inputs: np.ndarray) -> np.ndarray:
        return _as_output_matrix(self.function(np.asarray(inputs, dtype=float)))

    def get_inputs_number(self) -> int:
        return self.inputs_number

    def get_outputs_number(self) -> int:
        return self.outputs_number

    def get_decision_threshold(self) -> Optional[float]:
        return self.decision_threshold

    def get_outputs_range(self) -> Optional[Tuple[Sequence[float], Sequence[float]]]:
        return self.outputs_range


class EstimatorNetwork:
    """Network view of a fitted scikit-learn estimator.

    Classifiers with ``predict_proba`` produce probabilities: one column
    (the positive class) for binary problems, one column per class
    otherwise. Regressors produce ``predict`` as output columns.

    Example:
        >>> from sklearn.linear_model import LogisticRegression
        >>> estimator = LogisticRegression().fit(X_train, y_train)
        >>> network = EstimatorNetwork(estimator)
        >>> analysis = TestingAnalysis(network, data_set)
    """

    def __init__(self, estimator: Any, decision_threshold: float = 0.5) -> None:
        """Initialize estimator network.

        Args:
            estimator: Fitted scikit-learn estimator
            decision_threshold: Threshold reported for probabilistic classifiers

        Raises:
            ConfigurationError: If the estimator is not fitted
        """
        if not hasattr(estimator, "n_features_in_"):
            raise ConfigurationError(
                f"Estimator {type(estimator).__name__} must be fitted before evaluation",
                error_code="ESTIMATOR_NOT_FITTED",
                context={"estimator": type(estimator).__name__}
            )
        validate_parameter("decision_threshold", decision_threshold, min_value=0.0, max_value=1.0)

        self.estimator = estimator
        self.decision_threshold = decision_threshold
        self.is_probabilistic = hasattr(estimator, "predict_proba") and hasattr(estimator, "classes_")

        logger.debug(f"Wrapped {type(estimator).__name__} (probabilistic={self.is_probabilistic})")

    def calculate_outputs(self, inputs: np.ndarray) -> np.ndarray:
        inputs = np.asarray(inputs, dtype=float)
        if self.is_probabilistic:
            probabilities = np.asarray(self.estimator.predict_proba(inputs), dtype=float)
            if probabilities.shape[1] == 2:
                return probabilities[:, 1:2]
            return probabilities
        return _as_output_matrix(self.estimator.predict(inputs))

    def get_inputs_number(self) -> int:
        return int(self.estimator.n_features_in_)

    def get_outputs_number(self) -> int:
        if self.is_probabilistic:
            classes_number = len(self.estimator.classes_)
            return 1 if classes_number == 2 else classes_number
        return int(getattr(self.estimator, "n_outputs_", 1))

    def get_decision_threshold(self) -> Optional[float]:
        return self.decision_threshold if self.is_probabilistic else None
