# neuralkit/models/protocols.py
"""Protocol definitions for neuralkit collaborators.

The testing analysis engine never builds or trains networks and never
loads data. It talks to a trained network and to a split data set through
the protocols below and holds them as plain, non-owning references.
"""

from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable
import numpy as np


@runtime_checkable
class NeuralNetworkProtocol(Protocol):
    """Protocol for trained networks evaluated by the engine.

    Optional capabilities, detected with :func:`check_network_capabilities`:

    - ``get_decision_threshold() -> Optional[float]`` for networks with a
      probabilistic output stage
    - ``get_outputs_range() -> Optional[(minimums, maximums)]`` for networks
      that unscale their outputs

    Either may return None, which the engine treats as not available.
    """

    def calculate_outputs(self, inputs: np.ndarray) -> np.ndarray:
        """Compute outputs for an ``(instances, inputs)`` matrix.

        Returns:
            ``(instances, outputs)`` matrix
        """
        ...

    def get_inputs_number(self) -> int:
        ...

    def get_outputs_number(self) -> int:
        ...


@runtime_checkable
class DataSetProtocol(Protocol):
    """Protocol for data sets split into training, selection and testing."""

    def get_training_input_data(self) -> np.ndarray:
        ...

    def get_training_target_data(self) -> np.ndarray:
        ...

    def get_selection_input_data(self) -> np.ndarray:
        ...

    def get_selection_target_data(self) -> np.ndarray:
        ...

    def get_testing_input_data(self) -> np.ndarray:
        ...

    def get_testing_target_data(self) -> np.ndarray:
        ...

    def get_testing_instances_indices(self) -> np.ndarray:
        """Original instance indices of the testing rows, in row order."""
        ...

    def get_input_variables_number(self) -> int:
        ...

    def get_target_variables_number(self) -> int:
        ...

    def get_target_variables_names(self) -> List[str]:
        ...

    def calculate_target_distribution(self) -> np.ndarray:
        """Instance counts per class; ``[negatives, positives]`` for one binary target."""
        ...


def validate_network_protocol(network: Any) -> None:
    """Validate that an object implements NeuralNetworkProtocol.

    Raises:
        TypeError: If required methods are missing
    """
    if not isinstance(network, NeuralNetworkProtocol):
        missing = [
            name for name in ("calculate_outputs", "get_inputs_number", "get_outputs_number")
            if not callable(getattr(network, name, None))
        ]
        raise TypeError(
            f"{type(network).__name__} does not implement NeuralNetworkProtocol. "
            f"Missing methods: {missing}"
        )


def validate_data_set_protocol(data_set: Any) -> None:
    """Validate that an object implements DataSetProtocol.

    Raises:
        TypeError: If required methods are missing
    """
    if not isinstance(data_set, DataSetProtocol):
        missing = [
            name for name in DataSetProtocol.__dict__
            if name.startswith(("get_", "calculate_")) and not callable(getattr(data_set, name, None))
        ]
        raise TypeError(
            f"{type(data_set).__name__} does not implement DataSetProtocol. "
            f"Missing methods: {missing}"
        )


def check_network_capabilities(network: Any) -> Dict[str, bool]:
    """Report the optional capabilities of a network.

    Returns:
        Dictionary with ``has_decision_threshold`` and ``has_outputs_range``
    """
    return {
        'has_decision_threshold': callable(getattr(network, 'get_decision_threshold', None)),
        'has_outputs_range': callable(getattr(network, 'get_outputs_range', None)),
    }


def get_decision_threshold(network: Any) -> Optional[float]:
    """Return the network's decision threshold, or None if it has none."""
    if not check_network_capabilities(network)['has_decision_threshold']:
        return None
    threshold = network.get_decision_threshold()
    return None if threshold is None else float(threshold)


def get_outputs_range(network: Any) -> Optional[Tuple[np.ndarray, np.ndarray]]:
    """Return ``(minimums, maximums)`` of the network outputs, or None."""
    if not check_network_capabilities(network)['has_outputs_range']:
        return None
    outputs_range = network.get_outputs_range()
    if outputs_range is None:
        return None
    minimums, maximums = outputs_range
    return np.asarray(minimums, dtype=float), np.asarray(maximums, dtype=float)
