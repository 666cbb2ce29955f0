"""neuralkit - Network collaborators.

Protocols describing the trained networks and split data sets consumed
by the testing analysis engine, plus adapters for callables and fitted
scikit-learn estimators.
"""

from .protocols import (
    NeuralNetworkProtocol,
    DataSetProtocol,
    validate_network_protocol,
    validate_data_set_protocol,
    check_network_capabilities,
    get_decision_threshold,
    get_outputs_range
)
from .adapters import CallableNetwork, EstimatorNetwork

__all__ = [
    'NeuralNetworkProtocol',
    'DataSetProtocol',
    'validate_network_protocol',
    'validate_data_set_protocol',
    'check_network_capabilities',
    'get_decision_threshold',
    'get_outputs_range',
    'CallableNetwork',
    'EstimatorNetwork'
]
