"""Test configuration for pytest."""
import os
from typing import Tuple

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from neuralkit.data.data_set import DataSet
from neuralkit.models.adapters import CallableNetwork

SPLIT_PATTERN = ["training", "selection", "testing", "testing"]


def _uses(instances_number: int):
    return [SPLIT_PATTERN[i % len(SPLIT_PATTERN)] for i in range(instances_number)]


@pytest.fixture
def binary_scores() -> Tuple[np.ndarray, np.ndarray]:
    """Binary targets with scores that mostly, but not perfectly, separate them."""
    targets = np.array([1, 1, 1, 1, 1, 1, 0, 1, 0, 0, 1, 0, 0, 0, 0, 0], dtype=float)
    outputs = np.array([0.95, 0.9, 0.85, 0.8, 0.75, 0.7, 0.65, 0.6,
                        0.55, 0.5, 0.45, 0.4, 0.3, 0.2, 0.1, 0.05])
    return targets, outputs


@pytest.fixture
def binary_data_set() -> DataSet:
    """One input holding the score and one binary target, split 10/10/20."""
    scores = np.linspace(0.02, 0.98, 40)
    targets = (scores >= 0.5).astype(float)
    # A few mislabelled instances on both sides of the boundary
    targets[[5, 18, 26, 33]] = 1.0 - targets[[5, 18, 26, 33]]
    return DataSet.from_arrays(scores, targets, instance_uses=_uses(40))


@pytest.fixture
def binary_network() -> CallableNetwork:
    """Network returning its single input as the positive-class probability."""
    return CallableNetwork(lambda X: X[:, 0], inputs_number=1, outputs_number=1, decision_threshold=0.5)


@pytest.fixture
def regression_data_set() -> DataSet:
    """Two inputs and a linear target ``2 * x1 + 1``."""
    x = np.linspace(-1.0, 1.0, 40)
    inputs = np.column_stack([x, np.cos(3.0 * x)])
    targets = 2.0 * x + 1.0
    return DataSet.from_arrays(inputs, targets, instance_uses=_uses(40))


@pytest.fixture
def regression_network() -> CallableNetwork:
    """Network approximating ``2 * x1 + 1`` with a small periodic error."""
    return CallableNetwork(
        lambda X: 2.0 * X[:, 0] + 1.0 + 0.05 * np.sin(7.0 * X[:, 0]),
        inputs_number=2,
        outputs_number=1
    )


@pytest.fixture
def multiclass_data_set() -> DataSet:
    """Three-class one-hot targets with class scores as inputs."""
    classes = np.arange(30) % 3
    targets = np.eye(3)[classes]
    scores = 0.6 * targets + 0.2
    # Confuse two testing instances
    scores[3] = [0.1, 0.8, 0.1]
    scores[7] = [0.1, 0.1, 0.8]
    return DataSet.from_arrays(scores, targets, instance_uses=_uses(30))


@pytest.fixture
def multiclass_network() -> CallableNetwork:
    return CallableNetwork(lambda X: X, inputs_number=3, outputs_number=3)


@pytest.fixture(autouse=True)
def cleanup_environment():
    """Clean up environment variables after each test."""
    original_env = dict(os.environ)

    yield

    os.environ.clear()
    os.environ.update(original_env)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
