"""neuralkit - Data components.

In-memory data set with training, selection and testing instance uses.
"""

from .data_set import DataSet, INSTANCE_USES

__all__ = [
    'DataSet',
    'INSTANCE_USES'
]
