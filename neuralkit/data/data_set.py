# neuralkit/data/data_set.py
"""In-memory data set split into training, selection and testing instances.

This is the reference implementation of
:class:`~neuralkit.models.protocols.DataSetProtocol`. It wraps a pandas
DataFrame, names the input and target columns, and assigns every row an
instance use. Row positions in the frame are the instance indices.
"""

from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split

from ..utils.logger import get_logger
from ..utils.exceptions import (
    DataValidationError,
    validate_parameter,
    create_error_context
)

logger = get_logger(__name__)

INSTANCE_USES = ("training", "selection", "testing", "unused")


class DataSet:
    """Tabular data set with instance uses.

    Example:
        >>> data_set = DataSet(frame, input_columns=["x1", "x2"], target_columns=["y"])
        >>> data_set.split_instances(0.6, 0.2, 0.2, random_state=42)
        >>> data_set.get_testing_target_data().shape
        (20, 1)
    """

    def __init__(
        self,
        data: pd.DataFrame,
        input_columns: Sequence[str],
        target_columns: Sequence[str],
        instance_uses: Optional[Sequence[str]] = None
    ) -> None:
        """Initialize data set.

        Args:
            data: Frame holding numeric input and target columns
            input_columns: Input variable names
            target_columns: Target variable names
            instance_uses: Use per row; defaults to all rows for testing

        Raises:
            DataValidationError: If columns are missing, overlap or uses are invalid
        """
        input_columns = list(input_columns)
        target_columns = list(target_columns)

        if not input_columns or not target_columns:
            raise DataValidationError(
                "Data set needs at least one input and one target column",
                error_code="MISSING_VARIABLES",
                context=create_error_context(inputs=input_columns, targets=target_columns)
            )

        missing = [c for c in input_columns + target_columns if c not in data.columns]
        if missing:
            raise DataValidationError(
                f"Columns not found in data: {missing}",
                error_code="MISSING_COLUMNS",
                context={"missing_columns": missing}
            )

        overlap = sorted(set(input_columns) & set(target_columns))
        if overlap:
            raise DataValidationError(
                f"Columns cannot be both input and target: {overlap}",
                error_code="OVERLAPPING_COLUMNS",
                context={"columns": overlap}
            )

        self.data = data.reset_index(drop=True)
        self.input_columns = input_columns
        self.target_columns = target_columns
        self.instance_uses = pd.Series("testing", index=self.data.index, dtype=object)

        if instance_uses is not None:
            self.set_instance_uses(instance_uses)

    @classmethod
    def from_arrays(
        cls,
        inputs: np.ndarray,
        targets: np.ndarray,
        instance_uses: Optional[Sequence[str]] = None
    ) -> "DataSet":
        """Build a data set from input and target matrices.

        Columns are named ``input_1..n`` and ``target_1..m``.
        """
        inputs = np.asarray(inputs, dtype=float)
        targets = np.asarray(targets, dtype=float)
        if inputs.ndim == 1:
            inputs = inputs.reshape(-1, 1)
        if targets.ndim == 1:
            targets = targets.reshape(-1, 1)

        if inputs.shape[0] != targets.shape[0]:
            raise DataValidationError(
                "Inputs and targets must have the same number of rows",
                error_code="ROW_COUNT_MISMATCH",
                context={"inputs_rows": inputs.shape[0], "targets_rows": targets.shape[0]}
            )

        input_columns = [f"input_{i + 1}" for i in range(inputs.shape[1])]
        target_columns = [f"target_{i + 1}" for i in range(targets.shape[1])]
        frame = pd.DataFrame(np.hstack([inputs, targets]), columns=input_columns + target_columns)

        return cls(frame, input_columns, target_columns, instance_uses)

    # Instance uses

    def set_instance_uses(self, instance_uses: Sequence[str]) -> None:
        instance_uses = list(instance_uses)
        if len(instance_uses) != len(self.data):
            raise DataValidationError(
                f"Expected {len(self.data)} instance uses, got {len(instance_uses)}",
                error_code="INSTANCE_USES_LENGTH",
                context={"expected": len(self.data), "received": len(instance_uses)}
            )

        uses = pd.Series(instance_uses, index=self.data.index, dtype=object)

        invalid = sorted(set(uses) - set(INSTANCE_USES))
        if invalid:
            raise DataValidationError(
                f"Invalid instance uses: {invalid}",
                error_code="INVALID_INSTANCE_USE",
                context={"invalid": invalid, "valid": list(INSTANCE_USES)}
            )

        self.instance_uses = uses

    def split_instances(
        self,
        training_ratio: float = 0.6,
        selection_ratio: float = 0.2,
        testing_ratio: float = 0.2,
        shuffle: bool = True,
        random_state: Optional[int] = None
    ) -> None:
        """Assign instance uses by ratio.

        Args:
            training_ratio: Share of training instances
            selection_ratio: Share of selection instances
            testing_ratio: Share of testing instances
            shuffle: Whether instances are shuffled before splitting
            random_state: Seed for the shuffle
        """
        for name, value in (("training_ratio", training_ratio),
                            ("selection_ratio", selection_ratio),
                            ("testing_ratio", testing_ratio)):
            validate_parameter(name, value, min_value=0.0, max_value=1.0)

        total = training_ratio + selection_ratio + testing_ratio
        validate_parameter("ratio_sum", total, min_value=1e-12)

        instances_number = len(self.data)
        indices = np.arange(instances_number)
        testing_number = int(round(instances_number * testing_ratio / total))
        selection_number = int(round(instances_number * selection_ratio / total))

        rest, testing = self._take(indices, testing_number, shuffle, random_state)
        training, selection = self._take(rest, selection_number, shuffle, random_state)

        uses = pd.Series("training", index=self.data.index, dtype=object)
        uses.iloc[selection] = "selection"
        uses.iloc[testing] = "testing"
        self.instance_uses = uses

        logger.debug(
            f"Split {instances_number} instances: {len(training)} training, "
            f"{len(selection)} selection, {len(testing)} testing"
        )

    @staticmethod
    def _take(indices: np.ndarray, number: int, shuffle: bool, random_state: Optional[int]):
        if number <= 0:
            return indices, indices[:0]
        if number >= len(indices):
            return indices[:0], indices
        kept, taken = train_test_split(indices, test_size=number, shuffle=shuffle, random_state=random_state)
        return np.sort(kept), np.sort(taken)

    def get_instances_indices(self, use: str) -> np.ndarray:
        validate_parameter("use", use, valid_values=list(INSTANCE_USES))
        return np.flatnonzero(self.instance_uses.to_numpy() == use)

    def get_training_instances_indices(self) -> np.ndarray:
        return self.get_instances_indices("training")

    def get_selection_instances_indices(self) -> np.ndarray:
        return self.get_instances_indices("selection")

    def get_testing_instances_indices(self) -> np.ndarray:
        return self.get_instances_indices("testing")

    def get_testing_instances_number(self) -> int:
        return len(self.get_testing_instances_indices())

    # Data access

    def _matrix(self, use: str, columns: List[str]) -> np.ndarray:
        rows = self.get_instances_indices(use)
        return self.data.iloc[rows][columns].to_numpy(dtype=float)

    def get_training_input_data(self) -> np.ndarray:
        return self._matrix("training", self.input_columns)

    def get_training_target_data(self) -> np.ndarray:
        return self._matrix("training", self.target_columns)

    def get_selection_input_data(self) -> np.ndarray:
        return self._matrix("selection", self.input_columns)

    def get_selection_target_data(self) -> np.ndarray:
        return self._matrix("selection", self.target_columns)

    def get_testing_input_data(self) -> np.ndarray:
        return self._matrix("testing", self.input_columns)

    def get_testing_target_data(self) -> np.ndarray:
        return self._matrix("testing", self.target_columns)

    # Variables

    def get_input_variables_number(self) -> int:
        return len(self.input_columns)

    def get_target_variables_number(self) -> int:
        return len(self.target_columns)

    def get_input_variables_names(self) -> List[str]:
        return list(self.input_columns)

    def get_target_variables_names(self) -> List[str]:
        return list(self.target_columns)

    def calculate_target_distribution(self) -> np.ndarray:
        """Count used instances per class.

        A single target column is read as binary and gives
        ``[negatives, positives]`` with 0.5 as the boundary. Several target
        columns are read as one-hot classes and give one count per column.
        """
        used = self.instance_uses.to_numpy() != "unused"
        targets = self.data.loc[used, self.target_columns].to_numpy(dtype=float)

        if targets.shape[1] == 1:
            positives = int(np.count_nonzero(targets[:, 0] >= 0.5))
            return np.array([targets.shape[0] - positives, positives], dtype=np.int64)

        if targets.shape[0] == 0:
            return np.zeros(targets.shape[1], dtype=np.int64)
        classes = np.argmax(targets, axis=1)
        return np.bincount(classes, minlength=targets.shape[1]).astype(np.int64)
