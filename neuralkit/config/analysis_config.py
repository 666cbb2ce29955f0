# neuralkit/config/analysis_config.py
"""Type-safe settings for the testing analysis engine.

The configuration controls progress display, the fallback decision
threshold, ROC sub-sampling, opt-in invariant validation, parallelism and
report defaults. Values can be overridden from ``NEURALKIT_*`` environment
variables.
"""

import os
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional

from ..utils.logger import get_logger
from ..utils.exceptions import ConfigurationError, validate_parameter

logger = get_logger(__name__)

ENV_PREFIX = "NEURALKIT_"


@dataclass
class TestingAnalysisConfig:
    """Settings for :class:`~neuralkit.analysis.testing_analysis.TestingAnalysis`.

    Attributes:
        display: Whether the engine logs progress messages at INFO level
        decision_threshold: Binary threshold used when the network exposes none
        maximum_roc_points: Sampling cap for ROC and optimal-threshold sweeps
        validate_invariants: Whether computed confusion matrices are checked
            against the evaluated instance count
        n_jobs: Worker threads for pairwise AUC and per-output loops (-1 = all cores)
        histogram_bins: Default bin count for error and output histograms
        maximal_errors_number: Default number of worst instances per output
        maximum_lags_number: Default lag count for error correlations
        include_plots: Whether reports render charts
        plot_format: Chart file format
    """

    display: bool = True
    decision_threshold: float = 0.5
    maximum_roc_points: int = 1000
    validate_invariants: bool = False
    n_jobs: int = 1
    histogram_bins: int = 10
    maximal_errors_number: int = 10
    maximum_lags_number: int = 10
    include_plots: bool = True
    plot_format: str = "png"

    def __post_init__(self) -> None:
        """Validate analysis configuration."""
        validate_parameter("decision_threshold", self.decision_threshold, min_value=0.0, max_value=1.0)
        validate_parameter("maximum_roc_points", self.maximum_roc_points, min_value=1)
        validate_parameter("histogram_bins", self.histogram_bins, min_value=1)
        validate_parameter("maximal_errors_number", self.maximal_errors_number, min_value=1)
        validate_parameter("maximum_lags_number", self.maximum_lags_number, min_value=1)
        validate_parameter("plot_format", self.plot_format, valid_values=["png", "svg", "pdf"])
        if self.n_jobs != -1:
            validate_parameter("n_jobs", self.n_jobs, min_value=1)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "TestingAnalysisConfig":
        """Build a configuration from a dictionary.

        Raises:
            ConfigurationError: If the dictionary has unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown testing analysis settings: {unknown}",
                error_code="UNKNOWN_CONFIG_KEYS",
                context={"unknown_keys": unknown, "valid_keys": sorted(known)}
            )
        return cls(**values)

    def update_from_env(self, prefix: str = ENV_PREFIX) -> None:
        """Update configuration from environment variables.

        ``NEURALKIT_N_JOBS=4`` sets ``n_jobs``. Unparseable values are logged
        and ignored; the updated configuration is validated again.

        Args:
            prefix: Environment variable prefix
        """
        for config_field in fields(self):
            env_name = f"{prefix}{config_field.name.upper()}"
            if env_name not in os.environ:
                continue

            env_value = os.environ[env_name]
            try:
                if config_field.type in (bool, "bool"):
                    converted_value: Any = env_value.lower() in ("true", "1", "yes", "on")
                elif config_field.type in (int, "int"):
                    converted_value = int(env_value)
                elif config_field.type in (float, "float"):
                    converted_value = float(env_value)
                else:
                    converted_value = env_value
            except (ValueError, TypeError) as e:
                logger.warning(f"Failed to parse environment variable {env_name}: {e}")
                continue

            setattr(self, config_field.name, converted_value)
            logger.info(f"Updated {config_field.name} from environment: {converted_value}")

        self.__post_init__()


def create_analysis_config(
    overrides: Optional[Dict[str, Any]] = None,
    use_environment: bool = False
) -> TestingAnalysisConfig:
    """Create a validated configuration.

    Args:
        overrides: Values replacing the defaults
        use_environment: Whether ``NEURALKIT_*`` variables are applied last

    Example:
        >>> config = create_analysis_config({"display": False, "n_jobs": 4})
    """
    config = TestingAnalysisConfig.from_dict(overrides or {})
    if use_environment:
        config.update_from_env()
    return config
