# neuralkit/config/loader.py
"""Loading and saving of testing analysis settings.

Settings are stored as YAML (``.yaml``/``.yml``) or JSON (``.json``)
documents, either flat or nested below a ``testing_analysis`` key.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .analysis_config import TestingAnalysisConfig
from ..utils.logger import get_logger
from ..utils.timer import timer
from ..utils.exceptions import (
    ConfigurationError,
    FileOperationError,
    handle_and_reraise,
    create_error_context
)

logger = get_logger(__name__)

SECTION_KEY = "testing_analysis"
YAML_SUFFIXES = (".yaml", ".yml")


def _check_suffix(file_path: Path) -> None:
    if file_path.suffix.lower() not in YAML_SUFFIXES + (".json",):
        raise ConfigurationError(
            f"Unsupported configuration format: {file_path.suffix}",
            error_code="UNSUPPORTED_CONFIG_FORMAT",
            context={"file_path": str(file_path), "supported": list(YAML_SUFFIXES) + [".json"]}
        )


def read_settings(file_path: Union[str, Path]) -> Dict[str, Any]:
    """Read a settings document into a dictionary.

    Raises:
        FileOperationError: If the file cannot be read
        ConfigurationError: If the document cannot be parsed
    """
    file_path = Path(file_path)
    _check_suffix(file_path)

    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        handle_and_reraise(
            e, FileOperationError,
            f"Failed to read configuration file: {file_path}",
            error_code="CONFIG_READ_FAILED",
            context=create_error_context(file_path=str(file_path))
        )

    try:
        if file_path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        handle_and_reraise(
            e, ConfigurationError,
            f"Failed to parse configuration file: {file_path}",
            error_code="CONFIG_PARSE_FAILED",
            context=create_error_context(file_path=str(file_path))
        )

    data = data or {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration root must be a mapping, got {type(data).__name__}",
            error_code="CONFIG_INVALID_ROOT",
            context={"file_path": str(file_path)}
        )

    return data.get(SECTION_KEY, data)


@timer(name="config_loading", log_result=False)
def load_config(file_path: Union[str, Path], use_environment: bool = False) -> TestingAnalysisConfig:
    """Load testing analysis settings from YAML or JSON.

    Args:
        file_path: Settings file
        use_environment: Whether ``NEURALKIT_*`` variables override file values

    Returns:
        Validated configuration

    Example:
        >>> config = load_config("settings/analysis.yaml")
        >>> config.display
        False
    """
    settings = read_settings(file_path)
    config = TestingAnalysisConfig.from_dict(settings)
    if use_environment:
        config.update_from_env()

    logger.debug(f"Loaded testing analysis settings from {file_path}")
    return config


def save_config(config: TestingAnalysisConfig, file_path: Union[str, Path]) -> Path:
    """Save testing analysis settings below a ``testing_analysis`` key.

    Returns:
        Path of the written file

    Raises:
        FileOperationError: If the file cannot be written
    """
    file_path = Path(file_path)
    _check_suffix(file_path)
    document = {SECTION_KEY: config.to_dict()}

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w", encoding="utf-8") as f:
            if file_path.suffix.lower() == ".json":
                json.dump(document, f, indent=2)
            else:
                yaml.safe_dump(document, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        handle_and_reraise(
            e, FileOperationError,
            f"Failed to write configuration file: {file_path}",
            error_code="CONFIG_WRITE_FAILED",
            context=create_error_context(file_path=str(file_path))
        )

    logger.debug(f"Saved testing analysis settings to {file_path}")
    return file_path
