"""neuralkit - Configuration.

Validated settings for the testing analysis engine and their YAML/JSON
persistence.
"""

from .analysis_config import TestingAnalysisConfig, create_analysis_config
from .loader import load_config, save_config, read_settings

__all__ = [
    'TestingAnalysisConfig',
    'create_analysis_config',
    'load_config',
    'save_config',
    'read_settings'
]
