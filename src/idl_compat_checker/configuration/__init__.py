"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration
from .runtime_settings import (
    COMPARISON_MODES,
    CheckConfiguration,
    ComparisonSettings,
    MergingSettings,
)

__all__ = [
    "COMPARISON_MODES",
    "CheckConfiguration",
    "ComparisonSettings",
    "MergingSettings",
    "ConfigurationError",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
