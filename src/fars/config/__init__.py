"""
Configuration management with typed Pydantic models.

Provides the explicit data directory and file naming used by all loaders.
"""

from fars.config.loader import config_from_dict, load_config
from fars.config.settings import (
    DEFAULT_FILENAME_TEMPLATE,
    DataConfig,
    FarsConfig,
    LoadingConfig,
    LoggingConfig,
    PlotConfig,
)

__all__ = [
    "DEFAULT_FILENAME_TEMPLATE",
    "DataConfig",
    "FarsConfig",
    "LoadingConfig",
    "LoggingConfig",
    "PlotConfig",
    "config_from_dict",
    "load_config",
]
