"""Configuration models and loaders."""

from .config import (
    Config,
    ExtractionSettings,
    KeywordConfig,
    MonitoringConfig,
    find_config_file,
    load_config,
)

__all__ = [
    "Config",
    "ExtractionSettings",
    "KeywordConfig",
    "MonitoringConfig",
    "find_config_file",
    "load_config",
]
