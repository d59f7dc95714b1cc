"""Configuration management for SceneCue."""

from scenecue.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
)
from scenecue.core.config.models import AppConfig, ConfigBase, LoggingConfig, SequencerConfig

__all__ = [
    # Loaders
    "detect_format",
    "load_config",
    "load_app_config",
    "configure_logging",
    # Models
    "ConfigBase",
    "AppConfig",
    "LoggingConfig",
    "SequencerConfig",
]
