"""Configuration management module for talentmatch."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, validate_config_file
from .models import (
    AppConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ScoringConfig,
    ScoringWeights,
)

__all__ = [
    # Loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "ScoringConfig",
    "ScoringWeights",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
