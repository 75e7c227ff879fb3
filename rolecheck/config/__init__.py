"""Configuration management module for the role checker."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, validate_config_file
from .models import (
    AppConfig,
    BrowserConfig,
    LabelStyle,
    LogFormat,
    LogLevel,
    LoggingConfig,
    MatchingConfig,
    MatchPolicy,
    ReportConfig,
    ReportFormat,
    RosterConfig,
)

__all__ = [
    # Main loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "RosterConfig",
    "MatchingConfig",
    "ReportConfig",
    "BrowserConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "MatchPolicy",
    "LabelStyle",
    "ReportFormat",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
