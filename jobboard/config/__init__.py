"""Configuration management for the job board notifier."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config
from .models import (
    AppConfig,
    BroadcastConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    NotificationConfig,
)

__all__ = [
    "load_config",
    "load_environment_config",
    "AppConfig",
    "BroadcastConfig",
    "NotificationConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    "LogLevel",
    "LogFormat",
    "ConfigurationError",
]
