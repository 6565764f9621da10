"""Configuration management for the AptoPlay SDK."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import (
    DEFAULT_APTOS_FAUCET_URL,
    DEFAULT_APTOS_NODE_URL,
    DEFAULT_GOOGLE_USERINFO_URL,
    ClientConfig,
    LogFormat,
    LogLevel,
)

__all__ = [
    "load_environment_config",
    "ClientConfig",
    "EnvironmentConfig",
    "LogLevel",
    "LogFormat",
    "DEFAULT_APTOS_FAUCET_URL",
    "DEFAULT_APTOS_NODE_URL",
    "DEFAULT_GOOGLE_USERINFO_URL",
    "ConfigurationError",
]
