"""
Configuration management for gql_fetch.

This module provides client configuration models and loading from
configuration files and environment variables.
"""

from .loader import ConfigLoader, load_config
from .models import ClientConfig, LoggingConfig, LogLevel

__all__ = [
    "ClientConfig",
    "LoggingConfig",
    "LogLevel",
    "ConfigLoader",
    "load_config",
]
