"""
Configuration models for gql_fetch.

This module defines the client and logging configuration with validation and
defaults.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.WARNING, description="Level of the gql_fetch logger")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    enable_console: bool = Field(default=True, description="Enable console logging")
    enable_structured: bool = Field(
        default=False, description="Enable structured JSON logging"
    )

    # Component-specific log levels, e.g. {"gql_fetch.graphql.retry": "DEBUG"}
    component_levels: Dict[str, LogLevel] = Field(
        default_factory=dict, description="Per-component log levels"
    )


class ClientConfig(BaseModel):
    """Configuration for the GraphQL client."""

    model_config = ConfigDict(frozen=True)

    # Endpoint settings
    endpoint: str = Field(description="GraphQL endpoint URL")

    # Transport settings
    request_timeout: float = Field(default=30.0, gt=0, description="Total request timeout in seconds")
    connect_timeout: float = Field(default=10.0, gt=0, description="Connection timeout in seconds")
    headers: Dict[str, str] = Field(default_factory=dict, description="Default headers for requests")
    user_agent: str = Field(default="gql-fetch/1.0", description="User-Agent header")

    # Error reporting
    body_snippet_limit: int = Field(
        default=1024, ge=0, description="Max characters of a non-200 body kept on errors"
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"endpoint must be an absolute http(s) URL, got {v!r}")
        return v
