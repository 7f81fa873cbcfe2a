"""
gql_fetch - asyncio GraphQL client with secondary rate limit retries.

Executes GraphQL queries and mutations over HTTP against a single endpoint,
binding results into typed operation descriptors.
"""

from .cancel import CancelToken
from .config import ClientConfig, ConfigLoader, LoggingConfig, LogLevel, load_config
from .exceptions import (
    BindError,
    DecodeError,
    EncodingError,
    GQLFetchError,
    GraphQLOperationError,
    HTTPStatusError,
    OperationCancelledError,
    QueryBuildError,
    RateLimitTimeoutError,
    TransportError,
)
from .graphql import (
    ErrorLocation,
    Field,
    GraphQLClient,
    GraphQLError,
    OperationDescriptor,
    OperationKind,
    Selection,
    Variable,
)
from .logging import setup_logging

__version__ = "1.0.0"

__all__ = [
    # Client
    "GraphQLClient",
    "CancelToken",
    # Descriptors
    "Field",
    "Selection",
    "OperationDescriptor",
    "Variable",
    "OperationKind",
    "GraphQLError",
    "ErrorLocation",
    # Configuration
    "ClientConfig",
    "LoggingConfig",
    "LogLevel",
    "ConfigLoader",
    "load_config",
    "setup_logging",
    # Exceptions
    "GQLFetchError",
    "QueryBuildError",
    "EncodingError",
    "TransportError",
    "OperationCancelledError",
    "RateLimitTimeoutError",
    "HTTPStatusError",
    "DecodeError",
    "BindError",
    "GraphQLOperationError",
]
