"""
GraphQL support for gql_fetch.

This module provides the GraphQL client, the operation dispatcher with
secondary rate limit retries, schema descriptors, the query builder and the
response binder.
"""

from .binder import bind
from .builder import build_operation_string
from .client import GraphQLClient
from .dispatcher import OperationDispatcher
from .envelope import decode_envelope
from .models import (
    ErrorLocation,
    GraphQLError,
    OperationKind,
    ResponseEnvelope,
    RetryState,
    WireRequest,
)
from .retry import RateLimitRetryPolicy, parse_retry_after
from .schema import Field, OperationDescriptor, Selection, Variable

__all__ = [
    # Client
    "GraphQLClient",
    "OperationDispatcher",
    # Models
    "OperationKind",
    "WireRequest",
    "ResponseEnvelope",
    "GraphQLError",
    "ErrorLocation",
    "RetryState",
    # Descriptors
    "Field",
    "Selection",
    "OperationDescriptor",
    "Variable",
    # Collaborators
    "build_operation_string",
    "bind",
    "decode_envelope",
    "RateLimitRetryPolicy",
    "parse_retry_after",
]
