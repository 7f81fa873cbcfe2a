"""
Exception hierarchy for gql_fetch.

This module provides the custom exceptions raised while executing GraphQL
operations, and a small helper converting aiohttp/asyncio failures into them.
Every failure raised by the client is a subclass of GQLFetchError, so callers
can tell a retry budget running out apart from a server rejecting the
operation or a malformed response.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

import aiohttp

if TYPE_CHECKING:
    from .graphql.models import GraphQLError


class GQLFetchError(Exception):
    """
    Base exception for all GraphQL client operations.

    Attributes:
        message: Human-readable error message
        url: Endpoint that caused the error (if applicable)
        details: Additional error details as keyword arguments
    """

    def __init__(self, message: str, url: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.details = kwargs


class QueryBuildError(GQLFetchError):
    """
    Raised when an operation string cannot be built from a descriptor.

    This is a caller contract violation (unsupported variable type, duplicate
    field names) and is never caused by the network.
    """

    pass


class EncodingError(GQLFetchError):
    """
    Raised when request data cannot be encoded or a header cannot be parsed.

    Covers JSON serialization failures of the request body and malformed
    Retry-After header values.
    """

    pass


class TransportError(GQLFetchError):
    """
    Raised for network-level failures.

    Connection errors, client timeouts and cancellation end the call
    immediately and are never retried.

    Attributes:
        original_error: The underlying aiohttp/asyncio exception, if any
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, url)
        self.original_error = original_error


class OperationCancelledError(TransportError):
    """Raised when the caller's cancel token fires during an operation."""

    pass


class RateLimitTimeoutError(GQLFetchError):
    """
    Raised when the retry timeout budget runs out before a successful response.

    Attributes:
        timeout_value: The budget that was exhausted (in seconds)
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        timeout_value: Optional[int] = None,
    ) -> None:
        super().__init__(message, url)
        self.timeout_value = timeout_value


class HTTPStatusError(GQLFetchError):
    """Raised when the final response has a status other than 200 OK."""

    def __init__(
        self,
        message: str,
        status_code: int,
        url: Optional[str] = None,
        reason: Optional[str] = None,
        body: str = "",
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(message, url)
        self.status_code = status_code
        self.reason = reason
        self.body = body
        self.headers = headers or {}


class DecodeError(GQLFetchError):
    """Raised when the response envelope is not valid GraphQL-over-HTTP JSON."""

    pass


class BindError(GQLFetchError):
    """
    Raised when response data does not fit the caller's descriptor.

    Attributes:
        path: Dotted path of the offending value (e.g. "viewer.login")
    """

    def __init__(self, message: str, path: str = "", url: Optional[str] = None) -> None:
        super().__init__(message, url)
        self.path = path


class GraphQLOperationError(GQLFetchError):
    """
    Raised when the server reports GraphQL errors in an HTTP 200 response.

    The string form is exactly the first error's message; the complete list
    stays available on ``errors``.
    """

    def __init__(self, errors: Sequence["GraphQLError"], url: Optional[str] = None) -> None:
        if not errors:
            raise ValueError("GraphQLOperationError requires at least one error")
        self.errors: List["GraphQLError"] = list(errors)
        super().__init__(self.errors[0].message, url)

    @property
    def messages(self) -> List[str]:
        """All error messages in server order."""
        return [error.message for error in self.errors]

    def __str__(self) -> str:
        return self.errors[0].message


class ErrorHandler:
    """Converts low-level transport exceptions into GQLFetchError subclasses."""

    @staticmethod
    def handle_aiohttp_error(error: BaseException, url: Optional[str] = None) -> TransportError:
        """
        Convert aiohttp/asyncio exceptions to TransportError.

        Args:
            error: The original exception
            url: The endpoint that caused the error

        Returns:
            TransportError wrapping the original exception
        """
        if isinstance(error, asyncio.TimeoutError):
            return TransportError(f"Request timed out: {error}", url=url, original_error=error)

        elif isinstance(error, aiohttp.ClientConnectorError):
            return TransportError(f"Connector error: {error}", url=url, original_error=error)

        elif isinstance(error, aiohttp.ClientConnectionError):
            return TransportError(f"Connection error: {error}", url=url, original_error=error)

        elif isinstance(error, aiohttp.ClientPayloadError):
            return TransportError(f"Payload error: {error}", url=url, original_error=error)

        else:
            return TransportError(f"Unexpected network error: {error}", url=url, original_error=error)
