"""
GraphQL operation dispatcher.

The dispatcher executes one logical operation end to end: build the operation
string, serialize the request, transmit it under the rate limit retry policy,
decode the response envelope, bind data and surface GraphQL errors.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

import aiohttp

from ..cancel import CancelToken, run_cancellable
from ..exceptions import (
    BindError,
    EncodingError,
    ErrorHandler,
    GraphQLOperationError,
    HTTPStatusError,
    TransportError,
)
from .binder import bind
from .builder import build_operation_string
from .envelope import decode_envelope
from .models import OperationKind, WireRequest
from .retry import HTTP_OK, RateLimitRetryPolicy
from .schema import OperationDescriptor, variable_values

logger = logging.getLogger(__name__)

SessionProvider = Callable[[], Awaitable[aiohttp.ClientSession]]


@dataclass
class _Reply:
    """Fully read HTTP response."""

    status: int
    reason: Optional[str]
    headers: Mapping[str, str]
    body: bytes


class OperationDispatcher:
    """Executes single GraphQL operations against one endpoint."""

    def __init__(
        self,
        url: str,
        session_provider: SessionProvider,
        headers: Optional[Dict[str, str]] = None,
        body_snippet_limit: int = 1024,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        """
        Initialize dispatcher.

        Args:
            url: GraphQL endpoint URL
            session_provider: Coroutine function returning the HTTP session
            headers: Extra headers sent with every request
            body_snippet_limit: Max characters of a non-200 body kept on errors
            sleep: Sleep coroutine used between rate-limited attempts
                (defaults to asyncio.sleep)
            clock: Monotonic clock for the retry timeout budget
        """
        self.url = url
        self._session_provider = session_provider
        self._headers = dict(headers or {})
        self._body_snippet_limit = body_snippet_limit
        self._sleep = sleep
        self._clock = clock

    async def do(
        self,
        kind: OperationKind,
        descriptor: OperationDescriptor,
        variables: Optional[Dict[str, Any]] = None,
        timeout: int = 0,
        retry_count: int = 0,
        cancel: Optional[CancelToken] = None,
    ) -> None:
        """
        Execute a single GraphQL operation, populating ``descriptor``.

        Args:
            kind: Query or mutation
            descriptor: Response shape; bound in place on success
            variables: Operation variables
            timeout: Retry timeout budget in seconds (0 disables it)
            retry_count: Retries allowed after a 403 + Retry-After response
            cancel: Optional cancel token observed while transmitting and sleeping

        Raises:
            QueryBuildError: If the operation string cannot be built
            EncodingError: If the request cannot be serialized
            TransportError: On network failure or cancellation
            RateLimitTimeoutError: If the retry budget runs out
            HTTPStatusError: If the final response is not 200 OK
            DecodeError: If the response envelope is malformed
            BindError: If response data does not fit the descriptor
            GraphQLOperationError: If the server reported GraphQL errors
        """
        query = build_operation_string(kind, descriptor, variables)
        request = WireRequest(query=query, variables=variable_values(variables))
        try:
            payload = request.to_json()
        except (TypeError, ValueError) as e:
            raise EncodingError(f"Failed to encode GraphQL request: {e}", url=self.url)

        reply = await self._transmit_with_retry(payload, timeout, retry_count, cancel)

        if reply.status != HTTP_OK:
            snippet = reply.body.decode("utf-8", errors="replace")[: self._body_snippet_limit]
            raise HTTPStatusError(
                f"non-200 OK status code: {reply.status} {reply.reason or ''} body: {snippet!r}",
                status_code=reply.status,
                url=self.url,
                reason=reply.reason,
                body=snippet,
                headers=dict(reply.headers),
            )

        envelope = decode_envelope(reply.body, url=self.url)

        if envelope.data is not None:
            try:
                bind(envelope.data, descriptor)
            except BindError as e:
                e.url = self.url
                raise

        if envelope.has_errors:
            raise GraphQLOperationError(envelope.errors, url=self.url)

    async def _transmit_with_retry(
        self,
        payload: str,
        timeout: int,
        retry_count: int,
        cancel: Optional[CancelToken],
    ) -> _Reply:
        """Run the transmit loop; returns the final response."""
        policy = RateLimitRetryPolicy(
            timeout=timeout, retry_count=retry_count, clock=self._clock or time.monotonic
        )
        state = policy.start()

        attempt = 0
        while True:
            policy.check_budget(state, self.url)

            reply = await run_cancellable(self._transmit(payload), cancel, url=self.url)
            policy.record_attempt(state)
            logger.debug(
                "GraphQL attempt %d/%d to %s returned %d",
                attempt + 1,
                retry_count + 1,
                self.url,
                reply.status,
            )

            delay = policy.retry_delay(state, reply.status, reply.headers)
            if delay is None:
                return reply

            logger.warning(
                "Secondary rate limit reached on %s, retrying in %ds", self.url, delay
            )
            sleep = self._sleep or asyncio.sleep
            await run_cancellable(sleep(delay), cancel, url=self.url)
            attempt += 1

    async def _transmit(self, payload: str) -> _Reply:
        """Send one POST request and read the response."""
        headers = self._headers.copy()
        headers["Content-Type"] = "application/json"

        try:
            session = await self._session_provider()
            if session.closed:
                raise TransportError("HTTP session is closed", url=self.url)
            async with session.post(self.url, data=payload, headers=headers) as response:
                if response.status == HTTP_OK:
                    body = await response.read()
                else:
                    body = await self._read_best_effort(response)
                return _Reply(
                    status=response.status,
                    reason=response.reason,
                    headers=response.headers,
                    body=body,
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ErrorHandler.handle_aiohttp_error(e, url=self.url)

    @staticmethod
    async def _read_best_effort(response: aiohttp.ClientResponse) -> bytes:
        try:
            return await response.read()
        except aiohttp.ClientError:
            return b""
