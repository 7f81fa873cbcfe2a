"""
Cancellation tokens for GraphQL operations.

A CancelToken is passed into an operation and observed by both the network
transmit and the rate-limit sleep. Cancelling the token ends the operation
with OperationCancelledError.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Awaitable, Optional, TypeVar

from .exceptions import OperationCancelledError

T = TypeVar("T")


class CancelToken:
    """
    Cooperative cancellation signal with an optional deadline.

    Examples:
        ```python
        token = CancelToken(timeout=10.0)
        await client.query(descriptor, cancel=token)

        # elsewhere
        token.cancel("user aborted")
        ```
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        """
        Initialize cancel token.

        Args:
            timeout: Seconds after which the token cancels itself
        """
        self._event = asyncio.Event()
        self._reason: Optional[str] = None
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    @property
    def cancelled(self) -> bool:
        """Whether the token has been cancelled or its deadline has passed."""
        if not self._event.is_set() and self._deadline is not None:
            if time.monotonic() >= self._deadline:
                self.cancel("deadline exceeded")
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: str = "cancelled") -> None:
        """Cancel the token; the first reason wins."""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    def remaining(self) -> Optional[float]:
        """Seconds left until the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    async def wait(self) -> None:
        """Wait until the token is cancelled."""
        if self.cancelled:
            return
        remaining = self.remaining()
        if remaining is None:
            await self._event.wait()
            return
        try:
            await asyncio.wait_for(self._event.wait(), timeout=remaining)
        except asyncio.TimeoutError:
            self.cancel("deadline exceeded")


async def run_cancellable(
    awaitable: Awaitable[T],
    token: Optional[CancelToken],
    url: Optional[str] = None,
) -> T:
    """
    Await ``awaitable`` unless ``token`` fires first.

    Args:
        awaitable: Work to run
        token: Cancel token to observe (None awaits directly)
        url: Endpoint for error reporting

    Returns:
        Result of the awaitable

    Raises:
        OperationCancelledError: If the token fires before the work completes
    """
    if token is None:
        return await awaitable

    if token.cancelled:
        _close(awaitable)
        raise OperationCancelledError(f"Operation cancelled: {token.reason}", url=url)

    work: "asyncio.Future[T]" = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(token.wait())
    try:
        await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        if not work.done():
            work.cancel()
        if not waiter.done():
            waiter.cancel()

    if work.done() and not work.cancelled():
        return work.result()

    await asyncio.gather(work, return_exceptions=True)
    raise OperationCancelledError(f"Operation cancelled: {token.reason}", url=url)


def _close(awaitable: Any) -> None:
    # Close un-awaited coroutines to avoid "never awaited" warnings
    close = getattr(awaitable, "close", None)
    if close is not None:
        close()
