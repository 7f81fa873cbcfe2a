"""
Secondary rate limit retry policy.

Some GraphQL servers (GitHub among them) signal a secondary rate limit with
HTTP 403 and a ``Retry-After`` header holding the number of seconds to wait.
This module decides, per attempt, whether the retry budget still allows
another request and how long to wait before it.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Mapping, Optional

from ..exceptions import EncodingError, RateLimitTimeoutError
from .models import RetryState

logger = logging.getLogger(__name__)

HTTP_OK = 200
HTTP_FORBIDDEN = 403


class RateLimitRetryPolicy:
    """
    Retry policy for HTTP 403 + Retry-After responses.

    Attempts run for ``n`` in ``0..retry_count`` inclusive. The timeout budget
    is a single deadline fixed when the dispatch starts; each attempt checks it
    before transmitting.
    """

    def __init__(
        self,
        timeout: int = 0,
        retry_count: int = 0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize retry policy.

        Args:
            timeout: Total retry budget in seconds (0 disables the budget)
            retry_count: Retries allowed after the first attempt
            clock: Monotonic clock, overridable in tests
        """
        if timeout < 0:
            raise ValueError("timeout must be >= 0")
        if retry_count < 0:
            raise ValueError("retry_count must be >= 0")
        self.timeout = timeout
        self.retry_count = retry_count
        self._clock = clock

    def start(self) -> RetryState:
        """Create the retry state for one dispatch, fixing the deadline."""
        deadline = self._clock() + self.timeout if self.timeout > 0 else None
        return RetryState(
            attempts_remaining=self.retry_count + 1,
            timeout_budget_seconds=self.timeout,
            deadline=deadline,
        )

    def check_budget(self, state: RetryState, url: str) -> None:
        """
        Check the timeout budget before an attempt.

        Raises:
            RateLimitTimeoutError: If the deadline has passed
        """
        if state.deadline is not None and self._clock() >= state.deadline:
            raise RateLimitTimeoutError(
                f"timed out retrying with secondary rate limit reached on {url}",
                url=url,
                timeout_value=state.timeout_budget_seconds,
            )

    def record_attempt(self, state: RetryState) -> None:
        state.attempts_remaining -= 1

    def retry_delay(
        self, state: RetryState, status: int, headers: Mapping[str, str]
    ) -> Optional[int]:
        """
        Decide whether to retry after a response.

        Args:
            state: Retry state of the current dispatch
            status: HTTP status of the response
            headers: Response headers (case-insensitive mapping)

        Returns:
            Seconds to sleep before the next attempt, or None to stop and use
            this response as final

        Raises:
            EncodingError: If Retry-After is present but not an integer
        """
        if status != HTTP_FORBIDDEN:
            return None

        retry_after = parse_retry_after(headers)
        if retry_after is None:
            return None

        if state.attempts_remaining <= 0:
            logger.warning(
                "Secondary rate limit reached, no retries left (Retry-After: %ss)", retry_after
            )
            return None

        return retry_after


def parse_retry_after(headers: Mapping[str, str]) -> Optional[int]:
    """
    Parse the Retry-After header as whole seconds.

    Returns:
        Seconds to wait, or None if the header is absent or empty

    Raises:
        EncodingError: If the value is not a plain non-negative integer
    """
    value = headers.get("Retry-After")
    if value is None or value == "":
        return None
    text = value.strip()
    # int() alone would also accept "+5", "1_0" and non-ASCII digits
    if not (text.isascii() and text.isdigit()):
        raise EncodingError(f"invalid Retry-After header value: {value!r}", retry_after=value)
    return int(text)
