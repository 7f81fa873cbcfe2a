"""
Tests for cancel tokens.
"""

import asyncio

import pytest

from gql_fetch.cancel import CancelToken, run_cancellable
from gql_fetch.exceptions import OperationCancelledError, TransportError


class TestCancelToken:
    """Test CancelToken state."""

    def test_initial_state(self):
        token = CancelToken()

        assert not token.cancelled
        assert token.reason is None
        assert token.remaining() is None

    def test_first_reason_wins(self):
        token = CancelToken()

        token.cancel("first")
        token.cancel("second")

        assert token.cancelled
        assert token.reason == "first"

    def test_expired_deadline(self):
        token = CancelToken(timeout=0)

        assert token.cancelled
        assert token.reason == "deadline exceeded"
        assert token.remaining() == 0.0

    @pytest.mark.asyncio
    async def test_wait_returns_on_cancel(self):
        token = CancelToken()
        asyncio.get_running_loop().call_later(0.01, token.cancel, "stop")

        await asyncio.wait_for(token.wait(), timeout=1)

        assert token.reason == "stop"

    @pytest.mark.asyncio
    async def test_wait_returns_on_deadline(self):
        token = CancelToken(timeout=0.01)

        await asyncio.wait_for(token.wait(), timeout=1)

        assert token.cancelled
        assert token.reason == "deadline exceeded"


class TestRunCancellable:
    """Test racing work against a token."""

    @pytest.mark.asyncio
    async def test_without_token(self):
        async def work():
            return 42

        assert await run_cancellable(work(), None) == 42

    @pytest.mark.asyncio
    async def test_work_finishes_first(self):
        async def work():
            return "done"

        assert await run_cancellable(work(), CancelToken()) == "done"

    @pytest.mark.asyncio
    async def test_work_exception_propagates(self):
        async def work():
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            await run_cancellable(work(), CancelToken())

    @pytest.mark.asyncio
    async def test_cancel_interrupts_work(self):
        token = CancelToken()
        started = asyncio.Event()
        finished = False

        async def work():
            nonlocal finished
            started.set()
            await asyncio.sleep(60)
            finished = True

        async def cancel_when_started():
            await started.wait()
            token.cancel("user abort")

        canceller = asyncio.ensure_future(cancel_when_started())
        with pytest.raises(OperationCancelledError, match="user abort") as exc_info:
            await asyncio.wait_for(run_cancellable(work(), token, url="https://x/graphql"), timeout=5)
        await canceller

        assert not finished
        assert isinstance(exc_info.value, TransportError)
        assert exc_info.value.url == "https://x/graphql"

    @pytest.mark.asyncio
    async def test_already_cancelled_token_skips_work(self):
        token = CancelToken()
        token.cancel()
        ran = False

        async def work():
            nonlocal ran
            ran = True

        with pytest.raises(OperationCancelledError):
            await run_cancellable(work(), token)

        assert not ran
