"""
Shared test fixtures and configuration for the gql_fetch test suite.
"""

import json
from typing import Any, AsyncGenerator, Dict, List
from unittest.mock import AsyncMock

import aiohttp
import pytest
import pytest_asyncio
from aioresponses import aioresponses
from yarl import URL

from gql_fetch.graphql import (
    Field,
    OperationDescriptor,
    OperationDispatcher,
    Selection,
)

GRAPHQL_URL = "https://api.example.com/graphql"


@pytest.fixture
def graphql_url() -> str:
    """Endpoint used by the test suite."""
    return GRAPHQL_URL


@pytest.fixture
def mock_aiohttp():
    """Mock aiohttp responses for testing."""
    with aioresponses() as m:
        yield m


@pytest_asyncio.fixture
async def session() -> AsyncGenerator[aiohttp.ClientSession, None]:
    """Plain aiohttp session, closed after the test."""
    async with aiohttp.ClientSession() as s:
        yield s


@pytest.fixture
def fake_sleep() -> AsyncMock:
    """Sleep replacement recording requested delays without waiting."""
    return AsyncMock(return_value=None)


@pytest.fixture
def dispatcher(session: aiohttp.ClientSession, fake_sleep: AsyncMock) -> OperationDispatcher:
    """Dispatcher bound to the test endpoint with a non-blocking sleep."""

    async def provider() -> aiohttp.ClientSession:
        return session

    return OperationDispatcher(GRAPHQL_URL, provider, sleep=fake_sleep)


@pytest.fixture
def viewer_descriptor() -> OperationDescriptor:
    """Descriptor for ``{viewer{login}}``."""
    return OperationDescriptor(
        Selection(
            Field(
                "viewer",
                "User",
                nullable=False,
                selection=Selection(Field("login", "String", nullable=False)),
            ),
        )
    )


def _sent_requests(mock: aioresponses, url: str = GRAPHQL_URL) -> List[Any]:
    """Requests recorded by aioresponses for a POST to ``url``."""
    return mock.requests.get(("POST", URL(url)), [])


def _sent_bodies(mock: aioresponses, url: str = GRAPHQL_URL) -> List[Dict[str, Any]]:
    """Decoded JSON bodies of the recorded POST requests."""
    return [json.loads(call.kwargs["data"]) for call in _sent_requests(mock, url)]


@pytest.fixture
def sent_requests():
    """Accessor for requests recorded by aioresponses."""
    return _sent_requests


@pytest.fixture
def sent_bodies():
    """Accessor for decoded JSON request bodies."""
    return _sent_bodies
