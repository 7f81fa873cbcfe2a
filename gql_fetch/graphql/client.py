"""
GraphQL client implementation.

This module provides the public client: thin query/mutation entry points on
top of the operation dispatcher, plus HTTP session lifecycle management.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import aiohttp

from ..cancel import CancelToken
from ..config.models import ClientConfig
from .dispatcher import OperationDispatcher
from .models import OperationKind
from .schema import OperationDescriptor

logger = logging.getLogger(__name__)


class GraphQLClient:
    """
    GraphQL client targeting a single endpoint.

    The client holds no per-call state and can be shared by concurrent tasks.
    Without a caller-supplied session it creates its own aiohttp session on
    first use and closes it in ``close()``.

    Examples:
        Basic query:
        ```python
        viewer = OperationDescriptor(Selection(
            Field("viewer", "User", nullable=False, selection=Selection(
                Field("login", "String", nullable=False),
            )),
        ))

        async with GraphQLClient("https://api.github.com/graphql") as client:
            await client.query(viewer)
            print(viewer["viewer"]["login"])
        ```

        Retrying on secondary rate limits:
        ```python
        await client.query_with_retry(search, {"q": "graphql"}, timeout=120, retry_count=5)
        ```
    """

    def __init__(
        self,
        url: str,
        session: Optional[aiohttp.ClientSession] = None,
        config: Optional[ClientConfig] = None,
    ):
        """
        Initialize GraphQL client.

        Args:
            url: GraphQL endpoint URL
            session: Optional shared aiohttp session (not closed by the client)
            config: Optional client configuration; its endpoint is replaced by ``url``
        """
        if config is None:
            config = ClientConfig(endpoint=url)
        elif config.endpoint != url:
            config = config.model_copy(update={"endpoint": url})

        self._url = url
        self._config = config
        self._session = session
        self._owns_session = session is None
        self._dispatcher = OperationDispatcher(
            url,
            self._get_session,
            headers=config.headers,
            body_snippet_limit=config.body_snippet_limit,
        )

    @classmethod
    def from_config(
        cls, config: ClientConfig, session: Optional[aiohttp.ClientSession] = None
    ) -> "GraphQLClient":
        """Create a client for ``config.endpoint``."""
        return cls(config.endpoint, session=session, config=config)

    @property
    def url(self) -> str:
        """GraphQL endpoint URL."""
        return self._url

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> "GraphQLClient":
        """Async context manager entry."""
        await self._get_session()
        return self

    async def __aexit__(
        self,
        _exc_type: Optional[type[BaseException]],
        _exc_val: Optional[BaseException],
        _exc_tb: Optional[Any],
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Return the HTTP session, creating the owned one on first use."""
        if self._session is None or (self._owns_session and self._session.closed):
            timeout = aiohttp.ClientTimeout(
                total=self._config.request_timeout,
                connect=self._config.connect_timeout,
            )
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                headers={"User-Agent": self._config.user_agent},
                raise_for_status=False,
            )
            self._owns_session = True
            logger.debug("Created HTTP session for %s", self._url)
        return self._session

    async def close(self) -> None:
        """Close the owned HTTP session; a caller-supplied session is left open."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None

    async def query(
        self,
        descriptor: OperationDescriptor,
        variables: Optional[Dict[str, Any]] = None,
        cancel: Optional[CancelToken] = None,
    ) -> None:
        """
        Execute a single GraphQL query, populating ``descriptor``.

        A 403 secondary rate limit response with Retry-After is retried once.

        Args:
            descriptor: Response shape to select and bind
            variables: Query variables
            cancel: Optional cancel token
        """
        await self._dispatcher.do(
            OperationKind.QUERY, descriptor, variables, timeout=0, retry_count=1, cancel=cancel
        )

    async def query_with_retry(
        self,
        descriptor: OperationDescriptor,
        variables: Optional[Dict[str, Any]] = None,
        timeout: int = 0,
        retry_count: int = 1,
        cancel: Optional[CancelToken] = None,
    ) -> None:
        """
        Execute a GraphQL query with tunable secondary rate limit retries.

        Args:
            descriptor: Response shape to select and bind
            variables: Query variables
            timeout: Total retry budget in seconds (0 disables it)
            retry_count: Retries allowed after the first attempt
            cancel: Optional cancel token
        """
        await self._dispatcher.do(
            OperationKind.QUERY,
            descriptor,
            variables,
            timeout=timeout,
            retry_count=retry_count,
            cancel=cancel,
        )

    async def mutate(
        self,
        descriptor: OperationDescriptor,
        variables: Optional[Dict[str, Any]] = None,
        cancel: Optional[CancelToken] = None,
    ) -> None:
        """
        Execute a single GraphQL mutation, populating ``descriptor``.

        Mutations are sent exactly once; they are never retried.
        """
        await self._dispatcher.do(
            OperationKind.MUTATION, descriptor, variables, timeout=0, retry_count=0, cancel=cancel
        )
