"""
Transport layer for MCP server connections.

Three connection strategies, one per config ``type``:
  - StdioTransport: JSON-RPC over a subprocess's stdin/stdout
  - SSETransport: server-sent events endpoint
  - StreamableHTTPTransport: streamable HTTP endpoint

resolve_transport() picks and builds one. Nothing connects until the
protocol client enters ``transport.connect()``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any, AsyncIterator

import httpx
from mcp import StdioServerParameters
from mcp.client.sse import sse_client
from mcp.client.stdio import stdio_client
from mcp.client.streamable_http import create_mcp_http_client, streamable_http_client

from mcp_service.config import (
    HTTPTransportConfig,
    SSETransportConfig,
    StdioTransportConfig,
    parse_url,
)
from mcp_service.errors import UnknownTransportError

logger = logging.getLogger(__name__)

# (read_stream, write_stream) as produced by the mcp SDK clients
Streams = tuple[Any, Any]


class Transport(ABC):
    """Abstract connection strategy for an MCP server."""

    type: str = ""

    @abstractmethod
    def connect(self) -> AbstractAsyncContextManager[Streams]:
        """
        Open the connection.

        Returns an async context manager yielding the read/write
        message streams. Leaving the context closes the connection.
        """
        ...

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable target, used in log lines."""
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.describe()})"


class StdioTransport(Transport):
    """
    Subprocess transport.

    The server runs as a child process. The whole config is kept and
    turned into StdioServerParameters on connect, so pass-through
    fields like ``encoding`` reach the SDK as written.
    """

    type = "stdio"

    def __init__(self, config: StdioTransportConfig):
        self.config = config

    def server_parameters(self) -> StdioServerParameters:
        params = self.config.model_dump(exclude={"type"}, exclude_none=True)
        return StdioServerParameters(**params)

    def connect(self) -> AbstractAsyncContextManager[Streams]:
        logger.info(f"Starting stdio transport: {self.describe()}")
        return stdio_client(self.server_parameters())

    def describe(self) -> str:
        return " ".join([self.config.command, *self.config.args])


class SSETransport(Transport):
    """Server-sent events transport."""

    type = "sse"

    def __init__(self, url: httpx.URL, options: SSETransportConfig):
        self.url = url
        self.options = options

    def connect(self) -> AbstractAsyncContextManager[Streams]:
        logger.info(f"Opening SSE transport: {self.url}")
        return sse_client(
            str(self.url),
            headers=self.options.headers,
            timeout=self.options.timeout,
            sse_read_timeout=self.options.sse_read_timeout,
        )

    def describe(self) -> str:
        return str(self.url)


class StreamableHTTPTransport(Transport):
    """
    Streamable HTTP transport.

    The SDK client also yields a session-id getter; connect() drops it
    so every strategy yields the same (read, write) pair.
    """

    type = "http"

    def __init__(self, url: httpx.URL, options: HTTPTransportConfig):
        self.url = url
        self.options = options

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[Streams]:
        logger.info(f"Opening streamable HTTP transport: {self.url}")
        timeout = httpx.Timeout(self.options.timeout, read=self.options.sse_read_timeout)
        async with create_mcp_http_client(headers=self.options.headers, timeout=timeout) as http_client:
            async with streamable_http_client(
                str(self.url),
                http_client=http_client,
                terminate_on_close=self.options.terminate_on_close,
            ) as (read_stream, write_stream, _get_session_id):
                yield read_stream, write_stream

    def describe(self) -> str:
        return str(self.url)


def resolve_transport(
    config: StdioTransportConfig | SSETransportConfig | HTTPTransportConfig,
) -> Transport:
    """
    Build the connection strategy for a transport config.

    Raises:
        InvalidUrlError: sse/http config whose url is not absolute.
        UnknownTransportError: anything that is not one of the three
            config types.
    """
    if isinstance(config, StdioTransportConfig):
        return StdioTransport(config)
    elif isinstance(config, SSETransportConfig):
        return SSETransport(parse_url(config.url), config)
    elif isinstance(config, HTTPTransportConfig):
        return StreamableHTTPTransport(parse_url(config.url), config)

    raise UnknownTransportError(getattr(config, "type", None))
