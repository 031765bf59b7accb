"""
MCP Service: connects to MCP servers and publishes their tools.

The service is the bridge between a host's chat tool registry and
remote MCP servers. For each configured server it opens a client,
lists the server's tools, and registers every tool under
``<server>/<tool>``.

Usage:
    service = MCPService()

    # Connect and publish every tool of one server
    await service.register(
        "calculator",
        {"type": "stdio", "command": "python", "args": ["-m", "calculator_server"]},
        app,
    )

    # Tools are now in the chat service, e.g. "calculator/calculate"

    # Close every client on shutdown
    await service.aclose()
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from typing import Any, Awaitable, Callable

from mcp_service.client import MCPClient, create_mcp_client
from mcp_service.config import (
    HTTPTransportConfig,
    SSETransportConfig,
    StdioTransportConfig,
    coerce_transport_config,
)
from mcp_service.host import HostApp, ToolRegistrar
from mcp_service.registry import CHAT_SERVICE, RegisteredTool, ToolDefinition, tool_key
from mcp_service.transport import Transport, resolve_transport

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Transport], Awaitable[MCPClient]]


class MCPService:
    """
    Registers tools from MCP servers into a host's chat service.

    Responsibilities:
    - Pick a transport from each server's config
    - Open a protocol client and discover tools
    - Publish tools under ``<server>/<tool>`` keys
    - Close the clients it opened on shutdown

    Clients stay open after register() returns: the published execute
    callables talk to the server through them.
    """

    name = "MCPService"
    description = "Service for MCP (Model Context Protocol) servers"

    def __init__(self, client_factory: ClientFactory | None = None):
        self._client_factory = client_factory or create_mcp_client
        self._clients: list[tuple[str, MCPClient]] = []

    async def register(
        self,
        name: str,
        config: StdioTransportConfig | SSETransportConfig | HTTPTransportConfig | Mapping[str, Any],
        host: HostApp,
    ) -> None:
        """
        Connect to one server and publish all of its tools.

        Args:
            name: Server name, used verbatim as the key prefix
            config: Transport config (model or raw mapping)
            host: Host app providing the chat service

        Publication is not atomic: if the registry rejects a tool,
        tools published before it stay published and the rest are
        skipped. Failures from connecting, listing tools or the
        registry are logged and re-raised as they are.
        """
        transport = resolve_transport(coerce_transport_config(config))
        chat_service: ToolRegistrar = await host.require_service(CHAT_SERVICE)

        try:
            client = await self._client_factory(transport)
        except Exception as e:
            logger.error(f"Failed to connect to MCP server {name}: {e}")
            raise
        self._clients.append((name, client))

        try:
            tools = await client.tools()
        except Exception as e:
            logger.error(f"Failed to list tools from MCP server {name}: {e}")
            raise

        for tool_name, tool in tools.items():
            key = tool_key(name, tool_name)
            entry = RegisteredTool(
                name=key,
                tool=ToolDefinition(
                    input_schema=tool.input_schema,
                    description=tool.description,
                    execute=tool.execute,
                ),
            )
            try:
                result = chat_service.register_tool(key, entry)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Failed to register tool {key}: {e}")
                raise

        logger.info(f"Registered MCP server {name}: tools={list(tools)}")

    def list_servers(self) -> list[str]:
        """Names of servers with an open client, in registration order."""
        return [name for name, client in self._clients if not client.closed]

    async def aclose(self) -> None:
        """
        Close every client opened by register(), newest first.

        Must run in the same task that called register(); the SDK's
        transports refuse to be torn down from another task.
        """
        while self._clients:
            name, client = self._clients.pop()
            await client.aclose()
            logger.info(f"Stopped {name}")
