"""
Protocol client over an MCP transport.

Wraps the SDK's ClientSession behind the two calls the registration
flow needs: tools() for discovery, and a per-tool execute() callable
that performs the remote call.
"""

from __future__ import annotations

import json
import logging
from contextlib import AsyncExitStack
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from mcp import ClientSession
from mcp.types import CallToolResult, PaginatedRequestParams

from mcp_service.transport import Transport

logger = logging.getLogger(__name__)


@dataclass
class ToolDescriptor:
    """One remote tool as discovered from a server."""
    name: str
    input_schema: dict[str, Any]
    description: str
    execute: Callable[..., Awaitable[Any]]


class MCPClient:
    """
    An initialized session on one MCP server.

    The client holds the transport open until aclose(). Tool execute
    callables go through this session, so closing the client also
    disables every tool discovered from it.
    """

    def __init__(self, session: ClientSession, exit_stack: AsyncExitStack, transport: Transport):
        self._session = session
        self._exit_stack = exit_stack
        self.transport = transport
        self._closed = False

    async def tools(self) -> dict[str, ToolDescriptor]:
        """Fetch the server's tool catalog, keyed by tool name.

        Follows ``nextCursor`` until the server reports the last page.
        """
        tools: dict[str, ToolDescriptor] = {}
        cursor = None
        while True:
            params = PaginatedRequestParams(cursor=cursor) if cursor else None
            result = await self._session.list_tools(params=params)
            for tool in result.tools:
                tools[tool.name] = ToolDescriptor(
                    name=tool.name,
                    input_schema=tool.inputSchema,
                    description=tool.description or "",
                    execute=self._executor(tool.name),
                )
            cursor = result.nextCursor
            if not cursor:
                return tools

    def _executor(self, tool_name: str) -> Callable[..., Awaitable[CallToolResult]]:
        async def execute(arguments: dict[str, Any] | None = None, **kwargs: Any) -> CallToolResult:
            params = dict(arguments or {}, **kwargs)
            logger.debug(f"Calling {tool_name} on {self.transport.describe()}")
            return await self._session.call_tool(tool_name, params)

        execute.__name__ = tool_name
        return execute

    @property
    def closed(self) -> bool:
        return self._closed

    async def aclose(self) -> None:
        """Close the session and the underlying transport."""
        if self._closed:
            return
        self._closed = True
        await self._exit_stack.aclose()
        logger.info(f"Closed MCP client: {self.transport.describe()}")


async def create_mcp_client(transport: Transport) -> MCPClient:
    """
    Connect the transport, open a session and run the handshake.

    On failure everything entered so far is unwound before the error
    propagates.
    """
    exit_stack = AsyncExitStack()
    try:
        read_stream, write_stream = await exit_stack.enter_async_context(transport.connect())
        session = await exit_stack.enter_async_context(ClientSession(read_stream, write_stream))
        init = await session.initialize()
    except BaseException:
        await exit_stack.aclose()
        raise

    server = init.serverInfo
    logger.info(
        f"Connected to MCP server {server.name} {server.version} "
        f"via {transport.type}: {transport.describe()}"
    )
    return MCPClient(session, exit_stack, transport)


def format_tool_result(result: Any) -> str:
    """Render a tool call result as text for a language model."""
    if isinstance(result, str):
        return result

    structured = getattr(result, "structuredContent", None)
    if structured:
        return json.dumps(structured, ensure_ascii=True)

    contents = getattr(result, "content", None)
    if contents is None:
        return "" if result is None else str(result)

    parts = []
    for item in contents:
        text = getattr(item, "text", None)
        if text:
            parts.append(text)
        else:
            parts.append(str(item))
    return "\n".join(parts)
