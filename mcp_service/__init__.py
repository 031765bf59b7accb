"""
MCP Service: publishes tools from MCP servers into a chat host.

Architecture:
    ┌──────────────┐  stdio / sse / http  ┌──────────────┐
    │  MCPService  │ ──────────────────── │  MCP Server  │
    │  (adapter)   │   MCP (JSON-RPC)     │   (remote)   │
    └──────┬───────┘                      └──────────────┘
           │ register_tool("<server>/<tool>", ...)
    ┌──────┴───────┐
    │ Chat service │
    │ (host)       │
    └──────────────┘

Each configured server gets a transport picked from its ``type``
(resolve_transport), a protocol client over that transport
(create_mcp_client), and its tools published into the host's chat
service under ``<server>/<tool>`` keys.

The LangChain bridge turns published tools into StructuredTools.
"""

from mcp_service.errors import (
    ConfigurationError,
    InvalidUrlError,
    MCPServiceError,
    ServiceNotFoundError,
    UnknownTransportError,
)
from mcp_service.config import (
    HTTPTransportConfig,
    MCPConfig,
    SSETransportConfig,
    StdioTransportConfig,
    TransportConfig,
)
from mcp_service.registry import RegisteredTool, ToolDefinition, ToolRegistry
from mcp_service.transport import resolve_transport
from mcp_service.service import MCPService


# Bridge requires langchain: lazy import keeps the core importable without it
def to_langchain_tool(*args, **kwargs):
    from mcp_service.bridge import to_langchain_tool as _impl
    return _impl(*args, **kwargs)


def as_langchain_tools(*args, **kwargs):
    from mcp_service.bridge import as_langchain_tools as _impl
    return _impl(*args, **kwargs)


__all__ = [
    "ConfigurationError",
    "HTTPTransportConfig",
    "InvalidUrlError",
    "MCPConfig",
    "MCPService",
    "MCPServiceError",
    "RegisteredTool",
    "SSETransportConfig",
    "ServiceNotFoundError",
    "StdioTransportConfig",
    "ToolDefinition",
    "ToolRegistry",
    "TransportConfig",
    "UnknownTransportError",
    "as_langchain_tools",
    "resolve_transport",
    "to_langchain_tool",
]
