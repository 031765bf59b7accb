"""
Error taxonomy for MCP server registration.

These are the errors this package raises itself. Failures from the MCP
SDK, the network or the host's registry pass through register()
unchanged.
"""

from __future__ import annotations

from typing import Any


class MCPServiceError(Exception):
    """Base class for all mcp_service errors."""


class UnknownTransportError(MCPServiceError, ValueError):
    """Transport config carries a ``type`` that is not stdio, sse or http."""

    def __init__(self, transport_type: Any):
        self.transport_type = transport_type
        super().__init__(f"Unknown connection type {transport_type}")


class InvalidUrlError(MCPServiceError, ValueError):
    """An sse/http transport URL is not a well-formed absolute URL."""

    def __init__(self, url: Any):
        self.url = url
        super().__init__(f"Invalid MCP server URL: {url!r}")


class ConfigurationError(MCPServiceError):
    """Configuration file or config slice could not be loaded."""


class ServiceNotFoundError(MCPServiceError, LookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Service not found: {name}")
