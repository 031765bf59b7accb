"""Host plugin: reads the ``mcp`` config slice and registers every server."""

from __future__ import annotations

import logging

from mcp_service.config import MCPConfig
from mcp_service.host import HostApp
from mcp_service.service import MCPService

logger = logging.getLogger(__name__)

name = "mcp-service"
version = "0.1.0"
description = "MCP (Model Context Protocol) tool servers for chat agents"


async def install(app: HostApp) -> MCPService | None:
    """
    Install the MCP service into a host app.

    Without an ``mcp`` section nothing is installed. Otherwise the
    service is added to the app and each configured server is
    registered in order; the first failure propagates.
    """
    config = app.get_config_slice("mcp", MCPConfig)
    if config is None:
        logger.info("No mcp configuration, skipping MCP service")
        return None

    service = MCPService()
    app.add_services(service)

    for server_name, transport in config.transports.items():
        await service.register(server_name, transport, app)

    return service
