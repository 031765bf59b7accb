"""
Host platform capabilities consumed by the MCP service.

HostApp is the interface a host must offer; LocalApp is a small
in-process implementation used by the command line and tests.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

from pydantic import BaseModel

from mcp_service.config import validate_slice
from mcp_service.errors import ServiceNotFoundError

logger = logging.getLogger(__name__)


class ToolRegistrar(Protocol):
    """A service that accepts tools (the host's chat service)."""

    def register_tool(self, key: str, value: Any) -> Any: ...


class HostApp(Protocol):
    def get_config_slice(self, key: str, schema: type[BaseModel]) -> Any: ...

    def add_services(self, *services: Any) -> None: ...

    async def require_service(self, name: str) -> Any: ...


class LocalApp:
    """
    Minimal host: a config mapping plus a list of named services.

    Services are looked up by their ``name`` attribute.
    """

    def __init__(self, config: Mapping[str, Any] | None = None, services: list[Any] | None = None):
        self._config = dict(config or {})
        self._services: list[Any] = []
        if services:
            self.add_services(*services)

    def get_config_slice(self, key: str, schema: type[BaseModel]) -> BaseModel | None:
        return validate_slice(key, schema, self._config.get(key))

    def add_services(self, *services: Any) -> None:
        for service in services:
            self._services.append(service)
            logger.info(f"Added service: {getattr(service, 'name', type(service).__name__)}")

    async def require_service(self, name: str) -> Any:
        for service in self._services:
            if getattr(service, "name", None) == name:
                return service
        raise ServiceNotFoundError(name)

    @property
    def services(self) -> list[Any]:
        return list(self._services)
