"""
Registered tool records and an in-memory tool registry.

RegisteredTool is what gets published into a host's tool registry:
the composite key as ``name`` plus the remote tool's schema,
description and execute callable, copied as-is.

ToolRegistry is a minimal host-side registry ("ChatService") used by
LocalApp and the command line. Real hosts bring their own; anything
with a ``register_tool(key, value)`` method will do.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterator

logger = logging.getLogger(__name__)

CHAT_SERVICE = "ChatService"


@dataclass
class ToolDefinition:
    input_schema: dict[str, Any]
    description: str
    execute: Callable[..., Awaitable[Any]]


@dataclass
class RegisteredTool:
    name: str
    tool: ToolDefinition


def tool_key(server_name: str, tool_name: str) -> str:
    """
    Composite registry key ``<server>/<tool>``.

    Neither part is escaped: a "/" inside either name makes keys
    ambiguous, e.g. ("a/b", "c") and ("a", "b/c") both give "a/b/c".
    """
    return f"{server_name}/{tool_name}"


class ToolRegistry:
    """
    In-memory chat tool registry.

    Keys are composite tool keys; registering an existing key
    replaces the previous entry (last write wins).
    """

    name = CHAT_SERVICE
    description = "In-memory registry of chat tools"

    def __init__(self):
        self._tools: dict[str, RegisteredTool] = {}

    def register_tool(self, key: str, value: RegisteredTool) -> None:
        if key in self._tools:
            logger.warning(f"Replacing registered tool: {key}")
        self._tools[key] = value
        logger.debug(f"Registered tool: {key}")

    def get(self, key: str) -> RegisteredTool | None:
        return self._tools.get(key)

    def keys(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, key: object) -> bool:
        return key in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[RegisteredTool]:
        return iter(list(self._tools.values()))

    async def call(self, key: str, arguments: dict[str, Any] | None = None) -> Any:
        """Invoke a registered tool by key."""
        entry = self._tools.get(key)
        if entry is None:
            raise KeyError(f"Unknown tool: '{key}'. Available: {self.keys()}")
        return await entry.tool.execute(arguments or {})
