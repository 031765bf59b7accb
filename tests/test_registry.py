import asyncio
import logging

import pytest

from mcp_service.registry import RegisteredTool, ToolDefinition, ToolRegistry, tool_key


def _entry(name: str, description: str = "") -> RegisteredTool:
    async def execute(arguments=None, **kwargs):
        return {"called": name, "arguments": arguments}

    return RegisteredTool(name=name, tool=ToolDefinition({"type": "object"}, description, execute))


def test_tool_key_joins_without_escaping() -> None:
    assert tool_key("serverA", "run") == "serverA/run"
    assert tool_key("a/b", "c") == tool_key("a", "b/c") == "a/b/c"


def test_last_write_wins(caplog) -> None:
    registry = ToolRegistry()
    registry.register_tool("srv/run", _entry("srv/run", "old"))

    with caplog.at_level(logging.WARNING, logger="mcp_service.registry"):
        registry.register_tool("srv/run", _entry("srv/run", "new"))

    assert len(registry) == 1
    assert registry.get("srv/run").tool.description == "new"
    assert "Replacing registered tool: srv/run" in caplog.text


def test_call_invokes_execute() -> None:
    registry = ToolRegistry()
    registry.register_tool("srv/run", _entry("srv/run"))

    assert "srv/run" in registry
    assert asyncio.run(registry.call("srv/run", {"x": 1})) == {"called": "srv/run", "arguments": {"x": 1}}


def test_call_unknown_tool() -> None:
    with pytest.raises(KeyError, match="Unknown tool"):
        asyncio.run(ToolRegistry().call("missing/tool"))
