"""
Bridge between registered MCP tools and LangChain.

Converts RegisteredTool entries into LangChain tools an agent can
bind to a model.

Usage:
    from mcp_service.bridge import as_langchain_tools

    tools = as_langchain_tools(registry)
    agent = create_agent(model, tools)
"""

from __future__ import annotations

from typing import Any, Iterable

from langchain_core.tools import StructuredTool

from mcp_service.client import format_tool_result
from mcp_service.registry import RegisteredTool


def to_langchain_tool(entry: RegisteredTool) -> StructuredTool:
    """
    Wrap a registered MCP tool as an async LangChain StructuredTool.

    The tool's JSON schema is passed as ``args_schema`` unchanged; the
    remote result is rendered to text with format_tool_result().
    """
    execute = entry.tool.execute

    async def _call_mcp(**kwargs: Any) -> str:
        result = await execute(kwargs)
        return format_tool_result(result)

    return StructuredTool.from_function(
        coroutine=_call_mcp,
        name=entry.name,
        description=entry.tool.description or f"MCP tool: {entry.name}",
        args_schema=entry.tool.input_schema,
    )


def as_langchain_tools(entries: Iterable[RegisteredTool]) -> list[StructuredTool]:
    """Convert every entry (e.g. a ToolRegistry) to LangChain tools."""
    return [to_langchain_tool(entry) for entry in entries]


def tool_summary(entry: RegisteredTool) -> str:
    """Generate prompt-style instructions from a tool's input schema."""
    schema = entry.tool.input_schema or {}
    params = schema.get("properties", {})
    required = set(schema.get("required", []))

    lines = [f"## Tool: {entry.name}", entry.tool.description, ""]
    if params:
        lines.append("Parameters:")
        for pname, pinfo in params.items():
            ptype = pinfo.get("type", "any")
            pdesc = pinfo.get("description", "")
            marker = "" if pname in required else ", optional"
            lines.append(f"  - {pname} ({ptype}{marker}): {pdesc}")

    return "\n".join(lines)
