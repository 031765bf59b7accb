import asyncio

from mcp.types import CallToolResult, TextContent

from mcp_service.bridge import as_langchain_tools, to_langchain_tool, tool_summary
from mcp_service.registry import RegisteredTool, ToolDefinition, ToolRegistry

SCHEMA = {
    "type": "object",
    "properties": {
        "query": {"type": "string", "description": "Search query"},
        "limit": {"type": "integer", "description": "Max results"},
    },
    "required": ["query"],
}


def _entry(name: str = "catalog/search", calls: list | None = None) -> RegisteredTool:
    async def execute(arguments=None, **kwargs):
        if calls is not None:
            calls.append(arguments)
        return CallToolResult(content=[TextContent(type="text", text=f"found {arguments['query']}")])

    return RegisteredTool(
        name=name,
        tool=ToolDefinition(input_schema=SCHEMA, description="Search the catalog", execute=execute),
    )


def test_to_langchain_tool_keeps_name_description_and_schema() -> None:
    lc_tool = to_langchain_tool(_entry())

    assert lc_tool.name == "catalog/search"
    assert lc_tool.description == "Search the catalog"
    assert lc_tool.args_schema == SCHEMA


def test_langchain_tool_calls_execute_and_renders_text() -> None:
    calls = []
    lc_tool = to_langchain_tool(_entry(calls=calls))

    output = asyncio.run(lc_tool.ainvoke({"query": "lamp", "limit": 2}))

    assert output == "found lamp"
    assert calls == [{"query": "lamp", "limit": 2}]


def test_as_langchain_tools_converts_a_registry() -> None:
    registry = ToolRegistry()
    registry.register_tool("a/search", _entry("a/search"))
    registry.register_tool("b/search", _entry("b/search"))

    assert [t.name for t in as_langchain_tools(registry)] == ["a/search", "b/search"]


def test_tool_summary() -> None:
    summary = tool_summary(_entry())

    assert summary.splitlines() == [
        "## Tool: catalog/search",
        "Search the catalog",
        "",
        "Parameters:",
        "  - query (string): Search query",
        "  - limit (integer, optional): Max results",
    ]
