"""
Connect to configured MCP servers and list (or call) their tools.

Usage:
    # Register every server in the config and list the tools
    python -m mcp_service --config mcp.json

    # Call one tool after registration
    python -m mcp_service --config mcp.json --call demo/echo --arguments '{"text": "hi"}'

Config file:
    {
      "mcp": {
        "transports": {
          "demo": {"type": "http", "url": "http://localhost:3000/mcp"},
          "files": {"type": "stdio", "command": "npx",
                    "args": ["-y", "@modelcontextprotocol/server-filesystem", "."]}
        }
      }
    }
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from mcp_service import plugin
from mcp_service.bridge import tool_summary
from mcp_service.client import format_tool_result
from mcp_service.config import load_config
from mcp_service.host import LocalApp
from mcp_service.registry import ToolRegistry
from mcp_service.service import MCPService

logger = logging.getLogger(__name__)


async def run(config_path: str, call: str | None = None, arguments: dict | None = None) -> int:
    registry = ToolRegistry()
    app = LocalApp(load_config(config_path), services=[registry])

    try:
        service = await plugin.install(app)
        if service is None:
            print("No 'mcp' section in config; nothing to do.")
            return 0

        print(f"\nRegistered {len(registry)} tools from {len(service.list_servers())} servers:\n")
        for entry in registry:
            print(tool_summary(entry))
            print()

        if call:
            if call not in registry:
                print(f"Error: tool '{call}' is not registered.")
                return 1
            logger.info(f"Calling {call} with {arguments}")
            result = await registry.call(call, arguments)
            print("=" * 60)
            print(format_tool_result(result))
            print("=" * 60)
        return 0
    finally:
        # install() may fail part way; close whatever it opened
        for installed in app.services:
            if isinstance(installed, MCPService):
                await installed.aclose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m mcp_service",
        description="Register tools from MCP servers and optionally call one.",
    )
    parser.add_argument("--config", "-c", required=True, help="JSON config file with an 'mcp' section")
    parser.add_argument("--call", type=str, default=None, help="Registered tool key to call, e.g. demo/echo")
    parser.add_argument("--arguments", "-a", type=str, default="{}", help="JSON object of tool arguments")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug output")

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        arguments = json.loads(args.arguments)
    except json.JSONDecodeError as e:
        parser.error(f"--arguments is not valid JSON: {e}")
    if not isinstance(arguments, dict):
        parser.error("--arguments must be a JSON object")

    try:
        return asyncio.run(run(args.config, args.call, arguments))
    except Exception as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
