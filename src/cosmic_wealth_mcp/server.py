"""MCP server for cosmic-wealth-mcp."""

import asyncio
import logging
import sys
from typing import Any, Optional

from mcp.server import Server
from mcp.types import Tool, TextContent

from .config import ConfigManager
from .tools.profile_tools import (
    get_profile_tools,
    handle_profile_tool,
    PROFILE_TOOL_NAMES,
)
from .tools.insight_tools import (
    get_insight_tools,
    handle_insight_tool,
    INSIGHT_TOOL_NAMES,
)

logger = logging.getLogger(__name__)

# Initialize MCP server
app = Server("cosmic-wealth-mcp")

# Global state
config: Optional[ConfigManager] = None


def init_config() -> ConfigManager:
    """Initialize the config manager (lazy singleton)."""
    global config
    if config is None:
        config = ConfigManager()
    return config


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List the enabled tools."""
    cfg = init_config()
    tools = get_profile_tools() + get_insight_tools()
    return [tool for tool in tools if cfg.is_tool_enabled(tool.name)]


@app.call_tool()
async def call_tool(name: str, arguments: Any) -> list[TextContent]:
    """Handle tool calls."""
    cfg = init_config()
    logger.debug("Tool call %s", name)

    if not cfg.is_tool_enabled(name):
        return [TextContent(type="text", text=f"Tool is disabled: {name}")]

    if name in PROFILE_TOOL_NAMES:
        return await handle_profile_tool(name, arguments, cfg)

    elif name in INSIGHT_TOOL_NAMES:
        return await handle_insight_tool(name, arguments, cfg)

    else:
        return [TextContent(type="text", text=f"Unknown tool: {name}")]


async def main():
    """Run the MCP server."""
    from mcp.server.stdio import stdio_server

    # stdout carries the protocol
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    async with stdio_server() as (read_stream, write_stream):
        await app.run(
            read_stream,
            write_stream,
            app.create_initialization_options()
        )


def run():
    """Console-script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
