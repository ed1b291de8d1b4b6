"""MCP server entry point exposing the node accessor tools."""
from __future__ import annotations

import argparse
import logging

from fastmcp import FastMCP

from node_generator.config import cfg
from services.tools import register_all_tools

logger = logging.getLogger("node_generator.server")

SERVER_NAME = "godot-node-generator"
INSTRUCTIONS = (
    "Generates typed C# accessors for Godot 4 .NET scenes. Use inspect_scene to "
    "see a scene's node tree, then generate_node_accessors to produce the "
    "<ClassName>.g.cs partial class."
)


def create_mcp_server() -> FastMCP:
    mcp = FastMCP(name=SERVER_NAME, instructions=INSTRUCTIONS)
    register_all_tools(mcp)
    return mcp


def _run_mcp(mcp, transport: str, **kwargs) -> None:
    mcp.run(transport=transport, **kwargs)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Godot node accessor MCP server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport to serve on (default: stdio).",
    )
    parser.add_argument("--host", default="127.0.0.1", help="HTTP host (http transport only).")
    parser.add_argument("--port", type=int, default=8080, help="HTTP port (http transport only).")
    args = parser.parse_args(argv)

    logging.basicConfig(level=cfg.log_level, format="%(name)s %(levelname)s: %(message)s")

    mcp = create_mcp_server()
    logger.info("Starting %s over %s", SERVER_NAME, args.transport)
    if args.transport == "http":
        _run_mcp(mcp, transport="http", host=args.host, port=args.port)
    else:
        _run_mcp(mcp, transport="stdio")


if __name__ == "__main__":
    main()
