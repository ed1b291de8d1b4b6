"""MCP tool modules and the hook that mounts them on a server."""
from __future__ import annotations

import importlib
import logging
import pkgutil

from fastmcp import FastMCP

from services.registry import get_registered_tools

logger = logging.getLogger(__name__)


def _import_tool_modules() -> None:
    for module in pkgutil.iter_modules(__path__):
        if not module.name.startswith("_"):
            importlib.import_module(f"{__name__}.{module.name}")


def register_all_tools(mcp: FastMCP) -> list[str]:
    """Import every tool module and mount its registered tools on ``mcp``."""
    _import_tool_modules()
    names = []
    for entry in get_registered_tools():
        mcp.tool(name=entry["name"], description=entry["description"], **entry["kwargs"])(entry["func"])
        names.append(entry["name"])
    logger.info("Registered %d tools: %s", len(names), ", ".join(names))
    return names
