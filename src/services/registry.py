"""Decorator registry collecting MCP tools before a server exists.

Tool modules decorate their functions at import time; the server mounts
everything collected here once it is created.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

_tool_registry: list[dict[str, Any]] = []


def node_generator_tool(
    name: str | None = None,
    description: str | None = None,
    **kwargs: Any,
) -> Callable[[Callable], Callable]:
    """Register the decorated coroutine as an MCP tool.

    Extra keyword arguments (annotations, tags, ...) are passed through to
    ``FastMCP.tool`` when the tool is mounted.
    """
    def decorator(func: Callable) -> Callable:
        tool_name = name or func.__name__
        if any(entry["name"] == tool_name for entry in _tool_registry):
            logger.debug("Tool %s already registered; keeping the first", tool_name)
            return func
        _tool_registry.append({
            "func": func,
            "name": tool_name,
            "description": description,
            "kwargs": kwargs,
        })
        return func

    return decorator


def get_registered_tools() -> list[dict[str, Any]]:
    return list(_tool_registry)


def clear_tool_registry() -> None:
    _tool_registry.clear()
