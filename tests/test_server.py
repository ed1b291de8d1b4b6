"""Tests for MCP server wiring."""
import pytest

import server
from services.tools import register_all_tools


class DummyMCP:
    def __init__(self) -> None:
        self.tools = {}
        self.run_kwargs = {}

    def tool(self, name=None, description=None, **kwargs):
        def decorator(func):
            self.tools[name] = {"func": func, "description": description, **kwargs}
            return func
        return decorator

    def run(self, **kwargs):
        self.run_kwargs = kwargs


def test_register_all_tools_mounts_tools():
    mcp = DummyMCP()
    names = register_all_tools(mcp)
    assert "generate_node_accessors" in names
    assert "inspect_scene" in names
    assert mcp.tools["inspect_scene"]["description"]
    assert mcp.tools["generate_node_accessors"]["annotations"].readOnlyHint is True


def test_main_runs_stdio(monkeypatch: pytest.MonkeyPatch):
    mcp = DummyMCP()
    monkeypatch.setattr(server, "create_mcp_server", lambda: mcp)
    server.main([])
    assert mcp.run_kwargs == {"transport": "stdio"}


def test_main_runs_http(monkeypatch: pytest.MonkeyPatch):
    mcp = DummyMCP()
    monkeypatch.setattr(server, "create_mcp_server", lambda: mcp)
    server.main(["--transport", "http", "--port", "9000"])
    assert mcp.run_kwargs == {"transport": "http", "host": "127.0.0.1", "port": 9000}


def test_create_mcp_server_returns_fastmcp():
    from fastmcp import FastMCP

    assert isinstance(server.create_mcp_server(), FastMCP)
