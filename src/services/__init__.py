"""MCP service layer: tool registry and tool handlers."""
