from .responses import MCPResponse

__all__ = ["MCPResponse"]
