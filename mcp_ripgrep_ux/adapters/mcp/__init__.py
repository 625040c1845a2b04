"""
MCP Adapters

Tool schemas and handlers that expose directory search as MCP tools.
"""
from .tool_definitions import TOOL_SCHEMAS
from .handlers import MCPHandlers

__all__ = ["TOOL_SCHEMAS", "MCPHandlers"]
