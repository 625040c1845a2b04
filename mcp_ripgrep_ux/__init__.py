"""
mcp-ripgrep-ux - streaming ripgrep search with highlighted results

Hexagonal layout: core/ holds the domain, ports and services; adapters/
holds the process runner, executable locator and MCP handlers.
"""
__version__ = "0.1.0"
