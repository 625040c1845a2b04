"""
ripgrep-ux MCP Server

MCP delivery layer - wraps the handlers as FastMCP tools over stdio or
streamable HTTP. Separation of concerns: this file only handles MCP protocol.
"""
import argparse
import logging
import os
from typing import Optional

from mcp.server.fastmcp import FastMCP

from . import config
from .adapters.mcp import MCPHandlers
from .container import Container
from .logging_setup import configure_logging

logger = logging.getLogger(__name__)

# Initialize MCP server with HTTP config
mcp = FastMCP("ripgrep-ux", host=config.get_host(), port=config.get_port())

handlers = MCPHandlers(Container())


@mcp.tool()
async def search_directory(
    pattern: str,
    directory: Optional[str] = None,
    case_sensitive: bool = False,
    include_hidden: bool = False,
    use_regex: bool = True,
    max_results: Optional[int] = None
) -> dict:
    """
    Search a directory tree with ripgrep.

    Results stream from rg, are parsed into file/line/content records, and
    come back with highlight spans computed from your pattern.

    Args:
        pattern: Search pattern (regex by default)
        directory: Directory to search (default: $SEARCH_ROOT or current directory)
        case_sensitive: Case-sensitive search (default: False, i.e. rg -i)
        include_hidden: Also search hidden files (rg --hidden)
        use_regex: Regex pattern (rg -e) or fixed string (rg -F)
        max_results: Stop after this many matching lines (default: $MAX_RESULTS or 200)

    Returns:
        Dictionary with matches (file, line_number, line, spans), files,
        state ("completed", "errored", "cancelled") and notices.

    Examples:
        search_directory("timeout", "/srv/app")
        → {matches: [{file: "src/client.py", line_number: 12, ...}], ...}

        search_directory("a.b", "/srv/app", use_regex=False)
        → Matches the literal text "a.b"
    """
    return await handlers.search_directory(
        pattern=pattern,
        directory=directory,
        case_sensitive=case_sensitive,
        include_hidden=include_hidden,
        use_regex=use_regex,
        max_results=max_results
    )


@mcp.tool()
async def highlight_matches(
    content: str,
    pattern: str,
    case_sensitive: bool = False,
    use_regex: bool = True
) -> dict:
    """
    Compute highlight spans for a pattern in a line of text.

    Args:
        content: Text to highlight
        pattern: Search pattern; an invalid regex is matched literally
        case_sensitive: Case-sensitive matching (default: False)
        use_regex: Treat pattern as a regex (default: True)

    Returns:
        Dictionary with spans as [start, length] pairs
    """
    return await handlers.highlight_matches(
        content=content,
        pattern=pattern,
        case_sensitive=case_sensitive,
        use_regex=use_regex
    )


def main():
    """Main entry point for the MCP server."""
    global handlers

    parser = argparse.ArgumentParser(
        description="ripgrep-ux: streaming directory search as an MCP server."
    )
    parser.add_argument(
        "--transport",
        default="stdio",
        choices=["stdio", "streamable-http"],
        help="Transport method (default: stdio)"
    )
    parser.add_argument(
        "--rg-path",
        default=None,
        help="ripgrep executable (default: bundled rg, then PATH, or set RG_PATH env var)"
    )
    parser.add_argument(
        "--search-root",
        default=None,
        help="Default search directory (default: current directory, or set SEARCH_ROOT env var)"
    )
    args = parser.parse_args()

    # stdout belongs to the MCP stdio protocol; logs go to stderr
    configure_logging(logging.INFO)

    if args.search_root:
        os.environ["SEARCH_ROOT"] = args.search_root
    if args.rg_path:
        handlers = MCPHandlers(Container(rg_path=args.rg_path))

    # Run the server
    if args.transport == "streamable-http":
        logger.info(f"Starting ripgrep-ux on http://{config.get_host()}:{config.get_port()}")
        mcp.run(transport="streamable-http")
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
