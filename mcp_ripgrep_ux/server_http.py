#!/usr/bin/env python3
"""
ripgrep-ux MCP server over HTTP/SSE

Each SSE client gets its own MCP session; every search_directory call
runs rg in a fresh SearchSession, so concurrent clients never share a
process.

Run with: uvicorn mcp_ripgrep_ux.server_http:app --host 127.0.0.1 --port 5002

Configuration:
- PORT: Server port (default: 5002)
- HTTP_HOST: Bind host (default: 127.0.0.1)
- SEARCH_ROOT: Default search directory (default: working directory)
- RG_PATH: ripgrep executable (default: bundled rg, then PATH)
- RG_GRACE_PERIOD: Seconds before a cancelled rg is killed (default: 3.0)
"""

import json
import logging
import signal
import sys
from typing import Any, Callable

from mcp.server import Server
from mcp.server.sse import SseServerTransport
from mcp.types import TextContent, Tool
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Mount, Route

from . import __version__, config
from .container import Container
from .adapters.mcp import TOOL_SCHEMAS, MCPHandlers
from .formatters import format_highlight, format_search_results
from .logging_setup import configure_logging

configure_logging(logging.INFO)

logger = logging.getLogger(__name__)

container = Container()
handlers = MCPHandlers(container)

mcp_server = Server("ripgrep-ux-mcp")
sse_transport = SseServerTransport("/messages")

FORMATTERS: dict[str, Callable[[dict[str, Any]], str]] = {
    "search_directory": format_search_results,
    "highlight_matches": format_highlight,
}


@mcp_server.list_tools()  # type: ignore[misc,no-untyped-call]
async def list_tools() -> list[Tool]:
    """List available MCP tools"""
    return [Tool(**schema) for schema in TOOL_SCHEMAS.values()]


@mcp_server.call_tool()  # type: ignore[misc,no-untyped-call]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Run a tool and return its result as formatted text"""
    logger.info(f"{name}: {arguments}")

    try:
        result = await _dispatch_tool(name, arguments)
    except Exception as e:
        logger.error(f"{name} failed: {e}")
        raise

    if name == "search_directory" and result.get("success"):
        logger.info(
            f"{name}: {result['match_count']} matches in {len(result['files'])} files, "
            f"{result['state']} (exit code {result['exit_code']})"
        )

    formatter = FORMATTERS.get(name)
    text = formatter(result) if formatter else json.dumps(result, indent=2)
    return [TextContent(type="text", text=text)]


async def _dispatch_tool(name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    """Route a tool call to its handler. Raises ValueError for unknown tools."""
    if name == "search_directory":
        return await handlers.search_directory(
            pattern=arguments["pattern"],
            directory=arguments.get("directory"),
            case_sensitive=arguments.get("case_sensitive", False),
            include_hidden=arguments.get("include_hidden", False),
            use_regex=arguments.get("use_regex", True),
            max_results=arguments.get("max_results")
        )
    if name == "highlight_matches":
        return await handlers.highlight_matches(
            content=arguments["content"],
            pattern=arguments["pattern"],
            case_sensitive=arguments.get("case_sensitive", False),
            use_regex=arguments.get("use_regex", True)
        )
    raise ValueError(f"Unknown tool: {name}")


async def handle_ping(request: Request) -> Response:
    """Health check: version and the rg executable searches would use"""
    return JSONResponse({
        "status": "ok",
        "version": __version__,
        "rg": container.locator.locate(),
    })


async def handle_sse(request: Request) -> Response:
    """One MCP session per SSE connection"""
    peer = request.client.host if request.client else "unknown"
    logger.info(f"SSE client connected: {peer}")
    try:
        async with sse_transport.connect_sse(request.scope, request.receive, request._send) as (reader, writer):
            await mcp_server.run(reader, writer, mcp_server.create_initialization_options())
    finally:
        logger.info(f"SSE client disconnected: {peer}")
    return Response()


app = Starlette(
    debug=False,
    routes=[
        Route("/ping", handle_ping),
        Route("/sse", handle_sse),
        Mount("/messages", app=sse_transport.handle_post_message),
    ],
)


def handle_sigterm(signum, frame):
    """Exit cleanly on SIGTERM; uvicorn shutdown cancels in-flight searches"""
    logger.info("SIGTERM received, shutting down")
    sys.exit(0)


def main():
    import uvicorn

    signal.signal(signal.SIGTERM, handle_sigterm)
    host = config.get_host()
    port = config.get_port()
    logger.info(f"ripgrep-ux {__version__} on http://{host}:{port} (rg: {container.locator.locate()})")
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
