#!/usr/bin/env python3
"""
CLI for ripgrep-ux - stream searches to the terminal, test tools without MCP

Usage:
  mcp-ripgrep-ux-cli list-tools                       # Show MCP tool definitions
  mcp-ripgrep-ux-cli search timeout                   # Search current directory (or $SEARCH_ROOT)
  mcp-ripgrep-ux-cli search timeout src --case-sensitive
  mcp-ripgrep-ux-cli search "a.b" . --fixed-strings   # Literal pattern (rg -F)
  mcp-ripgrep-ux-cli search TODO . --hidden --max 50  # Include hidden files, stop after 50
  mcp-ripgrep-ux-cli highlight foo "FooBar Foo"       # Show highlight spans

Results print as they arrive; Ctrl+C cancels the running search.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from . import config
from .container import Container
from .adapters.mcp import TOOL_SCHEMAS
from .core.domain import (
    MatchLine,
    PlainLine,
    SearchFinished,
    SearchNotice,
    SearchSpec,
    SessionState,
)
from .core.errors import InvalidSpecError
from .core.highlight import compute_spans
from .formatters import render_content, render_error, render_record
from .logging_setup import configure_logging

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CANCELLED = 130


def use_color(mode: str, stream=None) -> bool:
    """Resolve --color auto|always|never for a stream"""
    if mode == "always":
        return True
    if mode == "never":
        return False
    stream = stream or sys.stdout
    return hasattr(stream, "isatty") and stream.isatty()


async def list_tools_command() -> int:
    """Show MCP tool definitions"""
    print("=" * 80)
    print("MCP TOOL DEFINITIONS")
    print("=" * 80)
    print()

    for tool_schema in TOOL_SCHEMAS.values():
        print(f"Tool: {tool_schema['name']}")
        print()
        print("Description:")
        print(tool_schema['description'])
        print()
        print("Input Schema:")
        print(json.dumps(tool_schema['inputSchema'], indent=2))
        print()
        print("-" * 80)
        print()

    return EXIT_OK


async def search_command(
    container: Container,
    pattern: str,
    directory: str | None,
    case_sensitive: bool,
    include_hidden: bool,
    use_regex: bool,
    max_results: int | None,
    color: bool,
) -> int:
    """Stream a search to stdout, notices to stderr"""
    spec = SearchSpec(
        pattern=pattern,
        root_directory=Path(directory) if directory else config.get_search_root(),
        case_sensitive=case_sensitive,
        include_hidden=include_hidden,
        use_regex=use_regex
    )
    session = container.create_session()

    try:
        stream = await session.submit(spec)
    except InvalidSpecError as e:
        print(render_error(str(e), color), file=sys.stderr)
        return EXIT_ERROR

    print("Searching...", file=sys.stderr)
    count = 0
    truncated = False
    finished = None

    try:
        async for event in stream:
            if isinstance(event, (MatchLine, PlainLine)):
                if truncated:
                    continue
                print(render_record(event, pattern, case_sensitive, use_regex, color), flush=True)
                count += 1
                if max_results and count >= max_results:
                    truncated = True
                    await session.cancel()
            elif isinstance(event, SearchNotice):
                print(render_error(event.message, color), file=sys.stderr)
            elif isinstance(event, SearchFinished):
                finished = event
    finally:
        await session.close()

    if finished is None or finished.state == SessionState.ERRORED:
        print("Search error", file=sys.stderr)
        return EXIT_ERROR
    if finished.state == SessionState.CANCELLED and not truncated:
        print("Search cancelled", file=sys.stderr)
        return EXIT_CANCELLED

    suffix = f", stopped at --max {max_results}" if truncated else ""
    print(f"Search complete ({count} matches{suffix})", file=sys.stderr)
    return EXIT_OK


async def highlight_command(
    pattern: str,
    text: str,
    case_sensitive: bool,
    use_regex: bool,
    color: bool,
) -> int:
    """Print highlight spans for a line of text"""
    spans = compute_spans(text, pattern, case_sensitive, use_regex)
    print(render_content(text, spans, color=color))
    for span in spans:
        print(f"  {span.start:>4}+{span.length:<4} {text[span.start:span.end]}")
    return EXIT_OK


def main():
    parser = argparse.ArgumentParser(
        description="ripgrep-ux CLI - streaming directory search with highlighted matches"
    )
    parser.add_argument(
        "--rg-path",
        default=None,
        help="ripgrep executable (default: $RG_PATH, bundled rg, then PATH)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging on stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # list-tools command
    subparsers.add_parser("list-tools", help="Show MCP tool definitions")

    # search command
    search_parser = subparsers.add_parser("search", help="Search a directory tree")
    search_parser.add_argument("pattern", help="Search pattern (regex unless --fixed-strings)")
    search_parser.add_argument("directory", nargs="?", help="Directory to search (default: $SEARCH_ROOT or .)")
    search_parser.add_argument("--case-sensitive", action="store_true", help="Case-sensitive search")
    search_parser.add_argument("--hidden", action="store_true", help="Include hidden files")
    search_parser.add_argument("-F", "--fixed-strings", action="store_true", help="Treat pattern as a literal string")
    search_parser.add_argument("--max", type=int, default=None, help="Stop after N matching lines")
    search_parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Colorize output (default: auto)"
    )

    # highlight command
    highlight_parser = subparsers.add_parser("highlight", help="Show highlight spans for a line")
    highlight_parser.add_argument("pattern", help="Search pattern")
    highlight_parser.add_argument("text", help="Text to highlight")
    highlight_parser.add_argument("--case-sensitive", action="store_true", help="Case-sensitive matching")
    highlight_parser.add_argument("-F", "--fixed-strings", action="store_true", help="Treat pattern as a literal string")
    highlight_parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Colorize output (default: auto)"
    )

    args = parser.parse_args()

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    try:
        # Run command
        if args.command == "list-tools":
            return asyncio.run(list_tools_command())
        elif args.command == "search":
            try:
                container = Container(rg_path=args.rg_path)
            except ValueError as e:
                print(f"Error: {e}", file=sys.stderr)
                return EXIT_ERROR
            return asyncio.run(search_command(
                container=container,
                pattern=args.pattern,
                directory=args.directory,
                case_sensitive=args.case_sensitive,
                include_hidden=args.hidden,
                use_regex=not args.fixed_strings,
                max_results=args.max,
                color=use_color(args.color)
            ))
        elif args.command == "highlight":
            return asyncio.run(highlight_command(
                pattern=args.pattern,
                text=args.text,
                case_sensitive=args.case_sensitive,
                use_regex=not args.fixed_strings,
                color=use_color(args.color)
            ))
        else:
            parser.print_help()
            return EXIT_ERROR
    except KeyboardInterrupt:
        # asyncio.run cancels the search task; its finally block stopped rg
        print("Search cancelled", file=sys.stderr)
        return EXIT_CANCELLED


if __name__ == "__main__":
    sys.exit(main())
